# -*- coding: utf-8

import sys
import argparse
import collections.abc
import cuecut
from . import cuesheet
from .cuesheet import MalformedInput
from .cuetrack import ExternalProcessFailure, Track
from .options import Options
from .util import FFMPEG


class AppendAndOverrideDefaulAction(argparse.Action):

	def __init__(self, option_strings, dest, **kwargs):
		if 'nargs' in kwargs:
			raise ValueError('nargs not allowed')
		super().__init__(option_strings, dest, **kwargs)


	def __call__(self, parser, namespace, value, option_string=None):
		attr = getattr(namespace, self.dest, None)
		if isinstance(attr, collections.abc.MutableSequence):
			attr.append(value)
		else:
			setattr(namespace, self.dest, [value])


def _make_parser():
	parser = argparse.ArgumentParser(prog='cuecut', description=cuecut.__doc__)
	parser.add_argument('cuesheet', metavar='CUE', nargs='?',
		help='Path to a cuesheet file; "-" reads from standard input')
	parser.add_argument('-a', '--show-args',
		action='store_true', default=False,
		help='Print the FFmpeg command line before running it.')
	parser.add_argument('-n', '--dry-run', '--simulate',
		action='store_true', default=False,
		help='Don\'t actually run FFmpeg.')
	parser.add_argument('-s', '--show-output', dest='verbose_output',
		action='store_true', default=False,
		help='Print the output of FFmpeg.')
	parser.add_argument('-t', '--tags',
		action='store_true', default=False,
		help='Write album and track metadata into the output files.')
	parser.add_argument('--strict',
		action='store_true', default=False,
		help='Abort on malformed cuesheet lines instead of skipping them.')
	parser.add_argument('-x', '--extension', default='flac',
		help='Output file name extension (default: flac)')
	parser.add_argument('-p', '--prefix', metavar='DIR',
		dest='filename_prefix',
		help='Adds a directory prefix to the output file name.')
	parser.add_argument('-F', '--format-filter', metavar='FILTER',
		choices=Track.FILENAME_FILTERS.keys(), default='minimal',
		help='Select with which character set to translate track titles in '
			'file names. "minimal" and "posix" will translate path separators '
			'only; "full" and "windows" will translate all characters '
			'prohibited in Windows semantics. (default: minimal)')
	p_enc = parser.add_mutually_exclusive_group()
	p_enc.add_argument('-w', '--windows', dest='cuesheet_encoding',
		action='store_const', const='windows-1252',
		help='Set the cuesheet character encoding to Windows-1252')
	p_enc.add_argument('-e', '--cuesheet-encoding', metavar='CHARSET',
		help='Cuesheet character encoding. (default: detected)')
	parser.add_argument('--ffmpeg-cmd', metavar='EXE',
		action=AppendAndOverrideDefaulAction, default=FFMPEG,
		help='FFmpeg base command; may be specified multiple times for additional '
			'arguments. (default: ffmpeg)')
	parser.add_argument('ffmpeg_args',
		nargs='*', default=[],
		help='Additional FFmpeg command-line arguments. You may need to separate '
			'these from cuecut\'s non-positional command-line arguments with "--" '
			'to avoid confusion.')
	return parser


def _parse_args(parser, argv):
	args, unknown_args = parser.parse_known_args(argv)

	if unknown_args:
		parser.error(
			'{1!s}\n\n'
			'Unrecognized command-line arguments: {2:s}.\n\n'
			'If you mean to have these passed to FFmpeg, you should add "--" '
			'between the non-positional and positional arguments. Call '
			'"{0:s} --help" for more usage information.'
				.format(parser.prog, sys.argv[1:] if argv is None else argv,
					', '.join(map(repr, unknown_args))))

	return args


def run_cmdline(argv=None):
	parser = _make_parser()
	args = _parse_args(parser, argv)

	if args.cuesheet is None:
		print('insufficient arguments given')
		parser.print_usage(sys.stdout)
		return

	options = Options(
		show_args=args.show_args, dry_run=args.dry_run,
		verbose_output=args.verbose_output, extension=args.extension,
		filename_prefix=args.filename_prefix, format_filter=args.format_filter,
		ffmpeg_cmd=args.ffmpeg_cmd, ffmpeg_args=args.ffmpeg_args,
		tags=args.tags, strict=args.strict)

	try:
		album = cuesheet.parse(
			args.cuesheet, args.cuesheet_encoding, options.strict)
	except (OSError, LookupError, MalformedInput) as ex:
		sys.exit('Error: {}'.format(ex))

	if not album.tracks:
		sys.exit('Error: No tracks to convert!')

	album.describe()
	print('extracting...')
	try:
		album.extract(options)
	except ExternalProcessFailure as ex:
		sys.exit('Error: {}'.format(ex))


if __name__ == '__main__':
	run_cmdline()
