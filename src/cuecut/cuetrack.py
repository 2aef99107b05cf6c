# -*- coding: utf-8

import itertools
import collections
import re
import os
import subprocess
from . import util


class ExternalProcessFailure(Exception):
	"""FFmpeg exited with a non-zero status or could not be started."""

	def __init__(self, cmd, returncode=None, reason=None, output=None):
		self.cmd = cmd
		self.returncode = returncode
		self.output = output
		if returncode is None:
			message = 'Could not run {!r}: {}'.format(cmd[0], reason)
		else:
			message = 'Command {!r} failed with exit code {:d}'.format(
				' '.join(cmd), returncode)
		super().__init__(message)


class StartTime(collections.namedtuple('StartTime', ('minutes', 'seconds', 'frames'))):

	__slots__ = ()


	def __str__(self):
		hours, minutes = divmod(self.minutes, 60)
		return '{:02d}:{:02d}:{:02d}.{:02d}'.format(
			hours, minutes, self.seconds, self.frames)


	def cue_format(self):
		return '{:02d}:{:02d}:{:02d}'.format(*self)


StartTime.ZERO = StartTime(0, 0, 0)


TIMESTAMP_PATTERN = re.compile(r'\d+:[0-5]\d:\d\d')
_timestamp_prefix = re.compile(r'(\d+)(?::(\d{1,2})(?::(\d{1,2}))?)?')


def new_time(s):
	"""
	Parse a cue sheet timestamp of the form MM:SS:FF.

	Trailing characters are ignored. Fields that cannot be read are left at
	zero, so this never fails.
	"""
	match = _timestamp_prefix.match(s.lstrip())
	if match is None:
		return StartTime.ZERO
	return StartTime(*(int(field) if field else 0 for field in match.groups()))


class Track:

	FILENAME_FORMAT = '{number:d}. {title}'

	FILENAME_FILTERS = {
			'minimal': util.str_maketrans(
				'/' + os.sep + (os.altsep or ''), '-', '\u0000'),
			'full': util.str_maketrans(
				'"<>:/\\|*' + os.sep + (os.altsep or ''), '\'-', '?')
		}
	FILENAME_FILTERS['full'].update(zip(range(32), itertools.repeat(None)))
	FILENAME_FILTERS['windows'] = FILENAME_FILTERS['full']
	FILENAME_FILTERS['posix'] = FILENAME_FILTERS['minimal']


	def __init__(self, number, title='', artist='', start_time=StartTime.ZERO):
		self.number = number
		self.title = title
		self.artist = artist
		self.start_time = start_time


	def __repr__(self):
		return 'Track({!r}, {!r}, {!r}, {!r})'.format(
			self.number, self.title, self.artist, self.start_time)


	def output_name(self, filename_format=FILENAME_FORMAT + '.flac',
		translation=FILENAME_FILTERS['minimal']
	):
		return filename_format.format(
			number=self.number, title=self.title.translate(translation))


	def get_metadata(self, album_metadata):
		metadata = album_metadata.copy() if album_metadata else {}

		metadata['TRACKNUMBER'] = self.number
		if self.title:
			metadata['TITLE'] = self.title
		if self.artist:
			metadata['ARTIST'] = self.artist
		else:
			artist = metadata.get('ALBUMARTIST')
			if artist:
				metadata['ARTIST'] = artist

		return metadata


	def convert(self, source, filename, end, options, album_metadata=None):
		"""
		Cut the segment from this track's start time up to `end` out of
		`source` into `filename`.

		An `end` of None means the segment runs to the end of the stream.
		Returns the FFmpeg command line, whether it ran or not.
		"""
		cmd = list(options.ffmpeg_cmd)
		cmd += ('-n', '-ss', str(self.start_time))
		if end is not None:
			cmd += ('-to', str(end))
		cmd += ('-i', source)

		if album_metadata is not None:
			cmd += metadata_to_ffmpeg_args(self.get_metadata(album_metadata))
		cmd += options.ffmpeg_args

		if not options.dry_run:
			util.make_parent_dirs(filename, exist_ok=True)
		cmd.append(filename)

		for action in options.actions():
			action(cmd)
		return cmd


def convert_action_call(cmd, echo_output=False):
	try:
		result = subprocess.run(cmd, stdin=subprocess.DEVNULL,
			stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
			universal_newlines=True, errors='replace')
	except OSError as ex:
		raise ExternalProcessFailure(cmd, reason=ex) from ex

	if echo_output:
		print(result.stdout)
	if result.returncode != 0:
		raise ExternalProcessFailure(cmd, result.returncode, output=result.stdout)


def convert_action_print(cmd):
	print('Running:', *map(repr, cmd))


def metadata_to_ffmpeg_args(metadata):
	return itertools.chain.from_iterable(zip(
		itertools.repeat('-metadata'),
		itertools.starmap('{}={}'.format, metadata.items())))
