# -*- coding: utf-8

import functools
import os
from . import util
from .cuetrack import Track, convert_action_call, convert_action_print
from .util import FFMPEG


class Options:
	"""
	Settings for one extraction run.

	show_args prints every FFmpeg command line before it runs, dry_run skips
	running it and verbose_output prints what FFmpeg wrote to stdout and
	stderr. None of them changes which segments are cut.
	"""

	def __init__(self, show_args=False, dry_run=False, verbose_output=False,
		extension='flac', filename_prefix=None, format_filter='minimal',
		ffmpeg_cmd=FFMPEG, ffmpeg_args=(), tags=False, strict=False
	):
		if format_filter not in Track.FILENAME_FILTERS:
			raise ValueError('Unknown format filter: ' + repr(format_filter))

		self.show_args = show_args
		self.dry_run = dry_run
		self.verbose_output = verbose_output
		self.extension = extension
		self.filename_prefix = filename_prefix
		self.format_filter = format_filter
		self.ffmpeg_cmd = tuple(ffmpeg_cmd)
		self.ffmpeg_args = tuple(ffmpeg_args)
		self.tags = tags
		self.strict = strict


	@property
	def filename_format(self):
		filename_format = Track.FILENAME_FORMAT
		if self.extension:
			filename_format += os.extsep + util.escape_format(self.extension)
		if self.filename_prefix:
			filename_format = os.path.join(
				util.escape_format(self.filename_prefix), filename_format)
		return filename_format


	@property
	def translation(self):
		return Track.FILENAME_FILTERS[self.format_filter]


	def actions(self):
		actions = []
		if self.show_args:
			actions.append(convert_action_print)
		if not self.dry_run:
			actions.append(functools.partial(
				convert_action_call, echo_output=self.verbose_output))
		return actions
