# -*- coding: utf-8

import io
import re
import sys
import collections
import os.path
from . import util
from .cuetrack import Track, TIMESTAMP_PATTERN, new_time
from .cuetokenizer import CueSheetTokenizer


class MalformedInput(ValueError):

	def __init__(self, line_number, message):
		super().__init__('Line {:d}: {}'.format(line_number, message))
		self.line_number = line_number


Segment = collections.namedtuple('Segment', ('track', 'start', 'end'))


class Album:

	def __init__(self, name='', artist='', genre='', release_year=None,
		source_file='', directory=''
	):
		self.name = name
		self.artist = artist
		self.genre = genre
		self.release_year = release_year
		self.source_file = source_file
		self.directory = directory
		self.tracks = []


	@property
	def track_count(self):
		return len(self.tracks)


	@property
	def source_path(self):
		if self.directory:
			return os.path.join(self.directory, self.source_file)
		return self.source_file


	def get_metadata(self):
		metadata = {}

		if self.name:
			metadata['ALBUM'] = self.name
		if self.artist:
			metadata['ALBUMARTIST'] = self.artist
		if self.genre:
			metadata['GENRE'] = self.genre
		if self.release_year:
			metadata['DATE'] = self.release_year
		if self.tracks:
			metadata['TRACKTOTAL'] = len(self.tracks)

		return metadata


	def read(self, src, directory='', strict=False):
		"""
		Populate this album from a cue sheet text stream.

		Problems with the sheet's structure are reported on stderr and the
		affected field keeps its default, unless `strict` is set, in which
		case MalformedInput is raised instead.
		"""
		tok = CueSheetTokenizer(src.readline)
		self.directory = directory

		def complain(message):
			if strict:
				raise MalformedInput(tok.line_count, message)
			print('Line {:d}: {}'.format(tok.line_count, message),
				file=sys.stderr)

		current_track = None
		numbers = set()
		while tok.next_line() is not None:
			command = tok.line[0]

			if command == 'FILE':
				if len(tok.line) < 2:
					complain('FILE command without a file name')
				else:
					source_file = tok.quoted()
					if source_file is None:
						source_file = ' '.join(tok.line[1:-1]) or tok.line[1]
					self.source_file = source_file

			elif command == 'REM':
				if len(tok.line) >= 2 and tok.line[1] == 'GENRE':
					self.genre = tok.rest(2)
				elif len(tok.line) >= 2 and tok.line[1] == 'DATE':
					year = re.match(r'\d{4}', tok.rest(2))
					if year is None:
						complain('Invalid release year: {!r}'.format(tok.rest(2)))
						self.release_year = 0
					else:
						self.release_year = int(year.group())

			elif command == 'TRACK':
				try:
					number = int(tok.line[1])
				except (IndexError, ValueError):
					complain('TRACK command without a valid number')
					number = 0
				if number in numbers:
					complain('Duplicate track number {:d}'.format(number))
				numbers.add(number)
				current_track = Track(number)
				self.tracks.append(current_track)

			elif command in ('TITLE', 'PERFORMER'):
				value = tok.rest(1)
				if current_track is None:
					if command == 'TITLE':
						self.name = value
					else:
						self.artist = value
				elif command == 'TITLE':
					current_track.title = value
				else:
					current_track.artist = value

			elif command == 'INDEX':
				if current_track is None:
					complain('No TRACK for INDEX command')
				elif len(tok.line) < 3:
					complain('INDEX command requires 2 parameters')
				else:
					try:
						index = int(tok.line[1])
					except ValueError:
						complain('INDEX command without a valid number')
						index = None
					if index == 1:
						if not TIMESTAMP_PATTERN.fullmatch(tok.line[2]):
							complain('Invalid timestamp: {!r}'.format(tok.line[2]))
						current_track.start_time = new_time(tok.line[2])

			elif command in ('FLAGS', 'ISRC', 'PREGAP', 'POSTGAP', 'CATALOG',
				'SONGWRITER', 'CDTEXTFILE'
			):
				pass

			else:
				print(
					'Line {}: Ignoring illegal command: {}'
						.format(tok.line_count, command),
					file=sys.stderr)

		if self.tracks and not self.source_file:
			complain('No FILE command for the tracks')

		return self


	def compute_segments(self):
		segments = []
		for i, track in enumerate(self.tracks):
			if i + 1 < len(self.tracks):
				end = self.tracks[i + 1].start_time
			else:
				end = None
			segments.append(Segment(track, track.start_time, end))
		return segments


	def extract(self, options):
		"""
		Cut the source file into one output file per track, in track order.

		Returns the list of FFmpeg command lines. The first failing command
		raises ExternalProcessFailure and stops the remaining tracks.
		"""
		album_metadata = self.get_metadata() if options.tags else None

		commands = []
		for i, segment in enumerate(self.compute_segments()):
			filename = segment.track.output_name(
				options.filename_format, options.translation)
			print('[{:d}] track {:d} > "{}"'.format(
				i, segment.track.number, filename))
			commands.append(segment.track.convert(
				self.source_path, filename, segment.end, options, album_metadata))
		return commands


	def describe(self, file=None):
		print('FILE:', self.source_file, file=file)
		print('TITLE:', self.name, file=file)
		print('ARTIST:', self.artist, file=file)
		print('GENRE:', self.genre, file=file)
		print('DATE:', '' if self.release_year is None else self.release_year,
			file=file)
		print('TRACKS ({:d}):'.format(self.track_count), file=file)

		for track in self.tracks:
			print('    [{:d}] {} - {} [{}]'.format(
				track.number, track.title, track.artist,
				track.start_time.cue_format()),
				file=file)


def parse(path, encoding=None, strict=False):
	"""
	Parse the cue sheet at `path` ("-" for standard input) into an Album.

	Raises OSError if the file cannot be read.
	"""
	directory = os.path.dirname(path) if path != '-' else ''
	with io.StringIO(util.read_text(path, encoding)) as src:
		return Album().read(src, directory, strict)
