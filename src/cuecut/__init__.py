# -*- coding: utf-8

"""
Split an album image into one audio file per track with FFmpeg, based on a
cue sheet.
"""

from .util import FFMPEG
from .cuesheet import Album, MalformedInput, Segment, parse
from .cuetrack import ExternalProcessFailure, StartTime, Track, new_time
from .options import Options
