# -*- coding: utf-8

import itertools
import re
import sys
import os.path
import codecs
import locale
import chardet


FFMPEG = ('ffmpeg',)


def str_maketrans(_from, to, delete=''):
	m = dict(zip(
		map(ord, _from),
		itertools.chain(map(ord, to), itertools.repeat(ord(to[-1])))))
	for c in delete:
		m[ord(c)] = None
	return str.maketrans(m)


def escape_format(s):
	return re.sub(r"[{}]", r"\g<0>\g<0>", s)


def make_parent_dirs(path, **kwargs):
	dirname = os.path.dirname(path)
	if dirname:
		os.makedirs(os.path.abspath(dirname), **kwargs)


BOM_ENCODING_MAP = {
		codecs.BOM_UTF8: 'utf-8-sig',
		codecs.BOM_UTF32_LE: 'utf-32',
		codecs.BOM_UTF32_BE: 'utf-32',
		codecs.BOM_UTF16_LE: 'utf-16',
		codecs.BOM_UTF16_BE: 'utf-16',
	}


def detect_bom(bytes):
	# UTF-32-LE starts with the UTF-16-LE mark, so try longer marks first
	for bom in sorted(BOM_ENCODING_MAP, key=len, reverse=True):
		if bytes.startswith(bom):
			return bom
	return b''


def detect_encoding(raw):
	"""
	Guess the character encoding of a cue sheet from its raw bytes.

	A byte-order mark wins; otherwise chardet gets a try and the locale's
	preferred encoding is the last resort.
	"""
	bom = detect_bom(raw)
	if bom:
		return BOM_ENCODING_MAP[bom]

	if raw:
		result = chardet.detect(raw)
		if result and result.get('encoding'):
			return result['encoding']

	return locale.getpreferredencoding(False)


def read_text(path, encoding=None):
	"""Read a whole text file, or standard input for "-", and decode it."""
	if path == '-':
		f = sys.stdin
		if f is None or f.closed:
			raise IOError('stdin is unavailable or closed')
		raw = f.buffer.read()
	else:
		with open(path, 'rb') as f:
			raw = f.read()

	if not encoding:
		encoding = detect_encoding(raw)
	elif encoding.replace('-', '_').lower() in ('utf_8', 'utf8'):
		encoding = 'utf-8-sig'

	return raw.decode(encoding, 'replace')
