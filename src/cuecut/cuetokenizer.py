# -*- coding: utf-8

import re


class CueSheetTokenizer:

	token_pattern = re.compile(r'"([^"]*)"?|([^\s"]+)')


	def __init__(self, readline):
		self.readline = readline
		self.line_count = 0
		self.line = None
		self.text = None


	def next_line(self):
		"""Advance to the next non-blank line; returns None at the end."""
		line = None
		while not line:
			self.line_count += 1
			line = self.readline()
			if line:
				self.text = line.strip()
				line = self.tokenize(line)
			else:
				line = None
				break

		self.line = line
		return line


	def rest(self, start):
		"""Join the tokens from position `start` onwards with single spaces."""
		return ' '.join(self.line[start:])


	def quoted(self):
		"""
		Return the raw text between the first and the last double quote of
		the current line, or None if the line has no quote.

		Quotes inside the value are kept; an unterminated quote runs to the
		end of the line.
		"""
		first = self.text.find('"')
		if first < 0:
			return None
		last = self.text.rfind('"')
		if last == first:
			return self.text[first + 1:]
		return self.text[first + 1:last]


	@classmethod
	def tokenize(cls, s):
		s = s.strip()
		if not s:
			return ()

		# the command keyword is everything up to the first whitespace
		command = s.split(None, 1)
		tokens = command[:1]

		if len(command) > 1:
			for match in cls.token_pattern.finditer(command[1]):
				quoted, bare = match.groups()
				tokens.append(quoted if quoted is not None else bare)

		return tokens
