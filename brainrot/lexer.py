"""
A pull-based scanner for Brainrot source text.

Each call to `next_token` scans exactly one token from the current position.
Nothing is buffered ahead, and one character of lookahead settles every
question the scanner has to answer. Once the text runs out, the scanner
keeps handing back the same end-of-input token for as long as you ask.
"""
from typing import NamedTuple, Iterator
import string

# Token kinds. Punctuation and operators are their own spelling.
ILLEGAL = "ILLEGAL"
EOF = "EOF"

IDENT = "IDENT"
INT = "INT"
STRING = "STRING"

ASSIGN = "="
PLUS = "+"
MINUS = "-"
BANG = "!"
ASTERISK = "*"
SLASH = "/"
LT = "<"
GT = ">"
EQ = "=="
NOT_EQ = "!="

COMMA = ","
SEMICOLON = ";"
COLON = ":"
LPAREN = "("
RPAREN = ")"
LBRACE = "{"
RBRACE = "}"
LBRACKET = "["
RBRACKET = "]"

YEET = "YEET"
SLAY = "SLAY"
FR = "FR"
SUS = "SUS"
VIBE = "VIBE"
BASED = "BASED"
CAP = "CAP"

KEYWORDS = {
	"yeet": YEET,
	"slay": SLAY,
	"fr": FR,
	"sus": SUS,
	"vibe": VIBE,
	"based": BASED,
	"cap": CAP,
}

# Tried before the one-character table, so "==" never scans as "=" "=".
TWO_CHARACTER = {
	"==": EQ,
	"!=": NOT_EQ,
}

ONE_CHARACTER = {
	c: c for c in (
		ASSIGN, PLUS, MINUS, BANG, ASTERISK, SLASH, LT, GT,
		COMMA, SEMICOLON, COLON, LPAREN, RPAREN, LBRACE, RBRACE, LBRACKET, RBRACKET,
	)
}

_WHITESPACE = frozenset(" \t\r\n")
_LETTERS = frozenset(string.ascii_letters + "_")
_DIGITS = frozenset(string.digits)
_WORD = _LETTERS | _DIGITS
QUOTE = '"'


class Token(NamedTuple):
	kind: str
	literal: str
	offset: int  # Where in the text this token begins; for diagnostics.


class Lexer:
	def __init__(self, text: str):
		self._text = text
		self._pos = 0
	
	def _peek(self, ahead=0) -> str:
		index = self._pos + ahead
		return self._text[index] if index < len(self._text) else ""
	
	def _take_while(self, allowed: frozenset) -> str:
		start = self._pos
		while self._peek() in allowed:
			self._pos += 1
		return self._text[start:self._pos]
	
	def next_token(self) -> Token:
		self._take_while(_WHITESPACE)
		start = self._pos
		ch = self._peek()
		if not ch:
			return Token(EOF, "", start)
		if ch in _LETTERS:
			word = self._take_while(_WORD)
			return Token(KEYWORDS.get(word, IDENT), word, start)
		if ch in _DIGITS:
			return Token(INT, self._take_while(_DIGITS), start)
		if ch == QUOTE:
			return Token(STRING, self._read_string(), start)
		pair = ch + self._peek(1)
		if pair in TWO_CHARACTER:
			self._pos += 2
			return Token(TWO_CHARACTER[pair], pair, start)
		self._pos += 1
		return Token(ONE_CHARACTER.get(ch, ILLEGAL), ch, start)
	
	def _read_string(self) -> str:
		""" No escapes. An unterminated string runs to the end of the text. """
		self._pos += 1
		end = self._text.find(QUOTE, self._pos)
		if end < 0:
			end = len(self._text)
		content = self._text[self._pos:end]
		self._pos = min(end + 1, len(self._text))
		return content
	
	def __iter__(self) -> Iterator[Token]:
		""" Every token up to, but not including, the end of input. """
		while True:
			token = self.next_token()
			if token.kind == EOF:
				return
			yield token
