# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TDL lexer built on lark's basic lexer.

This is the token-stream collaborator for the grammar parser: it turns raw
TDL text into `Token`s (identifiers, lifetimes, literals, punctuation and tag
markers) and never interprets tags itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lark import Lark, Token as LarkToken
from lark.exceptions import UnexpectedInput

from traitxml.core.errors import StructuralError
from traitxml.core.span import Span

from .tokens import Token, TokenKind

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_LEXER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
)

_KIND_BY_TERMINAL = {
	"EMPTY_TAG": TokenKind.EMPTY_TAG,
	"CLOSE_TAG": TokenKind.CLOSE_TAG,
	"OPEN_TAG": TokenKind.OPEN_TAG,
	"STRING": TokenKind.STRING,
	"CHAR": TokenKind.CHAR,
	"LIFETIME": TokenKind.LIFETIME,
	"NUMBER": TokenKind.NUMBER,
	"IDENT": TokenKind.IDENT,
	"PUNCT": TokenKind.PUNCT,
}


def _convert(tok: LarkToken, *, spaced: bool, file: Optional[str]) -> Token:
	return Token(
		kind=_KIND_BY_TERMINAL[tok.type],
		text=str(tok),
		spaced=spaced,
		span=Span.from_loc(tok, file=file),
	)


def tokenize(source: str, *, file: Optional[str] = None) -> List[Token]:
	"""
	Lex TDL text into a list of tokens.

	Raises StructuralError when the text contains a character that does not
	start any token (e.g. a stray backtick or an unterminated string).
	"""
	out: List[Token] = []
	prev_end: Optional[int] = None
	try:
		for tok in _LEXER.lex(source):
			start = tok.start_pos
			spaced = prev_end is not None and start is not None and start > prev_end
			out.append(_convert(tok, spaced=spaced, file=file))
			prev_end = tok.end_pos
	except UnexpectedInput as err:
		char = getattr(err, "char", None)
		what = f"unexpected character `{char}`" if char else "unrecognized input"
		raise StructuralError(
			f"error lexing input: {what}",
			rule="lexer",
			span=Span.from_loc(err, file=file),
		) from err
	return out


__all__ = ["tokenize"]
