# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generic token model consumed by the TDL grammar parser.

Tokens are immutable and compare by kind + text only: location and spacing
are presentation details that never influence parsing decisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from traitxml.core.span import Span


class TokenKind(Enum):
	IDENT = "ident"
	LIFETIME = "lifetime"
	STRING = "string"
	CHAR = "char"
	NUMBER = "number"
	PUNCT = "punct"
	OPEN_TAG = "open_tag"
	CLOSE_TAG = "close_tag"
	EMPTY_TAG = "empty_tag"


TAG_KINDS = frozenset({TokenKind.OPEN_TAG, TokenKind.CLOSE_TAG, TokenKind.EMPTY_TAG})


@dataclass(frozen=True)
class Token:
	kind: TokenKind
	text: str
	# Whether whitespace (or a comment) preceded the token in the source.
	spaced: bool = field(default=True, compare=False)
	span: Span = field(default_factory=Span, compare=False)

	@property
	def tag(self) -> Optional[str]:
		"""Tag name for tag markers (`<name>` -> `name`), else None."""
		if self.kind is TokenKind.OPEN_TAG:
			return self.text[1:-1]
		if self.kind is TokenKind.CLOSE_TAG:
			return self.text[2:-1]
		if self.kind is TokenKind.EMPTY_TAG:
			return self.text[1:-2]
		return None

	@property
	def is_tag(self) -> bool:
		return self.kind in TAG_KINDS

	def opens(self, name: str) -> bool:
		return self.kind is TokenKind.OPEN_TAG and self.tag == name

	def closes(self, name: str) -> bool:
		return self.kind is TokenKind.CLOSE_TAG and self.tag == name

	def is_empty_tag(self, name: str) -> bool:
		return self.kind is TokenKind.EMPTY_TAG and self.tag == name

	def __str__(self) -> str:
		return self.text


TokenSpan = tuple[Token, ...]


def render_span(tokens: Iterable[Token]) -> str:
	"""
	Render a token span back to source text.

	Tokens that were separated by whitespace in the input get a single space;
	adjacent tokens stay glued, so `Vec<u8>` renders as written.
	"""
	out: list[str] = []
	for tok in tokens:
		if out and tok.spaced:
			out.append(" ")
		out.append(tok.text)
	return "".join(out)


def open_tag(name: str) -> Token:
	return Token(TokenKind.OPEN_TAG, f"<{name}>")


def close_tag(name: str) -> Token:
	return Token(TokenKind.CLOSE_TAG, f"</{name}>")


__all__ = [
	"TokenKind",
	"Token",
	"TokenSpan",
	"TAG_KINDS",
	"render_span",
	"open_tag",
	"close_tag",
]
