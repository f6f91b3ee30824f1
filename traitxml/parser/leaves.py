# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Leaf productions.

Two families:
- strict leaves (identifier, lifetime, visibility, ABI literal) must reduce
  to a known token shape and report malformed input themselves;
- opaque spans (types, paths, expressions, patterns, bodies) are accepted
  as written and left for the Rust compiler to judge once the generated
  declaration is compiled.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from traitxml.lexer.tokens import Token, TokenKind, TokenSpan

from .ast import TraitBound
from .machine import Continuation, SpanLeaf, register

_RESTRICTED_VIS = frozenset({"crate", "self", "super"})


class _SingleTokenLeaf(SpanLeaf):
	"""A leaf that must hold exactly one token of `expected` kind."""

	expected: ClassVar[TokenKind]
	expected_label: ClassVar[str]

	def build(self, span: TokenSpan, close: Token, k: Optional[Continuation]) -> Token:
		first = span[0]
		if first.kind is not self.expected:
			self.fail_malformed(f"expected {self.expected_label}, found `{first.text}`", first, k)
		if len(span) > 1:
			self.fail_malformed(f"expected `</{self.close_tag}>`, found `{span[1].text}`", span[1], k)
		return first

	@property
	def empty_message(self) -> str:  # type: ignore[override]
		return f"expected {self.expected_label}, found `</{self.close_tag}>`"


class NameLeaf(_SingleTokenLeaf):
	"""`<name>Ident</name>`: a plain identifier."""

	id = "name"
	rule = "name"
	close_tag = "name"
	expected = TokenKind.IDENT
	expected_label = "identifier"


class LifetimeLeaf(_SingleTokenLeaf):
	"""`<lifetime>'a</lifetime>` as used by `for` bounds/clauses and lifetime clauses."""

	id = "lifetime"
	rule = "lifetime"
	close_tag = "lifetime"
	expected = TokenKind.LIFETIME
	expected_label = "lifetime"


class LifetimeNameLeaf(LifetimeLeaf):
	"""`<name>'a</name>` inside a lifetime parameter."""

	id = "lifetime-name"
	rule = "lifetime parameter name"
	close_tag = "name"


class LifetimeBoundLeaf(LifetimeLeaf):
	id = "lifetime-bound"
	rule = "lifetime bound"
	close_tag = "lifetime-bound"


class AbiLeaf(_SingleTokenLeaf):
	"""`<extern>"C"</extern>`: the ABI string of an `extern` qualifier."""

	id = "extern"
	rule = "associated function `extern` qualifier"
	close_tag = "extern"
	expected = TokenKind.STRING
	expected_label = "string literal"


class VisLeaf(SpanLeaf):
	"""
	`<vis>...</vis>`: `pub`, `pub(crate)`, `pub(self)`, `pub(super)` or
	`pub(in path)`.
	"""

	id = "vis"
	rule = "visibility"
	close_tag = "vis"
	empty_message = "empty input"

	def build(self, span: TokenSpan, close: Token, k: Optional[Continuation]) -> TokenSpan:
		head = span[0]
		if head.kind is not TokenKind.IDENT or head.text != "pub":
			self.fail_malformed(f"start of invalid visibility specifier `{head.text}`", head, k)
		if len(span) == 1:
			return span
		texts = [tok.text for tok in span]
		if texts[1] != "(" or texts[-1] != ")":
			self.fail_malformed(f"invalid visibility specifier, unexpected `{span[1].text}` after `pub`", span[1], k)
		inner = span[2:-1]
		if len(inner) == 1 and inner[0].text in _RESTRICTED_VIS:
			return span
		if len(inner) >= 2 and inner[0].text == "in":
			return span
		bad = inner[0] if inner else span[-1]
		self.fail_malformed(f"invalid visibility restriction `{bad.text}`", bad, k)


class TypeLeaf(SpanLeaf):
	id = "type"
	rule = "type"
	close_tag = "type"
	empty_message = "empty type tags"


class RetLeaf(SpanLeaf):
	id = "ret"
	rule = "associated function return type"
	close_tag = "ret"
	empty_message = "empty return type"


class DefaultValueLeaf(SpanLeaf):
	id = "default-value"
	rule = "associated constant default value"
	close_tag = "default-value"
	empty_message = "empty expression between tags"


class PatLeaf(SpanLeaf):
	id = "pat"
	rule = "associated function parameter pattern"
	close_tag = "pat"
	empty_message = "empty pattern"


class BodyLeaf(SpanLeaf):
	"""`<rust>...</rust>`: default method body, copied verbatim (may be empty)."""

	id = "rust"
	rule = "associated function default definition"
	close_tag = "rust"
	allow_empty = True


class _PathLeaf(SpanLeaf):
	"""A trait path, optionally relaxed with a leading `?` (`?Sized`)."""

	empty_message = "empty path"

	def build(self, span: TokenSpan, close: Token, k: Optional[Continuation]) -> Any:
		if span[0].kind is TokenKind.PUNCT and span[0].text == "?":
			if len(span) == 1:
				self.fail_malformed("empty path after `?`", span[0], k)
			return TraitBound(path=span[1:], relaxed=True)
		return TraitBound(path=span)


class SupertraitLeaf(_PathLeaf):
	id = "req"
	rule = "supertrait"
	close_tag = "req"


class TypeBoundLeaf(_PathLeaf):
	id = "type-bound"
	rule = "type bound"
	close_tag = "type-bound"


for _leaf in (
	NameLeaf,
	LifetimeLeaf,
	LifetimeNameLeaf,
	LifetimeBoundLeaf,
	AbiLeaf,
	VisLeaf,
	TypeLeaf,
	RetLeaf,
	DefaultValueLeaf,
	PatLeaf,
	BodyLeaf,
	SupertraitLeaf,
	TypeBoundLeaf,
):
	register(_leaf())
