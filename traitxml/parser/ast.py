# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
IR for one trait declaration.

Nodes are frozen dataclasses created when their owning tag section closes.
Leaves keep the source tokens (so diagnostics and rendering can recover
spelling and location); opaque spans (types, paths, expressions, patterns,
bodies) are kept as token tuples and never interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Optional, Tuple, Union

from traitxml.lexer.tokens import Token, TokenSpan, render_span


# --- bounds -------------------------------------------------------------------


@dataclass(frozen=True)
class TraitBound:
	"""`Path` or `?Path` used as a bound or supertrait requirement."""

	path: TokenSpan
	relaxed: bool = False


@dataclass(frozen=True)
class LifetimeBound:
	lifetime: Token


@dataclass(frozen=True)
class ForBound:
	"""Higher-rank bound: `for<'a, 'b> Path`."""

	lifetimes: Tuple[Token, ...]
	bound: TraitBound


Bound = Union[TraitBound, LifetimeBound, ForBound]

# Supertrait requirements share the trait-bound shape.
Requirement = TraitBound


# --- generic parameters -------------------------------------------------------


@dataclass(frozen=True)
class LifetimeParam:
	name: Token
	bounds: Tuple[Token, ...] = ()


@dataclass(frozen=True)
class TypeParam:
	name: Token
	bounds: Tuple[Bound, ...] = ()


@dataclass(frozen=True)
class ConstParam:
	name: Token
	type: TokenSpan


GenericParam = Union[LifetimeParam, TypeParam, ConstParam]


@dataclass(frozen=True)
class BoundsSection:
	"""
	Fragment produced by `<bounds>` / `<gparams>`.

	`params` is already flattened in emission order (lifetimes, types, consts).
	"""

	params: Tuple[GenericParam, ...] = ()
	requirements: Tuple[Requirement, ...] = ()


# --- where clauses ------------------------------------------------------------


@dataclass(frozen=True)
class LifetimeClause:
	lifetime: Token
	bounds: Tuple[Token, ...]


@dataclass(frozen=True)
class TypeClause:
	type: TokenSpan
	bounds: Tuple[Bound, ...] = ()


@dataclass(frozen=True)
class ForClause:
	lifetimes: Tuple[Token, ...]
	clause: TypeClause


WhereClause = Union[LifetimeClause, TypeClause, ForClause]


# --- associated items ---------------------------------------------------------


@dataclass(frozen=True)
class AssocType:
	name: Token
	params: Tuple[GenericParam, ...] = ()
	bounds: Tuple[Requirement, ...] = ()
	where: Tuple[WhereClause, ...] = ()


@dataclass(frozen=True)
class AssocConst:
	name: Token
	type: TokenSpan
	default: Optional[TokenSpan] = None


@dataclass(frozen=True)
class FnParam:
	"""`arg: Type` where `arg` is an identifier or (with `is_pattern`) a pattern."""

	arg: TokenSpan
	type: TokenSpan
	is_pattern: bool = False


@dataclass(frozen=True)
class FnQualifiers:
	unsafe: bool = False
	abi: Optional[Token] = None


@dataclass(frozen=True)
class AssocFn:
	name: Token
	qualifiers: FnQualifiers = field(default_factory=FnQualifiers)
	params: Tuple[GenericParam, ...] = ()
	args: Tuple[FnParam, ...] = ()
	ret: Optional[TokenSpan] = None
	where: Tuple[WhereClause, ...] = ()
	# None: required method. A (possibly empty) span: default implementation.
	body: Optional[TokenSpan] = None

	@property
	def is_required(self) -> bool:
		return self.body is None


# --- root ---------------------------------------------------------------------


@dataclass(frozen=True)
class TraitDecl:
	name: Token
	vis: Optional[TokenSpan] = None
	unsafe: bool = False
	params: Tuple[GenericParam, ...] = ()
	requirements: Tuple[Requirement, ...] = ()
	where: Tuple[WhereClause, ...] = ()
	types: Tuple[AssocType, ...] = ()
	consts: Tuple[AssocConst, ...] = ()
	fns: Tuple[AssocFn, ...] = ()


# Fields holding one opaque source span (as opposed to lists of items).
_SPAN_FIELDS = frozenset({"vis", "path", "type", "default", "arg", "ret", "body"})


def ir_to_json(node: Any, *, _field: Optional[str] = None) -> Any:
	"""
	Convert an IR node into plain JSON-able data.

	Tokens become their text, opaque token spans become rendered source text,
	and every dataclass becomes a dict tagged with its class name under `node`.
	"""
	if isinstance(node, Token):
		return node.text
	if is_dataclass(node):
		out: dict[str, Any] = {"node": type(node).__name__}
		for f in fields(node):
			out[f.name] = ir_to_json(getattr(node, f.name), _field=f.name)
		return out
	if isinstance(node, tuple):
		if _field in _SPAN_FIELDS:
			return render_span(node)
		return [ir_to_json(item) for item in node]
	return node


__all__ = [
	"TraitBound",
	"LifetimeBound",
	"ForBound",
	"Bound",
	"Requirement",
	"LifetimeParam",
	"TypeParam",
	"ConstParam",
	"GenericParam",
	"BoundsSection",
	"LifetimeClause",
	"TypeClause",
	"ForClause",
	"WhereClause",
	"AssocType",
	"AssocConst",
	"FnParam",
	"FnQualifiers",
	"AssocFn",
	"TraitDecl",
	"ir_to_json",
]
