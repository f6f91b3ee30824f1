# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rust declaration printer for the trait IR.

Pure structural recursion: every node already passed validation when its
section closed, so nothing here can fail on a `TraitDecl` produced by the
parser.

Layout:

	pub unsafe trait Foo<'a: 'b, T: Bar + 'a, const N: usize>: Baz + ?Sized
	where
		T: Copy,
	{
		type Item<'b>: Clone;
		const MAX: usize = 10;
		fn bar(self: &Self) -> u8;
		unsafe extern "C" fn baz(x: u8) {
			x;
		}
	}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from traitxml.lexer.tokens import Token, render_span
from traitxml.parser.ast import (
	AssocConst,
	AssocFn,
	AssocType,
	Bound,
	ConstParam,
	FnParam,
	ForBound,
	ForClause,
	GenericParam,
	LifetimeBound,
	LifetimeClause,
	LifetimeParam,
	TraitBound,
	TraitDecl,
	TypeClause,
	TypeParam,
	WhereClause,
)


@dataclass(frozen=True)
class RenderOptions:
	"""Output formatting knobs for `render_trait`."""

	indent: str = "    "
	trailing_newline: bool = True

	@classmethod
	def from_width(cls, width: int = 4, *, tabs: bool = False, trailing_newline: bool = True) -> "RenderOptions":
		if width < 0:
			raise ValueError(f"indent width must be non-negative, got {width}")
		return cls(indent="\t" if tabs else " " * width, trailing_newline=trailing_newline)


def _lifetimes(lifetimes: Iterable[Token]) -> str:
	return ", ".join(lt.text for lt in lifetimes)


def format_bound(bound: Bound) -> str:
	if isinstance(bound, TraitBound):
		path = render_span(bound.path)
		return f"?{path}" if bound.relaxed else path
	if isinstance(bound, LifetimeBound):
		return bound.lifetime.text
	if isinstance(bound, ForBound):
		return f"for<{_lifetimes(bound.lifetimes)}> {format_bound(bound.bound)}"
	raise TypeError(f"unsupported bound node {type(bound).__name__}")


def format_bounds(bounds: Sequence[Bound]) -> str:
	return " + ".join(format_bound(b) for b in bounds)


def format_generic_param(param: GenericParam) -> str:
	if isinstance(param, LifetimeParam):
		if param.bounds:
			return f"{param.name.text}: {' + '.join(lt.text for lt in param.bounds)}"
		return param.name.text
	if isinstance(param, TypeParam):
		if param.bounds:
			return f"{param.name.text}: {format_bounds(param.bounds)}"
		return param.name.text
	if isinstance(param, ConstParam):
		return f"const {param.name.text}: {render_span(param.type)}"
	raise TypeError(f"unsupported generic parameter node {type(param).__name__}")


def format_generics(params: Sequence[GenericParam]) -> str:
	"""`<...>` list, or the empty string when there are no parameters."""
	if not params:
		return ""
	return "<" + ", ".join(format_generic_param(p) for p in params) + ">"


def format_where_clause(clause: WhereClause) -> str:
	if isinstance(clause, LifetimeClause):
		return f"{clause.lifetime.text}: {' + '.join(lt.text for lt in clause.bounds)}"
	if isinstance(clause, TypeClause):
		ty = render_span(clause.type)
		if not clause.bounds:
			return f"{ty}:"
		return f"{ty}: {format_bounds(clause.bounds)}"
	if isinstance(clause, ForClause):
		return f"for<{_lifetimes(clause.lifetimes)}> {format_where_clause(clause.clause)}"
	raise TypeError(f"unsupported where clause node {type(clause).__name__}")


def format_where(clauses: Sequence[WhereClause], indent: str, unit: str) -> List[str]:
	"""`where` on its own line at `indent`, one clause per line beneath it."""
	if not clauses:
		return []
	lines = [f"{indent}where"]
	lines.extend(f"{indent}{unit}{format_where_clause(c)}," for c in clauses)
	return lines


def _terminate(lines: List[str]) -> List[str]:
	"""End a bodyless item: its last where clause takes `;` instead of `,`."""
	last = lines[-1]
	lines[-1] = (last[:-1] if last.endswith(",") else last) + ";"
	return lines


def format_fn_param(param: FnParam) -> str:
	return f"{render_span(param.arg)}: {render_span(param.type)}"


def format_assoc_type(item: AssocType, indent: str, unit: str) -> List[str]:
	head = f"{indent}type {item.name.text}{format_generics(item.params)}"
	if item.bounds:
		head += f": {format_bounds(item.bounds)}"
	if not item.where:
		return [head + ";"]
	return _terminate([head] + format_where(item.where, indent, unit))


def format_assoc_const(item: AssocConst, indent: str) -> List[str]:
	line = f"{indent}const {item.name.text}: {render_span(item.type)}"
	if item.default is not None:
		line += f" = {render_span(item.default)}"
	return [line + ";"]


def format_assoc_fn(item: AssocFn, indent: str, unit: str) -> List[str]:
	quals = ""
	if item.qualifiers.unsafe:
		quals += "unsafe "
	if item.qualifiers.abi is not None:
		quals += f"extern {item.qualifiers.abi.text} "
	args = ", ".join(format_fn_param(p) for p in item.args)
	head = f"{indent}{quals}fn {item.name.text}{format_generics(item.params)}({args})"
	if item.ret is not None:
		head += f" -> {render_span(item.ret)}"
	where = format_where(item.where, indent, unit)
	if item.body is None:
		if not where:
			return [head + ";"]
		return _terminate([head] + where)
	body = render_span(item.body)
	# With a where clause the opening brace goes on its own line.
	lines = [head] + where if where else [head + " "]
	if where:
		lines.append(indent)
	if not body:
		lines[-1] += "{}"
		return lines
	lines[-1] += "{"
	return lines + [f"{indent}{unit}{body}", f"{indent}}}"]


def format_trait_header(decl: TraitDecl) -> str:
	head = ""
	if decl.vis is not None:
		head += render_span(decl.vis) + " "
	if decl.unsafe:
		head += "unsafe "
	head += f"trait {decl.name.text}{format_generics(decl.params)}"
	if decl.requirements:
		head += f": {format_bounds(decl.requirements)}"
	return head


def render_trait(decl: TraitDecl, options: Optional[RenderOptions] = None) -> str:
	"""
	Render a trait declaration to Rust source text.

	Associated items are emitted grouped by kind (types, constants, functions),
	each group in declared order.
	"""
	opts = options or RenderOptions()
	unit = opts.indent
	lines = [format_trait_header(decl)]
	lines.extend(format_where(decl.where, "", unit))
	body: List[str] = []
	for ty in decl.types:
		body.extend(format_assoc_type(ty, unit, unit))
	for const in decl.consts:
		body.extend(format_assoc_const(const, unit))
	for fn in decl.fns:
		body.extend(format_assoc_fn(fn, unit, unit))
	if body:
		if decl.where:
			lines.append("{")
		else:
			lines[-1] += " {"
		lines.extend(body)
		lines.append("}")
	elif decl.where:
		lines.append("{}")
	else:
		lines[-1] += " {}"
	text = "\n".join(lines)
	return text + "\n" if opts.trailing_newline else text


__all__ = [
	"RenderOptions",
	"render_trait",
	"format_bound",
	"format_bounds",
	"format_generic_param",
	"format_generics",
	"format_where",
	"format_where_clause",
]
