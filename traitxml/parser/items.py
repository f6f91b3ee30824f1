# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Associated item sections: `<assoctype>`, `<assocconst>`, `<assocfn>` and the
`<params>`/`<param>` sections of associated functions.

Sub-sections of an item may come in any order; each single-occurrence one
may appear at most once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from traitxml.lexer.tokens import Token, TokenSpan

from .ast import AssocConst, AssocFn, AssocType, BoundsSection, FnParam, FnQualifiers, WhereClause
from .machine import Continuation, Section, Sub, register


@dataclass(frozen=True)
class AssocTypeState:
	name: Optional[Token] = None
	bounds: Optional[BoundsSection] = None
	where: Optional[Tuple[WhereClause, ...]] = None


class AssocTypeProduction(Section):
	"""
	`<assoctype>`: `type Name<params>: Bounds where ...;`

	The item's `<bounds>` section supplies both its own generic parameters
	(`<lifetime>`, `<type>`, `<const>`) and its bounds (`<req>`).
	"""

	id = "assoctype"
	rule = "associated type"
	close_tag = "assoctype"
	State = AssocTypeState
	children = {
		"name": Sub("name", "name"),
		"bounds": Sub("bounds", "bounds"),
		"where": Sub("where", "where"),
	}

	def finish(self, state: AssocTypeState, close: Token, k: Optional[Continuation]) -> AssocType:
		if state.name is None:
			self.fail_missing("missing name", ("name",), close, k)
		bounds = state.bounds or BoundsSection()
		return AssocType(
			name=state.name,
			params=bounds.params,
			bounds=bounds.requirements,
			where=state.where or (),
		)


@dataclass(frozen=True)
class AssocConstState:
	name: Optional[Token] = None
	type: Optional[TokenSpan] = None
	default: Optional[TokenSpan] = None


class AssocConstProduction(Section):
	"""`<assocconst>`: `const NAME: Type = default;`"""

	id = "assocconst"
	rule = "associated constant"
	close_tag = "assocconst"
	State = AssocConstState
	children = {
		"name": Sub("name", "name"),
		"type": Sub("type", "type"),
		"default-value": Sub("default-value", "default", label="default value"),
	}

	def finish(self, state: AssocConstState, close: Token, k: Optional[Continuation]) -> AssocConst:
		missing = tuple(field for field in ("name", "type") if getattr(state, field) is None)
		if missing:
			shown = ", ".join(f"`<{field}>`" for field in missing)
			self.fail_missing(f"missing one or more fields: {shown}", missing, close, k)
		return AssocConst(name=state.name, type=state.type, default=state.default)


@dataclass(frozen=True)
class ParamState:
	arg: Optional[TokenSpan] = None
	is_pattern: bool = False
	type: Optional[TokenSpan] = None


def _ident_arg(tok: Token) -> TokenSpan:
	return (tok,)


class ParamProduction(Section):
	"""`<param>`: exactly one of `<name>`/`<pat>`, and exactly one `<type>`."""

	id = "param"
	rule = "associated function parameter"
	close_tag = "param"
	State = ParamState
	children = {
		"name": Sub("name", "arg", label="argument", convert=_ident_arg, extra={"is_pattern": False}),
		"pat": Sub("pat", "arg", label="argument", extra={"is_pattern": True}),
		"type": Sub("type", "type"),
	}

	def finish(self, state: ParamState, close: Token, k: Optional[Continuation]) -> FnParam:
		if state.arg is None and state.type is None:
			self.fail_missing("no parameter argument or type given", ("name", "type"), close, k)
		if state.arg is None:
			self.fail_missing("no argument given", ("name",), close, k)
		if state.type is None:
			self.fail_missing("no type given", ("type",), close, k)
		return FnParam(arg=state.arg, type=state.type, is_pattern=state.is_pattern)


@dataclass(frozen=True)
class ParamsState:
	params: Tuple[FnParam, ...] = ()


class ParamsProduction(Section):
	"""`<params>`: zero or more `<param>`s, in declaration order."""

	id = "params"
	rule = "associated function parameters"
	close_tag = "params"
	State = ParamsState
	children = {"param": Sub("param", "params", many=True)}

	def finish(self, state: ParamsState, close: Token, k: Optional[Continuation]) -> Tuple[FnParam, ...]:
		return state.params


@dataclass(frozen=True)
class AssocFnState:
	name: Optional[Token] = None
	unsafe: bool = False
	abi: Optional[Token] = None
	gparams: Optional[BoundsSection] = None
	params: Optional[Tuple[FnParam, ...]] = None
	ret: Optional[TokenSpan] = None
	where: Optional[Tuple[WhereClause, ...]] = None
	body: Optional[TokenSpan] = None


class AssocFnProduction(Section):
	"""
	`<assocfn>`: an associated function.

	Without `<rust>` the function is a required method (`fn f();`); with it,
	the tokens between `<rust>` and `</rust>` become the default body.
	"""

	id = "assocfn"
	rule = "associated function"
	close_tag = "assocfn"
	State = AssocFnState
	flags = {"unsafe": "unsafe"}
	children = {
		"name": Sub("name", "name"),
		"extern": Sub("extern", "abi", label="`extern` ABI"),
		"gparams": Sub("gparams", "gparams"),
		"params": Sub("params", "params"),
		"ret": Sub("ret", "ret", label="return type"),
		"where": Sub("where", "where"),
		"rust": Sub("rust", "body", label="default definition"),
	}

	def finish(self, state: AssocFnState, close: Token, k: Optional[Continuation]) -> AssocFn:
		if state.name is None:
			self.fail_missing("no name provided", ("name",), close, k)
		return AssocFn(
			name=state.name,
			qualifiers=FnQualifiers(unsafe=state.unsafe, abi=state.abi),
			params=state.gparams.params if state.gparams is not None else (),
			args=state.params or (),
			ret=state.ret,
			where=state.where or (),
			body=state.body,
		)


for _production in (
	AssocTypeProduction,
	AssocConstProduction,
	ParamProduction,
	ParamsProduction,
	AssocFnProduction,
):
	register(_production())
