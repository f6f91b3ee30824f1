# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generic parameter and bound sections: `<bounds>`, `<gparams>`, lifetime/type/
const generic parameters and higher-rank `<for-bound>`s.

Parameters of the three kinds are collected into separate lists and only
flattened when the enclosing section closes, always as lifetimes, then
types, then consts, whatever order they were written in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from traitxml.lexer.tokens import Token, TokenSpan

from .ast import (
	Bound,
	BoundsSection,
	ConstParam,
	ForBound,
	LifetimeBound,
	LifetimeParam,
	Requirement,
	TraitBound,
	TypeParam,
)
from .machine import Continuation, Section, Sub, register


@dataclass(frozen=True)
class BoundsState:
	lifetimes: Tuple[LifetimeParam, ...] = ()
	types: Tuple[TypeParam, ...] = ()
	consts: Tuple[ConstParam, ...] = ()
	reqs: Tuple[Requirement, ...] = ()


class BoundsProduction(Section):
	"""`<bounds>`: generic parameters plus supertrait requirements."""

	id = "bounds"
	rule = "bounds"
	close_tag = "bounds"
	State = BoundsState
	children = {
		"lifetime": Sub("lifetime-param", "lifetimes", many=True),
		"type": Sub("type-param", "types", many=True),
		"const": Sub("const", "consts", many=True),
		"req": Sub("req", "reqs", many=True),
	}

	def finish(self, state: BoundsState, close: Token, k: Optional[Continuation]) -> BoundsSection:
		return BoundsSection(
			params=state.lifetimes + state.types + state.consts,
			requirements=state.reqs,
		)


class GParamsProduction(BoundsProduction):
	"""`<gparams>`: an associated function's generic parameters (no `<req>`)."""

	id = "gparams"
	rule = "generic parameters"
	close_tag = "gparams"
	children = {tag: sub for tag, sub in BoundsProduction.children.items() if tag != "req"}

	def finish(self, state: BoundsState, close: Token, k: Optional[Continuation]) -> BoundsSection:
		if not (state.lifetimes or state.types or state.consts):
			self.fail_missing("no generic parameters provided", ("lifetime", "type", "const"), close, k)
		return super().finish(state, close, k)


@dataclass(frozen=True)
class LifetimeParamState:
	name: Optional[Token] = None
	bounds: Tuple[Token, ...] = ()


class LifetimeParamProduction(Section):
	"""`<lifetime>` inside `<bounds>`/`<gparams>`: `'a: 'b + 'c`."""

	id = "lifetime-param"
	rule = "lifetime parameter"
	close_tag = "lifetime"
	State = LifetimeParamState
	children = {
		"name": Sub("lifetime-name", "name", label="lifetime"),
		"lifetime-bound": Sub("lifetime-bound", "bounds", many=True),
	}

	def finish(self, state: LifetimeParamState, close: Token, k: Optional[Continuation]) -> LifetimeParam:
		if state.name is None:
			self.fail_missing("missing lifetime name", ("name",), close, k)
		return LifetimeParam(name=state.name, bounds=state.bounds)


@dataclass(frozen=True)
class TypeParamState:
	name: Optional[Token] = None
	bounds: Tuple[Bound, ...] = ()


# Bound children shared by generic type parameters and `where` type clauses.
BOUND_CHILDREN = {
	"type-bound": Sub("type-bound", "bounds", many=True),
	"lifetime-bound": Sub("lifetime-bound", "bounds", many=True, convert=LifetimeBound),
	"for-bound": Sub("for-bound", "bounds", many=True),
}


class TypeParamProduction(Section):
	"""`<type>` inside `<bounds>`/`<gparams>`: `T: Bound + 'a + for<'b> Fn(&'b u8)`."""

	id = "type-param"
	rule = "generic type"
	close_tag = "type"
	State = TypeParamState
	children = {"name": Sub("name", "name"), **BOUND_CHILDREN}

	def finish(self, state: TypeParamState, close: Token, k: Optional[Continuation]) -> TypeParam:
		if state.name is None:
			self.fail_missing("no name given", ("name",), close, k)
		return TypeParam(name=state.name, bounds=state.bounds)


@dataclass(frozen=True)
class ConstParamState:
	name: Optional[Token] = None
	type: Optional[TokenSpan] = None


class ConstParamProduction(Section):
	"""`<const>`: `const N: usize`."""

	id = "const"
	rule = "const generic parameter"
	close_tag = "const"
	State = ConstParamState
	children = {
		"name": Sub("name", "name"),
		"type": Sub("type", "type"),
	}

	def finish(self, state: ConstParamState, close: Token, k: Optional[Continuation]) -> ConstParam:
		if state.name is None and state.type is None:
			self.fail_missing("missing name and type", ("name", "type"), close, k)
		if state.name is None:
			self.fail_missing("missing name", ("name",), close, k)
		if state.type is None:
			self.fail_missing(f"missing type. provided name: `{state.name.text}`", ("type",), close, k)
		return ConstParam(name=state.name, type=state.type)


@dataclass(frozen=True)
class ForBoundState:
	lifetimes: Tuple[Token, ...] = ()
	bound: Optional[TraitBound] = None


class ForBoundProduction(Section):
	"""`<for-bound>`: one or more `<lifetime>`s and exactly one `<type-bound>`."""

	id = "for-bound"
	rule = "`for` bound"
	close_tag = "for-bound"
	State = ForBoundState
	children = {
		"lifetime": Sub("lifetime", "lifetimes", many=True),
		"type-bound": Sub("type-bound", "bound", label="bound"),
	}

	def finish(self, state: ForBoundState, close: Token, k: Optional[Continuation]) -> ForBound:
		if not state.lifetimes and state.bound is None:
			self.fail_missing("no lifetimes or bound provided", ("lifetime", "type-bound"), close, k)
		if not state.lifetimes:
			self.fail_missing("no lifetimes provided", ("lifetime",), close, k)
		if state.bound is None:
			self.fail_missing("no bound provided", ("type-bound",), close, k)
		return ForBound(lifetimes=state.lifetimes, bound=state.bound)


for _production in (
	BoundsProduction,
	GParamsProduction,
	LifetimeParamProduction,
	TypeParamProduction,
	ConstParamProduction,
	ForBoundProduction,
):
	register(_production())
