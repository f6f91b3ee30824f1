# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`<where>` sections and their clauses.

	<where>
		<lifetime-clause> 'a: 'b + 'c
		<type-clause>     T: Bound + 'a
		<for-clause>      for<'a> T: Fn(&'a u8)
	</where>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from traitxml.lexer.tokens import Token, TokenSpan

from .ast import Bound, ForClause, LifetimeClause, TypeClause, WhereClause
from .generics import BOUND_CHILDREN
from .machine import Continuation, Section, Sub, register


@dataclass(frozen=True)
class WhereState:
	clauses: Tuple[WhereClause, ...] = ()


class WhereProduction(Section):
	id = "where"
	rule = "where clause"
	close_tag = "where"
	State = WhereState
	children = {
		"lifetime-clause": Sub("lifetime-clause", "clauses", many=True),
		"type-clause": Sub("type-clause", "clauses", many=True),
		"for-clause": Sub("for-clause", "clauses", many=True),
	}

	def finish(self, state: WhereState, close: Token, k: Optional[Continuation]) -> Tuple[WhereClause, ...]:
		if not state.clauses:
			self.fail_missing("no clauses provided", ("lifetime-clause", "type-clause", "for-clause"), close, k)
		return state.clauses


@dataclass(frozen=True)
class LifetimeClauseState:
	lifetime: Optional[Token] = None
	bounds: Tuple[Token, ...] = ()


class LifetimeClauseProduction(Section):
	id = "lifetime-clause"
	rule = "lifetime clause"
	close_tag = "lifetime-clause"
	State = LifetimeClauseState
	children = {
		"lifetime": Sub("lifetime", "lifetime"),
		"lifetime-bound": Sub("lifetime-bound", "bounds", many=True),
	}

	def finish(self, state: LifetimeClauseState, close: Token, k: Optional[Continuation]) -> LifetimeClause:
		if state.lifetime is None:
			self.fail_missing("no lifetime provided", ("lifetime",), close, k)
		if not state.bounds:
			self.fail_missing(
				f"no bound provided for lifetime `{state.lifetime.text}`",
				("lifetime-bound",),
				close,
				k,
			)
		return LifetimeClause(lifetime=state.lifetime, bounds=state.bounds)


@dataclass(frozen=True)
class TypeClauseState:
	type: Optional[TokenSpan] = None
	bounds: Tuple[Bound, ...] = ()


class TypeClauseProduction(Section):
	id = "type-clause"
	rule = "type clause"
	close_tag = "type-clause"
	State = TypeClauseState
	children = {"type": Sub("type", "type"), **BOUND_CHILDREN}

	def finish(self, state: TypeClauseState, close: Token, k: Optional[Continuation]) -> TypeClause:
		if state.type is None:
			self.fail_missing("no type provided", ("type",), close, k)
		return TypeClause(type=state.type, bounds=state.bounds)


@dataclass(frozen=True)
class ForClauseState:
	lifetimes: Tuple[Token, ...] = ()
	clause: Optional[TypeClause] = None


class ForClauseProduction(Section):
	id = "for-clause"
	rule = "`for` clause"
	close_tag = "for-clause"
	State = ForClauseState
	children = {
		"lifetime": Sub("lifetime", "lifetimes", many=True),
		"type-clause": Sub("type-clause", "clause", label="type clause"),
	}

	def finish(self, state: ForClauseState, close: Token, k: Optional[Continuation]) -> ForClause:
		if not state.lifetimes and state.clause is None:
			self.fail_missing("no lifetimes or bound provided", ("lifetime", "type-clause"), close, k)
		if not state.lifetimes:
			self.fail_missing("no lifetimes provided", ("lifetime",), close, k)
		if state.clause is None:
			self.fail_missing("no bound provided", ("type-clause",), close, k)
		return ForClause(lifetimes=state.lifetimes, clause=state.clause)


for _production in (
	WhereProduction,
	LifetimeClauseProduction,
	TypeClauseProduction,
	ForClauseProduction,
):
	register(_production())
