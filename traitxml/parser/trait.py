# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Root `<trait>` production and the parse entry point.

Top-level sections are folded into a `TraitState` accumulator as they
close; the `TraitDecl` is only built when `</trait>` is reached with a name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from traitxml.core.errors import StructuralError
from traitxml.lexer.tokens import Token, TokenSpan, render_span

from .ast import AssocConst, AssocFn, AssocType, BoundsSection, TraitDecl, WhereClause
from .machine import Continuation, Cursor, Enter, Section, Sub, register, run

# Importing the production modules registers their productions.
from . import generics as _generics  # noqa: F401
from . import items as _items  # noqa: F401
from . import leaves as _leaves  # noqa: F401
from . import where as _where  # noqa: F401


@dataclass(frozen=True)
class TraitState:
	name: Optional[Token] = None
	vis: Optional[TokenSpan] = None
	unsafe: bool = False
	bounds: Optional[BoundsSection] = None
	where: Optional[Tuple[WhereClause, ...]] = None
	types: Tuple[AssocType, ...] = ()
	consts: Tuple[AssocConst, ...] = ()
	fns: Tuple[AssocFn, ...] = ()


class TraitProduction(Section):
	id = "trait"
	rule = "trait"
	close_tag = "trait"
	State = TraitState
	flags = {"unsafe": "unsafe"}
	children = {
		"name": Sub("name", "name"),
		"vis": Sub("vis", "vis", label="visibility"),
		"bounds": Sub("bounds", "bounds"),
		"where": Sub("where", "where"),
		"assoctype": Sub("assoctype", "types", many=True),
		"assocconst": Sub("assocconst", "consts", many=True),
		"assocfn": Sub("assocfn", "fns", many=True),
	}

	def finish(self, state: TraitState, close: Token, k: Optional[Continuation]) -> TraitDecl:
		if state.name is None:
			self.fail_missing("no name provided", ("name",), close, k)
		bounds = state.bounds or BoundsSection()
		return TraitDecl(
			name=state.name,
			vis=state.vis,
			unsafe=state.unsafe,
			params=bounds.params,
			requirements=bounds.requirements,
			where=state.where or (),
			types=state.types,
			consts=state.consts,
			fns=state.fns,
		)


register(TraitProduction())


def parse_trait(tokens: Sequence[Token]) -> TraitDecl:
	"""
	Parse one complete `<trait> ... </trait>` token stream into a TraitDecl.

	Nothing may precede `<trait>` or follow the matching `</trait>`. Raises a
	`TdlError` subclass on the first problem found.
	"""
	cur = Cursor(tuple(tokens))
	first = cur.peek()
	if first is None:
		raise StructuralError("expected `<trait>`, found end of input", rule="trait")
	if not first.opens("trait"):
		raise StructuralError(
			f"expected `<trait>`, found unexpected token `{first.text}`",
			rule="trait",
			token=first,
		)
	decl, rest = run(Enter("trait", cur.advance(), None))
	if not rest.at_end:
		raise StructuralError(
			f"extraneous tokens after end of trait definition: `{render_span(rest.rest)}`",
			rule="trait",
			token=rest.peek(),
		)
	return decl


__all__ = ["TraitState", "TraitProduction", "parse_trait"]
