# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TDL parser front-end.

`parse_trait` consumes an already-lexed token stream; `parse_trait_text`
lexes first. Both raise a `TdlError` subclass on the first error.
`parse_trait_source` is the driver-facing adapter: it never raises for TDL
errors and instead returns `(decl | None, diagnostics)`.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from traitxml.core.diagnostics import Diagnostic
from traitxml.core.errors import TdlError
from traitxml.lexer import tokenize

from .ast import TraitDecl, ir_to_json
from .machine import run_production
from .trait import parse_trait


def parse_trait_text(source: str, *, file: Optional[str] = None) -> TraitDecl:
	return parse_trait(tokenize(source, file=file))


def parse_trait_source(source: str, *, file: Optional[str] = None) -> Tuple[Optional[TraitDecl], List[Diagnostic]]:
	"""Parse TDL text, reporting failure as a single parser-phase diagnostic."""
	try:
		return parse_trait_text(source, file=file), []
	except TdlError as err:
		return None, [err.to_diagnostic(file)]


__all__ = [
	"TraitDecl",
	"ir_to_json",
	"parse_trait",
	"parse_trait_text",
	"parse_trait_source",
	"run_production",
]
