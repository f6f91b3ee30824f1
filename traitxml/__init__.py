# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
traitxml: compiles tag-delimited trait descriptions (TDL) into Rust trait
declarations.

Pipeline:
  lexer:   TDL text -> Token stream (lark basic lexer)
  parser:  Token stream -> TraitDecl IR (continuation-driven productions)
  codegen: TraitDecl IR -> Rust declaration text
"""

from __future__ import annotations

from traitxml.core.errors import TdlError
from traitxml.parser import parse_trait, parse_trait_source, parse_trait_text
from traitxml.codegen import RenderOptions, compile_trait, render_trait

__all__ = [
	"RenderOptions",
	"TdlError",
	"compile_trait",
	"parse_trait",
	"parse_trait_source",
	"parse_trait_text",
	"render_trait",
]
