# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Code generation: trait IR -> Rust declaration text."""

from __future__ import annotations

from typing import Optional

from traitxml.parser import parse_trait_text

from .rust import RenderOptions, render_trait


def compile_trait(source: str, options: Optional[RenderOptions] = None, *, file: Optional[str] = None) -> str:
	"""Lex, parse and render one TDL trait; raises `TdlError` on the first error."""
	return render_trait(parse_trait_text(source, file=file), options)


__all__ = ["RenderOptions", "compile_trait", "render_trait"]
