# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
traitxmlc: command-line driver.

Reads one TDL trait per source (`-` is stdin), renders each to a Rust trait
declaration and writes the declarations, separated by blank lines, to
`--output` or stdout. Nothing is written unless every source compiles.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from traitxml.codegen import RenderOptions, render_trait
from traitxml.core.diagnostics import Diagnostic
from traitxml.core.span import Span
from traitxml.parser import parse_trait_source
from traitxml.parser.ast import TraitDecl, ir_to_json

STDIN_NAME = "<stdin>"


def _read_source(source: str) -> Tuple[str, Optional[str], Optional[Diagnostic]]:
	"""Return (display name, text, diagnostic); text is None when unreadable."""
	if source == "-":
		return STDIN_NAME, sys.stdin.read(), None
	try:
		return source, Path(source).read_text(encoding="utf-8"), None
	except (OSError, UnicodeDecodeError) as err:
		reason = err.strerror if isinstance(err, OSError) and err.strerror else str(err)
		diag = Diagnostic(
			message=f"cannot read source: {reason}",
			code="TDL-IO",
			phase="driver",
			span=Span(file=source),
		)
		return source, None, diag


def _report(diagnostics: List[Diagnostic], *, as_json: bool, output: Optional[str] = None) -> int:
	exit_code = 1 if diagnostics else 0
	if as_json:
		payload: dict = {
			"exit_code": exit_code,
			"diagnostics": [d.to_json() for d in diagnostics],
		}
		if output is not None:
			payload["output"] = output
		print(json.dumps(payload))
	else:
		for d in diagnostics:
			print(d.render(), file=sys.stderr)
			for note in d.notes:
				print(f"{d.span.describe()}: note: {note}", file=sys.stderr)
	return exit_code


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="traitxmlc",
		description="Compile tag-delimited trait descriptions (TDL) into Rust trait declarations",
	)
	parser.add_argument("source", nargs="+", help="Path(s) to TDL source file(s); `-` reads stdin")
	parser.add_argument("-o", "--output", type=Path, help="Write the generated Rust code to this path instead of stdout")
	parser.add_argument("--indent", type=int, default=4, metavar="N", help="Indent width in spaces (default: 4)")
	parser.add_argument("--tabs", action="store_true", help="Indent with tabs instead of spaces")
	parser.add_argument("--emit-ir", type=Path, help="Write the parsed IR as JSON to the given path")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column/notes) with an exit_code",
	)
	return parser


def main(argv: list[str] | None = None) -> int:
	"""
	Compile every source; exit 0 on success, 1 if any diagnostic was produced.

	With --json, prints a single JSON object with `exit_code` and
	`diagnostics` (plus `output` when the code goes to stdout); otherwise
	diagnostics go to stderr as `file:line:col: severity: message`.
	"""
	parser = build_arg_parser()
	args = parser.parse_args(argv)
	if args.indent < 0:
		parser.error("--indent must be non-negative")
	options = RenderOptions.from_width(args.indent, tabs=args.tabs)

	decls: List[TraitDecl] = []
	diagnostics: List[Diagnostic] = []
	for source in args.source:
		name, text, read_diag = _read_source(source)
		if read_diag is not None:
			diagnostics.append(read_diag)
			continue
		decl, parse_diags = parse_trait_source(text, file=name)
		diagnostics.extend(parse_diags)
		if decl is not None:
			decls.append(decl)

	if diagnostics:
		return _report(diagnostics, as_json=args.json)

	if args.emit_ir is not None:
		args.emit_ir.write_text(json.dumps([ir_to_json(d) for d in decls], indent=2) + "\n", encoding="utf-8")

	rendered = "\n".join(render_trait(d, options) for d in decls)
	if args.output is not None:
		args.output.write_text(rendered, encoding="utf-8")
		return _report([], as_json=args.json)
	if args.json:
		return _report([], as_json=True, output=rendered)
	sys.stdout.write(rendered)
	return 0


__all__ = ["main", "build_arg_parser"]


if __name__ == "__main__":
	sys.exit(main())
