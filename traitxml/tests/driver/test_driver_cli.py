# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from traitxml.traitxmlc import main

GOOD = "<trait><vis>pub</vis><name>Foo</name><assocfn><name>bar</name></assocfn></trait>\n"
GOOD_RUST = "pub trait Foo {\n    fn bar();\n}\n"
BAD = "<trait>\n<name>Foo</name>\n<name>Bar</name>\n</trait>\n"


def _write(tmp_path: Path, name: str, text: str) -> Path:
	path = tmp_path / name
	path.write_text(text, encoding="utf-8")
	return path


def test_compiles_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "foo.tdl", GOOD)
	assert main([str(src)]) == 0
	out = capsys.readouterr()
	assert out.out == GOOD_RUST
	assert out.err == ""


def test_several_sources_are_separated_by_blank_lines(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	first = _write(tmp_path, "a.tdl", GOOD)
	second = _write(tmp_path, "b.tdl", "<trait><name>Bar</name></trait>")
	assert main([str(first), str(second)]) == 0
	assert capsys.readouterr().out == GOOD_RUST + "\n" + "trait Bar {}\n"


def test_writes_output_file_with_tabs(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "foo.tdl", GOOD)
	dest = tmp_path / "foo.rs"
	assert main([str(src), "-o", str(dest), "--tabs"]) == 0
	assert dest.read_text(encoding="utf-8") == "pub trait Foo {\n\tfn bar();\n}\n"
	assert capsys.readouterr().out == ""


def test_indent_width(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "foo.tdl", GOOD)
	assert main([str(src), "--indent", "2"]) == 0
	assert capsys.readouterr().out == "pub trait Foo {\n  fn bar();\n}\n"


def test_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
	monkeypatch.setattr("sys.stdin", io.StringIO(GOOD))
	assert main(["-"]) == 0
	assert capsys.readouterr().out == GOOD_RUST


def test_reports_human_readable_diagnostic(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "bad.tdl", BAD)
	assert main([str(src)]) == 1
	out = capsys.readouterr()
	assert out.out == ""
	first_line = out.err.splitlines()[0]
	assert first_line == (
		f"{src}:3:1: error: error parsing trait: name already defined as `Foo`, but encountered another `<name>`"
	)


def test_reports_json_diagnostic(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "bad.tdl", "<trait><vis>pub</vis></trait>")
	assert main([str(src), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	(diag,) = payload["diagnostics"]
	assert diag["phase"] == "parser"
	assert diag["code"] == "TDL-OMISSION"
	assert diag["severity"] == "error"
	assert diag["file"] == str(src)
	assert diag["line"] == 1
	assert diag["message"] == "error parsing trait: no name provided"


def test_json_success_carries_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "foo.tdl", GOOD)
	assert main([str(src), "--json"]) == 0
	payload = json.loads(capsys.readouterr().out)
	assert payload == {"exit_code": 0, "diagnostics": [], "output": GOOD_RUST}


def test_nothing_is_written_when_any_source_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	good = _write(tmp_path, "good.tdl", GOOD)
	bad = _write(tmp_path, "bad.tdl", BAD)
	dest = tmp_path / "out.rs"
	ir = tmp_path / "ir.json"
	assert main([str(good), str(bad), "-o", str(dest), "--emit-ir", str(ir)]) == 1
	assert not dest.exists()
	assert not ir.exists()
	assert "bad.tdl:3:1: error:" in capsys.readouterr().err


def test_emit_ir(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "foo.tdl", GOOD)
	ir = tmp_path / "ir.json"
	assert main([str(src), "--emit-ir", str(ir)]) == 0
	capsys.readouterr()
	(decl,) = json.loads(ir.read_text(encoding="utf-8"))
	assert decl["node"] == "TraitDecl"
	assert decl["name"] == "Foo"
	assert decl["vis"] == "pub"
	assert decl["fns"][0]["node"] == "AssocFn"
	assert decl["fns"][0]["body"] is None
	assert decl["fns"][0]["qualifiers"] == {"node": "FnQualifiers", "unsafe": False, "abi": None}


def test_missing_source_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	missing = tmp_path / "nope.tdl"
	assert main([str(missing), "--json"]) == 1
	(diag,) = json.loads(capsys.readouterr().out)["diagnostics"]
	assert diag["phase"] == "driver"
	assert diag["code"] == "TDL-IO"
	assert diag["file"] == str(missing)
	assert diag["message"].startswith("cannot read source:")
