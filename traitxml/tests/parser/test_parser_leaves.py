# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from traitxml.core.errors import MalformedLeafError, StructuralError
from traitxml.lexer import TokenKind, render_span
from traitxml.parser.ast import TraitBound
from traitxml.test_helpers import run_tdl


def test_name_leaf_yields_identifier_and_rest() -> None:
	tok, rest = run_tdl("name", "Foo</name><vis>pub</vis>")
	assert tok.kind is TokenKind.IDENT
	assert tok.text == "Foo"
	assert [t.text for t in rest] == ["<vis>", "pub", "</vis>"]


def test_name_leaf_rejects_empty() -> None:
	with pytest.raises(MalformedLeafError) as excinfo:
		run_tdl("name", "</name>")
	assert str(excinfo.value) == "error parsing name: expected identifier, found `</name>`"
	assert excinfo.value.caller is None


def test_name_leaf_rejects_more_than_one_token() -> None:
	with pytest.raises(MalformedLeafError, match="expected `</name>`, found `Bar`"):
		run_tdl("name", "Foo Bar</name>")


def test_name_leaf_rejects_non_identifier() -> None:
	with pytest.raises(MalformedLeafError, match="expected identifier, found `'a`"):
		run_tdl("name", "'a</name>")


def test_leaf_rejects_foreign_end_tag() -> None:
	with pytest.raises(StructuralError) as excinfo:
		run_tdl("name", "Foo</type>")
	assert "unexpected end tag `</type>`, expected `</name>`" in str(excinfo.value)


def test_leaf_reports_unknown_end_tag() -> None:
	with pytest.raises(StructuralError, match="unknown end tag `</nmae>`"):
		run_tdl("name", "Foo</nmae>")


def test_leaf_runs_out_of_tokens() -> None:
	with pytest.raises(StructuralError, match="ran out of tokens before `</name>`"):
		run_tdl("name", "Foo")


@pytest.mark.parametrize(
	"text, expected",
	[
		("pub</vis>", "pub"),
		("pub(crate)</vis>", "pub(crate)"),
		("pub(super)</vis>", "pub(super)"),
		("pub(in crate::a)</vis>", "pub(in crate::a)"),
	],
)
def test_visibility_forms(text: str, expected: str) -> None:
	vis, _rest = run_tdl("vis", text)
	assert render_span(vis) == expected


@pytest.mark.parametrize(
	"text, fragment",
	[
		("priv</vis>", "start of invalid visibility specifier `priv`"),
		("pub crate</vis>", "unexpected `crate` after `pub`"),
		("pub(foo)</vis>", "invalid visibility restriction `foo`"),
		("pub()</vis>", "invalid visibility restriction `)`"),
		("</vis>", "empty input"),
	],
)
def test_visibility_rejects_malformed(text: str, fragment: str) -> None:
	with pytest.raises(MalformedLeafError) as excinfo:
		run_tdl("vis", text)
	assert fragment in str(excinfo.value)


def test_type_span_is_opaque_and_keeps_generics() -> None:
	ty, rest = run_tdl("type", "HashMap<String, Vec<u8>></type>")
	assert render_span(ty) == "HashMap<String, Vec<u8>>"
	assert rest == ()


def test_type_span_rejects_empty() -> None:
	with pytest.raises(MalformedLeafError, match="empty type tags"):
		run_tdl("type", "</type>")


def test_type_span_rejects_self_closing_tag() -> None:
	with pytest.raises(StructuralError, match="unexpected tag `<unsafe/>` inside `<type>`"):
		run_tdl("type", "u8<unsafe/></type>")


def test_body_may_be_empty() -> None:
	body, _rest = run_tdl("rust", "</rust>")
	assert body == ()
	body, _rest = run_tdl("rust", "self.x + 1</rust>")
	assert render_span(body) == "self.x + 1"


def test_supertrait_path_and_relaxed_bound() -> None:
	req, _rest = run_tdl("req", "std::fmt::Debug</req>")
	assert isinstance(req, TraitBound)
	assert render_span(req.path) == "std::fmt::Debug"
	assert not req.relaxed

	relaxed, _rest = run_tdl("type-bound", "?Sized</type-bound>")
	assert relaxed.relaxed
	assert render_span(relaxed.path) == "Sized"


def test_relaxed_bound_needs_a_path() -> None:
	with pytest.raises(MalformedLeafError, match="empty path after `\\?`"):
		run_tdl("req", "?</req>")


def test_extern_holds_a_string_literal() -> None:
	abi, _rest = run_tdl("extern", '"C"</extern>')
	assert abi.kind is TokenKind.STRING
	assert abi.text == '"C"'
	with pytest.raises(MalformedLeafError, match="expected string literal, found `C`"):
		run_tdl("extern", "C</extern>")


def test_lifetime_leaf() -> None:
	lt, _rest = run_tdl("lifetime", "'static</lifetime>")
	assert lt.kind is TokenKind.LIFETIME
	assert lt.text == "'static"
	with pytest.raises(MalformedLeafError, match="expected lifetime, found `a`"):
		run_tdl("lifetime", "a</lifetime>")
