# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from traitxml.core.errors import StructuralError
from traitxml.lexer import Token, TokenKind, render_span, tokenize


def _kinds(text: str) -> list[TokenKind]:
	return [tok.kind for tok in tokenize(text)]


def test_tags_are_lexed_as_markers() -> None:
	toks = tokenize("<trait><name>Foo</name><unsafe/></trait>")
	assert [t.kind for t in toks] == [
		TokenKind.OPEN_TAG,
		TokenKind.OPEN_TAG,
		TokenKind.IDENT,
		TokenKind.CLOSE_TAG,
		TokenKind.EMPTY_TAG,
		TokenKind.CLOSE_TAG,
	]
	assert [t.tag for t in toks] == ["trait", "name", None, "name", "unsafe", "trait"]
	assert toks[0].opens("trait")
	assert toks[3].closes("name")
	assert toks[4].is_empty_tag("unsafe")


def test_hyphenated_tag_names() -> None:
	toks = tokenize("<lifetime-bound>'a</lifetime-bound>")
	assert toks[0].tag == "lifetime-bound"
	assert toks[1].kind is TokenKind.LIFETIME
	assert toks[2].closes("lifetime-bound")


def test_generic_arguments_survive_as_tag_tokens() -> None:
	toks = tokenize("Vec<u8>")
	assert [t.kind for t in toks] == [TokenKind.IDENT, TokenKind.OPEN_TAG]
	assert render_span(toks) == "Vec<u8>"


def test_nested_generics_render_as_written() -> None:
	assert render_span(tokenize("Option<Vec<u8>>")) == "Option<Vec<u8>>"
	assert render_span(tokenize("HashMap<K, V>")) == "HashMap<K, V>"
	assert render_span(tokenize("Fn(&'a u8) -> bool")) == "Fn(&'a u8) -> bool"


def test_literal_kinds() -> None:
	assert _kinds("'a \"C\" 'x' b\"x\" r#type 1_000u32") == [
		TokenKind.LIFETIME,
		TokenKind.STRING,
		TokenKind.CHAR,
		TokenKind.STRING,
		TokenKind.IDENT,
		TokenKind.NUMBER,
	]


def test_multi_char_punctuation_is_one_token() -> None:
	toks = tokenize("-> :: ..= && ?")
	assert [t.text for t in toks] == ["->", "::", "..=", "&&", "?"]
	assert all(t.kind is TokenKind.PUNCT for t in toks)


def test_whitespace_and_comments_are_skipped() -> None:
	toks = tokenize("a // line comment\n b /* block\n comment */ c")
	assert [t.text for t in toks] == ["a", "b", "c"]
	assert [t.spaced for t in toks] == [False, True, True]


def test_tokens_carry_locations() -> None:
	toks = tokenize("<name>\n  Foo</name>", file="x.tdl")
	foo = toks[1]
	assert foo.span.file == "x.tdl"
	assert (foo.span.line, foo.span.column) == (2, 3)


def test_token_equality_ignores_location_and_spacing() -> None:
	first = tokenize("Foo")[0]
	second = tokenize("\n\n   Foo")[0]
	assert first == second
	assert first == Token(TokenKind.IDENT, "Foo")
	assert first != Token(TokenKind.STRING, "Foo")


def test_unexpected_character_is_structural_error() -> None:
	with pytest.raises(StructuralError) as excinfo:
		tokenize("a `b`")
	err = excinfo.value
	assert err.kind == "structural"
	assert "error lexing input" in str(err)
	assert (err.span.line, err.span.column) == (1, 3)
