# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from traitxml.codegen.rust import format_where_clause
from traitxml.core.errors import MalformedLeafError, MissingFieldError, RedefinitionError
from traitxml.parser.ast import ForClause, LifetimeClause, TypeClause
from traitxml.test_helpers import parse_tdl, run_tdl, trait_src


def test_where_keeps_declared_clause_order() -> None:
	clauses, _ = run_tdl(
		"where",
		"<type-clause><type>T</type><type-bound>Copy</type-bound></type-clause>"
		"<lifetime-clause><lifetime>'a</lifetime><lifetime-bound>'b</lifetime-bound></lifetime-clause>"
		"<for-clause><lifetime>'x</lifetime>"
		"<type-clause><type>F</type><type-bound>Fn(&'x u8)</type-bound></type-clause>"
		"</for-clause>"
		"</where>",
	)
	assert [type(c) for c in clauses] == [TypeClause, LifetimeClause, ForClause]
	assert [format_where_clause(c) for c in clauses] == [
		"T: Copy",
		"'a: 'b",
		"for<'x> F: Fn(&'x u8)",
	]


def test_where_requires_a_clause() -> None:
	with pytest.raises(MissingFieldError, match="no clauses provided"):
		run_tdl("where", "</where>")


def test_lifetime_clause_with_several_bounds() -> None:
	clause, _ = run_tdl(
		"lifetime-clause",
		"<lifetime>'foo</lifetime><lifetime-bound>'bar</lifetime-bound><lifetime-bound>'baz</lifetime-bound></lifetime-clause>",
	)
	assert clause.lifetime.text == "'foo"
	assert [lt.text for lt in clause.bounds] == ["'bar", "'baz"]


def test_lifetime_clause_without_bound_is_omission() -> None:
	with pytest.raises(MissingFieldError) as excinfo:
		run_tdl("lifetime-clause", "<lifetime>'a</lifetime></lifetime-clause>")
	assert "no bound provided" in str(excinfo.value)
	assert excinfo.value.missing == ("lifetime-bound",)


def test_lifetime_clause_takes_one_lifetime() -> None:
	with pytest.raises(RedefinitionError, match="lifetime already defined as `'a`, but encountered another `<lifetime>`"):
		run_tdl(
			"lifetime-clause",
			"<lifetime>'a</lifetime><lifetime>'b</lifetime><lifetime-bound>'c</lifetime-bound></lifetime-clause>",
		)


def test_type_clause_may_have_no_bounds() -> None:
	clause, _ = run_tdl("type-clause", "<type>Self</type></type-clause>")
	assert clause.bounds == ()
	assert format_where_clause(clause) == "Self:"


def test_type_clause_requires_type() -> None:
	with pytest.raises(MissingFieldError, match="no type provided"):
		run_tdl("type-clause", "<type-bound>Copy</type-bound></type-clause>")


def test_for_clause_requires_type_clause() -> None:
	with pytest.raises(MissingFieldError, match="no bound provided"):
		run_tdl("for-clause", "<lifetime>'a</lifetime></for-clause>")


_LIFETIMES = (
	"<bounds>"
	"<lifetime><name>'foo</name></lifetime>"
	"<lifetime><name>'bar</name></lifetime>"
	"<lifetime><name>'baz</name></lifetime>"
	"</bounds>"
)


def test_lifetime_clauses_in_a_trait() -> None:
	decl = parse_tdl(
		trait_src(
			_LIFETIMES,
			"<where>"
			"<lifetime-clause><lifetime>'foo</lifetime>"
			"<lifetime-bound>'bar</lifetime-bound><lifetime-bound>'baz</lifetime-bound>"
			"</lifetime-clause>"
			"<lifetime-clause><lifetime>'bar</lifetime><lifetime-bound>'baz</lifetime-bound></lifetime-clause>"
			"</where>",
			name="LifetimeClauseTest",
		)
	)
	assert [p.name.text for p in decl.params] == ["'foo", "'bar", "'baz"]
	assert [format_where_clause(c) for c in decl.where] == ["'foo: 'bar + 'baz", "'bar: 'baz"]


def test_lifetime_clause_with_empty_bound_in_a_trait() -> None:
	src = trait_src(
		_LIFETIMES,
		"<where><lifetime-clause><lifetime>'foo</lifetime><lifetime-bound></lifetime-bound></lifetime-clause></where>",
	)
	with pytest.raises(MalformedLeafError) as excinfo:
		parse_tdl(src)
	err = excinfo.value
	assert "expected lifetime, found `</lifetime-bound>`" in str(err)
	assert err.callers == ("lifetime-clause", "where", "trait")
	assert err.caller == "lifetime-clause"
	assert err.origin == "trait"


def test_lifetime_clause_without_lifetime_in_a_trait() -> None:
	src = trait_src(
		_LIFETIMES,
		"<where><lifetime-clause>"
		"<lifetime-bound>'bar</lifetime-bound><lifetime-bound>'baz</lifetime-bound>"
		"</lifetime-clause></where>",
	)
	with pytest.raises(MissingFieldError) as excinfo:
		parse_tdl(src)
	assert str(excinfo.value) == "error parsing lifetime clause: no lifetime provided. caller: `where`"
