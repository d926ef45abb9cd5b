# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from graphql import GraphQLInt, GraphQLList, GraphQLNonNull, GraphQLObjectType, GraphQLString

from graphcompose.core.errors import DefinitionSyntaxError, NotFound, TypeResolutionError
from graphcompose.object_type_composer import ObjectTypeComposer
from graphcompose.registry import SchemaComposer, schema_composer
from graphcompose.type_resolver import (
	expand_type_thunks,
	resolve_type_thunk,
	resolve_type_thunks,
	type_thunk_name,
)
from graphcompose.union_type_composer import UnionTypeComposer


def test_concrete_type_is_returned_unchanged():
	obj = GraphQLObjectType("A", fields=lambda: {})
	assert resolve_type_thunk(obj) is obj


def test_composer_resolves_to_its_materialized_type():
	otc = ObjectTypeComposer.create_temp("type A { a: Int }")
	assert resolve_type_thunk(otc) is otc.get_type()


def test_builtin_scalars_and_wrapped_names():
	assert resolve_type_thunk("Int") is GraphQLInt
	wrapped = resolve_type_thunk("[String!]!")
	assert isinstance(wrapped, GraphQLNonNull)
	assert isinstance(wrapped.of_type, GraphQLList)
	assert isinstance(wrapped.of_type.of_type, GraphQLNonNull)
	assert wrapped.of_type.of_type.of_type is GraphQLString


def test_forward_reference_by_name():
	with pytest.raises(NotFound) as excinfo:
		resolve_type_thunk("Later")
	assert excinfo.value.name == "Later"
	later = ObjectTypeComposer.create("Later")
	assert resolve_type_thunk("Later") is later.get_type()


def test_name_lookup_uses_the_given_session():
	sc = SchemaComposer()
	otc = ObjectTypeComposer.create("OnlyHere", sc=sc)
	assert resolve_type_thunk("OnlyHere", sc) is otc.get_type()
	with pytest.raises(NotFound):
		resolve_type_thunk("OnlyHere")


def test_inline_definition_registers_and_is_idempotent():
	first = resolve_type_thunk("type Inline { a: Int }")
	assert schema_composer.has("Inline")
	second = resolve_type_thunk("type Inline { a: Int }")
	assert first is second
	assert isinstance(first, GraphQLObjectType)
	assert first.fields["a"].type is GraphQLInt


def test_inline_union_definition_registers_union_composer():
	resolve_type_thunk("type A { a: Int }")
	union = resolve_type_thunk("union AOnly = A")
	assert isinstance(schema_composer.get("AOnly"), UnionTypeComposer)
	assert [t.name for t in union.types] == ["A"]


def test_malformed_inline_definition_surfaces_at_resolution():
	with pytest.raises(DefinitionSyntaxError):
		resolve_type_thunk("type Broken { a Int }")


def test_producer_is_invoked_on_every_resolution():
	calls = []
	a = ObjectTypeComposer.create("A")
	b = ObjectTypeComposer.create("B")

	def producer():
		calls.append(1)
		return "A" if len(calls) == 1 else "B"

	assert resolve_type_thunk(producer) is a.get_type()
	assert resolve_type_thunk(producer) is b.get_type()
	assert len(calls) == 2


def test_sequence_resolves_in_order():
	a = ObjectTypeComposer.create("A")
	result = resolve_type_thunk(["A", "Int", lambda: a])
	assert result == [a.get_type(), GraphQLInt, a.get_type()]


def test_sequence_fails_on_first_bad_element():
	ObjectTypeComposer.create("A")
	with pytest.raises(NotFound, match="'Missing'"):
		resolve_type_thunk(["A", "Missing", "AlsoMissing"])


def test_resolve_type_thunks_flattens_producers_of_lists():
	ObjectTypeComposer.create("A")
	ObjectTypeComposer.create("B")
	types = resolve_type_thunks(lambda: ["A", ["B"]])
	assert [t.name for t in types] == ["A", "B"]
	assert [t.name for t in resolve_type_thunks("A")] == ["A"]


def test_unsupported_thunk_value():
	with pytest.raises(TypeResolutionError, match="42"):
		resolve_type_thunk(42)


def test_type_thunk_name_does_not_register_or_resolve():
	obj = GraphQLObjectType("Concrete", fields=lambda: {})
	assert type_thunk_name("Missing") == "Missing"
	assert type_thunk_name("[Missing]!") == "Missing"
	assert type_thunk_name(obj) == "Concrete"
	assert type_thunk_name(GraphQLList(obj)) == "Concrete"
	assert type_thunk_name(ObjectTypeComposer.create_temp("Temp")) == "Temp"
	assert type_thunk_name("type NotRegistered { a: Int }") == "NotRegistered"
	assert type_thunk_name(lambda: "Produced") == "Produced"
	assert not schema_composer.has("NotRegistered")
	with pytest.raises(TypeResolutionError):
		type_thunk_name(["A", "B"])


def test_expand_type_thunks_keeps_single_producers_lazy():
	single = lambda: "A"  # noqa: E731
	expanded = expand_type_thunks(["X", single, lambda: ["B", "C"], ("D",)])
	assert expanded == ["X", single, "B", "C", "D"]
