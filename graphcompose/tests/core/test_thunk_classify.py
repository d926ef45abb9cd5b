# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from graphql import GraphQLInt, GraphQLList, GraphQLObjectType

from graphcompose.core.errors import TypeResolutionError
from graphcompose.core.thunk import ThunkKind, TypeRef, classify_thunk, parse_type_ref
from graphcompose.object_type_composer import ObjectTypeComposer


def test_classify_every_thunk_kind():
	obj = GraphQLObjectType("A", fields=lambda: {})
	assert classify_thunk("User") is ThunkKind.NAME
	assert classify_thunk("  User \n") is ThunkKind.NAME
	assert classify_thunk("[User]!") is ThunkKind.NAME
	assert classify_thunk("type User { id: ID }") is ThunkKind.DEFINITION
	assert classify_thunk(obj) is ThunkKind.TYPE
	assert classify_thunk(GraphQLList(GraphQLInt)) is ThunkKind.TYPE
	assert classify_thunk(ObjectTypeComposer.create_temp("User")) is ThunkKind.COMPOSER
	assert classify_thunk(lambda: "User") is ThunkKind.PRODUCER
	assert classify_thunk(["A", "B"]) is ThunkKind.SEQUENCE
	assert classify_thunk(("A",)) is ThunkKind.SEQUENCE


@pytest.mark.parametrize("value", [42, None, 1.5, {"name": "A"}])
def test_classify_rejects_unsupported_values(value):
	with pytest.raises(TypeResolutionError, match="Unsupported type thunk"):
		classify_thunk(value)


def test_parse_type_ref_wrappers_outermost_first():
	assert parse_type_ref("User") == TypeRef("User")
	assert parse_type_ref("User!") == TypeRef("User", ("non_null",))
	assert parse_type_ref("[User]") == TypeRef("User", ("list",))
	assert parse_type_ref("[User!]!") == TypeRef("User", ("non_null", "list", "non_null"))


@pytest.mark.parametrize("text", ["", "User!!", "[User", "User]", "union U = A", "1User"])
def test_parse_type_ref_rejects_non_references(text):
	assert parse_type_ref(text) is None
