# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Composed unions executed end to end through graphql-core."""

from __future__ import annotations

import asyncio

from graphql import GraphQLField, GraphQLList, GraphQLObjectType, GraphQLSchema, graphql, graphql_sync

from graphcompose.object_type_composer import ObjectTypeComposer
from graphcompose.union_type_composer import UnionTypeComposer

QUERY = """
{
  search {
    __typename
    ... on Person { age }
    ... on Robot { model }
  }
}
"""

RESULTS = [{"age": 30}, {"model": "T-800"}]


def _schema(union: UnionTypeComposer) -> GraphQLSchema:
	query = GraphQLObjectType(
		"Query",
		fields={"search": GraphQLField(GraphQLList(union.get_type()), resolve=lambda obj, info: RESULTS)},
	)
	return GraphQLSchema(query=query)


def test_sync_type_resolvers_drive_execution():
	union = UnionTypeComposer.create("union SearchResult = Person | Robot")
	person = ObjectTypeComposer.create("type Person { age: Int }")
	robot = ObjectTypeComposer.create("type Robot { model: String }")
	union.add_type_resolver(person, lambda value: "age" in value)
	union.add_type_resolver(robot, lambda value: "model" in value)

	result = graphql_sync(_schema(union), QUERY)
	assert result.errors is None
	assert result.data == {
		"search": [
			{"__typename": "Person", "age": 30},
			{"__typename": "Robot", "model": "T-800"},
		]
	}


def test_async_type_resolvers_drive_execution():
	union = UnionTypeComposer.create({"name": "SearchResult", "types": lambda: ["Person", "Robot"]})
	person = ObjectTypeComposer.create("type Person { age: Int }")
	robot = ObjectTypeComposer.create("type Robot { model: String }")

	async def is_person(value):
		await asyncio.sleep(0)
		return "age" in value

	async def is_robot(value):
		return "model" in value

	union.set_type_resolvers([(person, is_person), (robot, is_robot)])

	result = asyncio.run(graphql(_schema(union), QUERY))
	assert result.errors is None
	assert [item["__typename"] for item in result.data["search"]] == ["Person", "Robot"]
