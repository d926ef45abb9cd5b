# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import asyncio
import inspect

import pytest
from graphql import GraphQLObjectType

from graphcompose.core.errors import InvalidCheckFunction, InvalidTarget
from graphcompose.object_type_composer import ObjectTypeComposer
from graphcompose.type_resolver_map import TypeResolverMap


def _obj(name: str) -> GraphQLObjectType:
	return GraphQLObjectType(name, fields=lambda: {})


def test_add_has_get_remove():
	person = ObjectTypeComposer.create("Person")
	trm = TypeResolverMap()
	check = lambda value: "age" in value  # noqa: E731
	trm.add(person, check)
	assert trm.has(person)
	assert person in trm
	assert trm.get(person) is check
	# a composer and its materialized type address the same entry
	assert trm.has(person.get_type())
	trm.remove(person.get_type())
	assert not trm.has(person)
	assert trm.get(person) is None
	trm.remove(person)


def test_add_rejects_bad_entries():
	trm = TypeResolverMap()
	with pytest.raises(InvalidTarget):
		trm.add(False, lambda value: True)
	with pytest.raises(InvalidTarget):
		trm.add("Person", lambda value: True)
	with pytest.raises(InvalidCheckFunction, match="'Person'"):
		trm.add(_obj("Person"), True)
	assert len(trm) == 0


def test_re_adding_keeps_insertion_position():
	a, b = _obj("A"), _obj("B")
	trm = TypeResolverMap([(a, lambda v: False), (b, lambda v: False)])
	replacement = lambda v: True  # noqa: E731
	trm.add(a, replacement)
	assert trm.names() == ["A", "B"]
	assert trm.get_all()[a] is replacement


def test_set_all_validates_before_replacing():
	a = _obj("A")
	trm = TypeResolverMap({a: lambda v: True})
	with pytest.raises(InvalidCheckFunction):
		trm.set_all({_obj("B"): lambda v: True, _obj("C"): "not callable"})
	with pytest.raises(InvalidTarget):
		trm.set_all([(None, lambda v: True)])
	assert trm.names() == ["A"]


def test_get_all_is_a_copy():
	trm = TypeResolverMap({_obj("A"): lambda v: True})
	snapshot = trm.get_all()
	snapshot.clear()
	assert len(trm) == 1


def test_types_resolves_composers():
	person = ObjectTypeComposer.create("Person")
	a = _obj("A")
	trm = TypeResolverMap({person: lambda v: True, a: lambda v: True})
	assert trm.types() == [person.get_type(), a]


def test_sync_dispatch_uses_first_truthy_check():
	a, b, c = _obj("A"), _obj("B"), _obj("C")
	seen = []

	def check(name, answer):
		def fn(value):
			seen.append(name)
			return answer

		return fn

	trm = TypeResolverMap([(a, check("A", False)), (b, check("B", True)), (c, check("C", True))])
	dispatch = trm.compile()
	assert dispatch({}) == "B"
	# C is never consulted once B matched
	assert seen == ["A", "B"]


def test_sync_dispatch_without_match_returns_none():
	trm = TypeResolverMap({_obj("A"): lambda v: False})
	assert trm.compile()({"x": 1}) is None


def test_dispatch_passes_the_value_to_checks():
	red, blue = _obj("KindRed"), _obj("KindBlue")
	trm = TypeResolverMap(
		[
			(red, lambda value: value.get("kind") == "red"),
			(blue, lambda value: value.get("kind") == "blue"),
		]
	)
	dispatch = trm.compile()
	assert dispatch({"kind": "blue"}, None, None) == "KindBlue"
	assert dispatch({"kind": "red"}) == "KindRed"


def test_targets_are_resolved_at_compile_time():
	person = ObjectTypeComposer.create("Person")
	trm = TypeResolverMap({person: lambda v: True})
	person.set_type_name("Human")
	assert trm.compile()({}) == "Human"


def test_async_check_makes_dispatch_async_and_sequential():
	a, b, c = _obj("A"), _obj("B"), _obj("C")
	order = []

	async def slow_false(value):
		order.append("A:start")
		await asyncio.sleep(0.01)
		order.append("A:end")
		return False

	async def fast_true(value):
		order.append("B")
		return True

	trm = TypeResolverMap([(a, slow_false), (b, fast_true), (c, lambda v: True)])
	dispatch = trm.compile()
	assert inspect.iscoroutinefunction(dispatch)
	pending = dispatch({})
	assert inspect.isawaitable(pending)
	assert asyncio.run(pending) == "B"
	assert order == ["A:start", "A:end", "B"]


def test_sync_check_returning_awaitable_switches_to_async():
	a, b, c = _obj("A"), _obj("B"), _obj("C")

	async def answer(result):
		return result

	trm = TypeResolverMap(
		[
			(a, lambda v: False),
			(b, lambda v: answer(False)),
			(c, lambda v: answer(True)),
		]
	)
	dispatch = trm.compile()
	assert not inspect.iscoroutinefunction(dispatch)
	pending = dispatch({})
	assert inspect.isawaitable(pending)
	assert asyncio.run(pending) == "C"


def test_sync_prefix_match_stays_synchronous():
	a, b = _obj("A"), _obj("B")

	async def never_awaited(value):
		raise AssertionError("later checks must not run")

	trm = TypeResolverMap([(a, lambda v: True), (b, lambda v: never_awaited(v))])
	assert trm.compile()({}) == "A"


def test_copy_is_independent():
	a, b = _obj("A"), _obj("B")
	trm = TypeResolverMap({a: lambda v: True})
	copied = trm.copy()
	copied.add(b, lambda v: True)
	assert trm.names() == ["A"]
	assert copied.names() == ["A", "B"]
	copied.clear()
	assert len(trm) == 1
