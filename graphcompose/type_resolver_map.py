# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Polymorphic resolver map for abstract (union) types.

An ordered mapping from an object type (or the composer that builds it) to a
check function `(value) -> bool | Awaitable[bool]`. Insertion order is
priority order: the first check returning a truthy result picks the type.

`compile()` turns the map into the `resolve_type` callable graphql-core invokes
while executing a query. Targets are resolved at compile time, so a composer
that is renamed or rebuilt before compilation still resolves to its current
type. The returned value is the type *name*, which is what graphql-core 3.2+
expects from `resolve_type`.

Checks are always evaluated one at a time in insertion order, never raced:

  - if any check is a coroutine function the compiled dispatcher is a
    coroutine function itself;
  - otherwise dispatch is synchronous until a check returns an awaitable, at
    which point the rest of the evaluation continues in a coroutine that is
    returned to the engine.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from graphql import GraphQLObjectType, GraphQLResolveInfo
from graphql.pyutils import is_awaitable

from graphcompose.core.errors import InvalidCheckFunction, InvalidTarget
from graphcompose.object_type_composer import ObjectTypeComposer
from graphcompose.registry import SchemaComposer
from graphcompose.type_resolver import resolve_type_thunk

logger = logging.getLogger(__name__)

CheckFn = Callable[[Any], Union[bool, Awaitable[bool]]]
Dispatch = Callable[..., Union[Optional[str], Awaitable[Optional[str]]]]


class TypeResolverMap:
	def __init__(self, entries: Union[Mapping[Any, CheckFn], Iterable[Tuple[Any, CheckFn]], None] = None) -> None:
		self._entries: Dict[Any, CheckFn] = {}
		if entries is not None:
			self.set_all(entries)

	def add(self, target: Any, check_fn: CheckFn) -> None:
		"""Add or replace the check for `target`; replacing keeps the original position."""
		_validate_entry(target, check_fn)
		key = self._find_key(target)
		self._entries[key if key is not None else target] = check_fn

	def remove(self, target: Any) -> None:
		key = self._find_key(target)
		if key is not None:
			del self._entries[key]

	def has(self, target: Any) -> bool:
		return self._find_key(target) is not None

	def get(self, target: Any) -> Optional[CheckFn]:
		key = self._find_key(target)
		return self._entries[key] if key is not None else None

	def get_all(self) -> Dict[Any, CheckFn]:
		return dict(self._entries)

	def set_all(self, entries: Union[Mapping[Any, CheckFn], Iterable[Tuple[Any, CheckFn]]]) -> None:
		"""Replace every entry. Nothing changes unless all entries are valid."""
		pairs = list(entries.items()) if isinstance(entries, Mapping) else list(entries)
		for target, check_fn in pairs:
			_validate_entry(target, check_fn)
		self._entries = {}
		for target, check_fn in pairs:
			self.add(target, check_fn)

	def clear(self) -> None:
		self._entries.clear()

	def names(self) -> List[str]:
		return [name for name in map(_target_name, self._entries) if name is not None]

	def types(self, sc: Optional[SchemaComposer] = None) -> List[GraphQLObjectType]:
		return [_resolve_target(target, sc) for target in self._entries]

	def copy(self) -> "TypeResolverMap":
		return TypeResolverMap(self._entries)

	def compile(self, sc: Optional[SchemaComposer] = None) -> Dispatch:
		"""Build the `resolve_type` callable for the current entries."""
		checks: List[Tuple[str, CheckFn]] = [
			(_resolve_target(target, sc).name, check_fn) for target, check_fn in self._entries.items()
		]
		if any(inspect.iscoroutinefunction(check_fn) for _, check_fn in checks):
			logger.debug("compiled async type dispatch over %s", [name for name, _ in checks])
			return _async_dispatcher(checks)
		logger.debug("compiled type dispatch over %s", [name for name, _ in checks])
		return _sync_dispatcher(checks)

	def _find_key(self, target: Any) -> Any:
		for key in self._entries:
			if key is target:
				return key
		name = _target_name(target)
		if name is None:
			return None
		for key in self._entries:
			if _target_name(key) == name:
				return key
		return None

	def __contains__(self, target: object) -> bool:
		return self.has(target)

	def __iter__(self) -> Iterator[Any]:
		return iter(list(self._entries))

	def __len__(self) -> int:
		return len(self._entries)


def _sync_dispatcher(checks: List[Tuple[str, CheckFn]]) -> Dispatch:
	def resolve_type(
		value: Any, info: Optional[GraphQLResolveInfo] = None, abstract_type: Any = None
	) -> Union[Optional[str], Awaitable[Optional[str]]]:
		for index, (name, check_fn) in enumerate(checks):
			result = check_fn(value)
			if is_awaitable(result):
				return _resume_async(value, checks, index, result)
			if result:
				return name
		return None

	return resolve_type


def _async_dispatcher(checks: List[Tuple[str, CheckFn]]) -> Dispatch:
	async def resolve_type(
		value: Any, info: Optional[GraphQLResolveInfo] = None, abstract_type: Any = None
	) -> Optional[str]:
		for name, check_fn in checks:
			result = check_fn(value)
			if is_awaitable(result):
				result = await result
			if result:
				return name
		return None

	return resolve_type


async def _resume_async(
	value: Any, checks: List[Tuple[str, CheckFn]], index: int, pending: Awaitable[bool]
) -> Optional[str]:
	if await pending:
		return checks[index][0]
	for name, check_fn in checks[index + 1 :]:
		result = check_fn(value)
		if is_awaitable(result):
			result = await result
		if result:
			return name
	return None


def _validate_entry(target: Any, check_fn: Any) -> None:
	if not isinstance(target, (GraphQLObjectType, ObjectTypeComposer)):
		raise InvalidTarget(target)
	if not callable(check_fn):
		raise InvalidCheckFunction(_target_name(target), check_fn)


def _target_name(target: Any) -> Optional[str]:
	if isinstance(target, GraphQLObjectType):
		return target.name
	if isinstance(target, ObjectTypeComposer):
		return target.get_type_name()
	return None


def _resolve_target(target: Any, sc: Optional[SchemaComposer]) -> GraphQLObjectType:
	resolved = resolve_type_thunk(target, sc)
	if not isinstance(resolved, GraphQLObjectType):
		raise InvalidTarget(resolved)
	return resolved


__all__ = ["CheckFn", "Dispatch", "TypeResolverMap"]
