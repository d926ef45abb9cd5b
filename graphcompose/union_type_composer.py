# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Union type composer.

Wraps one mutable union definition: name, description, an ordered list of
member type thunks and a polymorphic resolver map. Members are stored exactly
as given; nothing is resolved until `get_types()` or `get_type()` runs, which
is what allows a union to name members that are defined later.

Construction forms (each registers the result unless `create_temp` is used):

  UnionTypeComposer.create("SearchResult")                 empty union
  UnionTypeComposer.create("union SearchResult = A | B")   inline definition
  UnionTypeComposer.create({"name": ..., "types": ...})    config mapping
  UnionTypeComposer.create(UnionTypeConfig(...))           config dataclass
  UnionTypeComposer.create(GraphQLUnionType(...))          wrap concrete type

Every mutator invalidates the materialized type and returns the composer.
Duplicate members (same resolved name) are dropped at materialization, the
first occurrence wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from graphql import GraphQLObjectType, GraphQLUnionType

from graphcompose.composer_base import NamedTypeComposer
from graphcompose.core.errors import TypeResolutionError
from graphcompose.core.names import assert_valid_name, is_valid_name
from graphcompose.core.thunk import ThunkKind, classify_thunk
from graphcompose.registry import SchemaComposer
from graphcompose.sdl import UnionDef, parse_definition
from graphcompose.type_resolver import expand_type_thunks, resolve_type_thunks, type_thunk_name
from graphcompose.type_resolver_map import CheckFn, TypeResolverMap

logger = logging.getLogger(__name__)

_CONFIG_KEYS = {"name", "types", "description"}

NameOrNames = Union[str, Iterable[str]]


@dataclass
class UnionTypeConfig:
	name: str
	types: Any = None
	description: Optional[str] = None


class UnionTypeComposer(NamedTypeComposer):
	def __init__(
		self,
		gql_type: Optional[GraphQLUnionType] = None,
		*,
		name: Optional[str] = None,
		description: Optional[str] = None,
		sc: Optional[SchemaComposer] = None,
	) -> None:
		"""
		Wrap `gql_type` without registering it, or start an empty union named
		`name`. The wrapped type is returned by `get_type()` until the first
		mutation; its own `resolve_type` stays in effect while no type resolvers
		are added.
		"""
		self._types: List[Any] = []
		self._type_resolvers = TypeResolverMap()
		self._fallback_resolve_type: Optional[Callable[..., Any]] = None
		if gql_type is not None:
			if not isinstance(gql_type, GraphQLUnionType):
				raise TypeError(f"UnionTypeComposer wraps a GraphQLUnionType, got {gql_type!r}")
			super().__init__(name=gql_type.name, description=gql_type.description, sc=sc)
			self._types = list(gql_type.types)
			self._fallback_resolve_type = gql_type.resolve_type
			self._gql_type = gql_type
			return
		if name is None:
			raise TypeError("UnionTypeComposer needs either a GraphQLUnionType or a name")
		super().__init__(name=name, description=description, sc=sc)

	@classmethod
	def create_temp(cls, type_def: Any, *, sc: Optional[SchemaComposer] = None) -> "UnionTypeComposer":
		if isinstance(type_def, GraphQLUnionType):
			return cls(type_def, sc=sc)
		if isinstance(type_def, str):
			if is_valid_name(type_def.strip()):
				return cls(name=type_def.strip(), sc=sc)
			definition = parse_definition(type_def)
			if not isinstance(definition, UnionDef):
				raise TypeError(f"Expected a union type definition, got: {type_def.strip()!r}")
			return cls.from_definition(definition, sc=sc)
		if isinstance(type_def, UnionTypeConfig):
			return cls._from_config(
				{"name": type_def.name, "types": type_def.types, "description": type_def.description}, sc=sc
			)
		if isinstance(type_def, Mapping):
			return cls._from_config(type_def, sc=sc)
		raise TypeError(f"Cannot create UnionTypeComposer from {type_def!r}")

	@classmethod
	def from_definition(cls, definition: UnionDef, *, sc: Optional[SchemaComposer] = None) -> "UnionTypeComposer":
		composer = cls(name=definition.name, description=definition.description, sc=sc)
		composer._types = list(definition.types)
		return composer

	@classmethod
	def _from_config(cls, config: Mapping[str, Any], *, sc: Optional[SchemaComposer]) -> "UnionTypeComposer":
		unknown = set(config) - _CONFIG_KEYS
		if unknown:
			raise TypeError(f"Unknown union type config keys: {sorted(unknown)}")
		if "name" not in config:
			raise TypeError("Union type config requires 'name'")
		composer = cls(name=assert_valid_name(config["name"]), sc=sc)
		composer.set_description(config.get("description"))
		types = config.get("types")
		if types is not None:
			# a producer of a list stays one lazy member until materialization
			composer.set_types(types if isinstance(types, (list, tuple)) else [types])
		return composer

	# -- members ---------------------------------------------------------------

	def get_types(self) -> List[GraphQLObjectType]:
		"""
		Resolve every member, in order, dropping later duplicates by name.

		Raises the resolver's error (e.g. NotFound) for the first member that
		cannot be resolved.
		"""
		return self._resolve_members(self._types)

	def _resolve_members(self, members: List[Any]) -> List[GraphQLObjectType]:
		seen: set[str] = set()
		out: List[GraphQLObjectType] = []
		for member in members:
			for resolved in resolve_type_thunks(member, self.sc):
				if not isinstance(resolved, GraphQLObjectType):
					raise TypeResolutionError(
						f"Union '{self._name}' can only contain object types, got {resolved!r}"
					)
				if resolved.name in seen:
					continue
				seen.add(resolved.name)
				out.append(resolved)
		return out

	def get_type_names(self) -> List[str]:
		"""Member names in order, without resolving name or concrete-type members."""
		names: List[str] = []
		for member in expand_type_thunks(self._types):
			name = type_thunk_name(member)
			if name not in names:
				names.append(name)
		return names

	def has_type(self, name: str) -> bool:
		return name in self.get_type_names()

	def add_type(self, thunk: Any) -> "UnionTypeComposer":
		classify_thunk(thunk)
		self._types.append(thunk)
		self._invalidate()
		return self

	def add_types(self, thunks: Iterable[Any]) -> "UnionTypeComposer":
		for thunk in _as_list(thunks):
			self.add_type(thunk)
		return self

	def set_types(self, thunks: Iterable[Any]) -> "UnionTypeComposer":
		thunks = _as_list(thunks)
		for thunk in thunks:
			classify_thunk(thunk)
		self._types = list(thunks)
		self._invalidate()
		return self

	def remove_type(self, names: NameOrNames) -> "UnionTypeComposer":
		"""
		Drop members whose name is in `names`; unknown names are ignored.

		Producers are not invoked here. A producer member is replaced by one
		that filters what it returns on every call.
		"""
		drop = _as_names(names)
		self._types = _filter_members(self._types, lambda name: name not in drop)
		self._invalidate()
		return self

	def remove_other_types(self, names: NameOrNames) -> "UnionTypeComposer":
		"""Keep only members whose name is in `names`; producers stay lazy."""
		keep = _as_names(names)
		self._types = _filter_members(self._types, lambda name: name in keep)
		self._invalidate()
		return self

	def clear_types(self) -> "UnionTypeComposer":
		self._types = []
		self._invalidate()
		return self

	def clone(self, new_name: str) -> "UnionTypeComposer":
		"""
		Copy into a new composer registered under `new_name`.

		The member list and resolver map are copied; the thunks themselves are
		shared. Mutating either composer afterwards never affects the other.
		"""
		cloned = type(self)(name=new_name, description=self._description, sc=self.sc)
		cloned._types = list(self._types)
		cloned._type_resolvers = self._type_resolvers.copy()
		cloned._fallback_resolve_type = self._fallback_resolve_type
		return self._register_clone(cloned)

	# -- type resolvers ----------------------------------------------------------

	def get_type_resolvers(self) -> Dict[Any, CheckFn]:
		return self._type_resolvers.get_all()

	def set_type_resolvers(
		self, entries: Union[Mapping[Any, CheckFn], Iterable[Tuple[Any, CheckFn]]]
	) -> "UnionTypeComposer":
		self._type_resolvers.set_all(entries)
		self._invalidate()
		return self

	def add_type_resolver(self, target: Any, check_fn: CheckFn) -> "UnionTypeComposer":
		self._type_resolvers.add(target, check_fn)
		self._invalidate()
		return self

	def remove_type_resolver(self, target: Any) -> "UnionTypeComposer":
		self._type_resolvers.remove(target)
		self._invalidate()
		return self

	def clear_type_resolvers(self) -> "UnionTypeComposer":
		self._type_resolvers.clear()
		self._invalidate()
		return self

	def has_type_resolver(self, target: Any) -> bool:
		return self._type_resolvers.has(target)

	def get_type_resolver_check_fn(self, target: Any) -> Optional[CheckFn]:
		return self._type_resolvers.get(target)

	def get_type_resolver_names(self) -> List[str]:
		return self._type_resolvers.names()

	def get_type_resolver_types(self) -> List[GraphQLObjectType]:
		return self._type_resolvers.types(self.sc)

	# -- materialization ---------------------------------------------------------

	def _build_type(self) -> GraphQLUnionType:
		resolve_type = self._fallback_resolve_type
		if self._type_resolvers:
			resolve_type = self._type_resolvers.compile(self.sc)
		members = list(self._types)
		logger.debug("union '%s' members: %s", self._name, members)
		return GraphQLUnionType(
			self._name,
			# later mutations must not leak into an already materialized type
			types=lambda: self._resolve_members(members),
			resolve_type=resolve_type,
			description=self._description,
		)


def _as_list(thunks: Any) -> List[Any]:
	if isinstance(thunks, (list, tuple)):
		return list(thunks)
	raise TypeError(f"Expected a list of type thunks, got {thunks!r}")


def _as_names(names: NameOrNames) -> set[str]:
	if isinstance(names, str):
		return {names}
	out = set(names)
	for name in out:
		if not isinstance(name, str):
			raise TypeError(f"Type names must be strings, got {name!r}")
	return out


def _filter_members(members: Iterable[Any], keep: Callable[[str], bool]) -> List[Any]:
	out: List[Any] = []
	for member in members:
		kind = classify_thunk(member)
		if kind is ThunkKind.SEQUENCE:
			out.append(_filter_members(member, keep))
		elif kind is ThunkKind.PRODUCER:
			out.append(_filtered_producer(member, keep))
		elif keep(type_thunk_name(member)):
			out.append(member)
	return out


def _filtered_producer(producer: Callable[[], Any], keep: Callable[[str], bool]) -> Callable[[], Any]:
	def produce() -> Any:
		produced = producer()
		if classify_thunk(produced) is ThunkKind.SEQUENCE:
			return _filter_members(produced, keep)
		kept = _filter_members([produced], keep)
		return kept[0] if kept else []

	return produce


__all__ = ["UnionTypeConfig", "UnionTypeComposer"]
