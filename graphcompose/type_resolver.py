# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type reference resolver.

Turns a type thunk (see `graphcompose.core.thunk`) into a concrete graphql-core
type, consulting the session registry for bare names. This is the single
indirection point between what composers store and what the engine sees:

  TYPE        returned unchanged
  COMPOSER    the composer's materialized type (`get_type()`)
  PRODUCER    called with no arguments on every resolution (never memoized),
              and the result resolved again
  DEFINITION  parsed, turned into a composer, registered (get-or-create, so a
              second resolution of the same text hits the same entry) and
              resolved
  NAME        built-in scalar or registry lookup, NotFound otherwise; wrapped
              references such as "[User]!" wrap the looked-up type
  SEQUENCE    resolved element-wise; the first failure propagates

Producers are what make forward and mutually recursive graphs possible: the
referenced composer only has to exist by the time resolution runs.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from graphql import GraphQLList, GraphQLNamedType, GraphQLNonNull, GraphQLType, get_named_type, specified_scalar_types

from graphcompose.composer_base import NamedTypeComposer
from graphcompose.core.errors import NotFound, TypeResolutionError
from graphcompose.core.options import DuplicatePolicy
from graphcompose.core.thunk import ThunkKind, TypeRef, classify_thunk, parse_type_ref
from graphcompose.registry import SchemaComposer, schema_composer
from graphcompose.sdl import ObjectDef, UnionDef, parse_definition

logger = logging.getLogger(__name__)

Resolved = Union[GraphQLType, List[Any]]


def resolve_type_thunk(thunk: Any, sc: Optional[SchemaComposer] = None) -> Resolved:
	"""
	Resolve `thunk` to a concrete type (or a list of them for sequences).

	Raises NotFound for unknown bare names, DefinitionSyntaxError for malformed
	inline definitions and TypeResolutionError for unsupported values.
	"""
	sc = sc if sc is not None else schema_composer
	kind = classify_thunk(thunk)
	if kind is ThunkKind.TYPE:
		return thunk
	if kind is ThunkKind.COMPOSER:
		return thunk.get_type()
	if kind is ThunkKind.PRODUCER:
		return resolve_type_thunk(thunk(), sc)
	if kind is ThunkKind.DEFINITION:
		return composer_from_definition(thunk, sc).get_type()
	if kind is ThunkKind.NAME:
		ref = parse_type_ref(thunk)
		assert ref is not None
		return _wrap(ref, _lookup_named_type(ref.name, sc))
	return [resolve_type_thunk(item, sc) for item in thunk]


def resolve_type_thunks(thunk: Any, sc: Optional[SchemaComposer] = None) -> List[GraphQLType]:
	"""Resolve `thunk` and flatten the result into a list of concrete types."""
	resolved = resolve_type_thunk(thunk, sc)
	return _flatten(resolved)


def expand_type_thunks(thunks: Any) -> List[Any]:
	"""
	Flatten sequences (and producers that return sequences) into a list of
	element thunks without resolving any of them.

	Producers returning a single thunk are kept as-is so later resolutions
	still re-invoke them.
	"""
	if classify_thunk(thunks) is not ThunkKind.SEQUENCE:
		thunks = [thunks]
	out: List[Any] = []
	for item in thunks:
		kind = classify_thunk(item)
		if kind is ThunkKind.SEQUENCE:
			out.extend(expand_type_thunks(item))
		elif kind is ThunkKind.PRODUCER:
			produced = item()
			if classify_thunk(produced) is ThunkKind.SEQUENCE:
				out.extend(expand_type_thunks(produced))
			else:
				out.append(item)
		else:
			out.append(item)
	return out


def type_thunk_name(thunk: Any) -> str:
	"""
	Name of the named type `thunk` refers to.

	Names, concrete types and composers are answered without touching the
	registry; inline definitions are parsed but not registered; producers are
	invoked.
	"""
	kind = classify_thunk(thunk)
	if kind is ThunkKind.NAME:
		ref = parse_type_ref(thunk)
		assert ref is not None
		return ref.name
	if kind is ThunkKind.COMPOSER:
		return thunk.get_type_name()
	if kind is ThunkKind.TYPE:
		return get_named_type(thunk).name
	if kind is ThunkKind.DEFINITION:
		return parse_definition(thunk).name
	if kind is ThunkKind.PRODUCER:
		return type_thunk_name(thunk())
	raise TypeResolutionError(f"A sequence of type thunks has no single name: {thunk!r}")


def composer_from_definition(text: str, sc: Optional[SchemaComposer] = None) -> NamedTypeComposer:
	"""Parse inline definition text and return the registered composer for it."""
	from graphcompose.object_type_composer import ObjectTypeComposer
	from graphcompose.union_type_composer import UnionTypeComposer

	sc = sc if sc is not None else schema_composer
	definition = parse_definition(text)
	composer: NamedTypeComposer
	if isinstance(definition, UnionDef):
		composer = UnionTypeComposer.from_definition(definition, sc=sc)
	elif isinstance(definition, ObjectDef):
		composer = ObjectTypeComposer.from_definition(definition, sc=sc)
	else:
		raise TypeResolutionError(f"Unsupported type definition: {text.strip()!r}")
	registered = sc.register(composer, on_duplicate=DuplicatePolicy.KEEP)
	if registered is not composer:
		logger.debug("inline definition '%s' reuses the registered composer", definition.name)
	return registered


def _lookup_named_type(name: str, sc: SchemaComposer) -> GraphQLNamedType:
	scalar = specified_scalar_types.get(name)
	if scalar is not None:
		return scalar
	if not sc.has(name):
		raise NotFound(name)
	return sc.get(name).get_type()


def _wrap(ref: TypeRef, named: GraphQLNamedType) -> GraphQLType:
	result: GraphQLType = named
	for wrapper in reversed(ref.wrappers):
		if wrapper == "list":
			result = GraphQLList(result)
		else:
			result = GraphQLNonNull(result)
	return result


def _flatten(resolved: Resolved) -> List[GraphQLType]:
	if not isinstance(resolved, list):
		return [resolved]
	out: List[GraphQLType] = []
	for item in resolved:
		out.extend(_flatten(item))
	return out


__all__ = [
	"resolve_type_thunk",
	"resolve_type_thunks",
	"expand_type_thunks",
	"type_thunk_name",
	"composer_from_definition",
]
