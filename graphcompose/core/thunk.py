# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type thunk classification.

A type thunk is a deferred reference to a GraphQL type. Composers store thunks
verbatim and only the resolver turns them into concrete types, so the only
thing this module does is tell the variants apart:

  NAME        "User", or a wrapped reference such as "[User]!"
  DEFINITION  inline definition text, e.g. "type User { id: ID }"
  TYPE        a graphql-core type value (named or wrapper)
  COMPOSER    a composer from this package
  PRODUCER    a zero-argument callable returning any of these
  SEQUENCE    a list/tuple of thunks
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional, Sequence, Union

from graphql import GraphQLType

from graphcompose.composer_base import NamedTypeComposer
from graphcompose.core.errors import TypeResolutionError
from graphcompose.core.names import NAME_RE

TypeThunk = Union[str, GraphQLType, NamedTypeComposer, Callable[[], Any], Sequence[Any]]


class ThunkKind(Enum):
	NAME = auto()
	DEFINITION = auto()
	TYPE = auto()
	COMPOSER = auto()
	PRODUCER = auto()
	SEQUENCE = auto()


@dataclass(frozen=True)
class TypeRef:
	"""Parsed textual reference: a base name plus wrappers, outermost first."""

	name: str
	wrappers: tuple[str, ...] = ()  # each entry is "list" or "non_null"


def parse_type_ref(text: str) -> Optional[TypeRef]:
	"""
	Parse `Name`, `[Name]`, `Name!`, `[Name!]!` ... into a TypeRef.

	Returns None when `text` is not a type reference (the caller then treats it
	as inline definition text).
	"""
	text = text.strip()
	if not text:
		return None
	if NAME_RE.match(text):
		return TypeRef(name=text)
	if text.endswith("!"):
		inner = parse_type_ref(text[:-1])
		# `Name!!` is not a valid reference
		if inner is None or (inner.wrappers and inner.wrappers[0] == "non_null"):
			return None
		return TypeRef(name=inner.name, wrappers=("non_null", *inner.wrappers))
	if text.startswith("[") and text.endswith("]"):
		inner = parse_type_ref(text[1:-1])
		if inner is None:
			return None
		return TypeRef(name=inner.name, wrappers=("list", *inner.wrappers))
	return None


def classify_thunk(thunk: object) -> ThunkKind:
	"""Return the ThunkKind of `thunk` or raise TypeResolutionError."""
	if isinstance(thunk, NamedTypeComposer):
		return ThunkKind.COMPOSER
	if isinstance(thunk, GraphQLType):
		return ThunkKind.TYPE
	if isinstance(thunk, str):
		if parse_type_ref(thunk) is not None:
			return ThunkKind.NAME
		return ThunkKind.DEFINITION
	if isinstance(thunk, (list, tuple)):
		return ThunkKind.SEQUENCE
	if callable(thunk):
		return ThunkKind.PRODUCER
	raise TypeResolutionError(f"Unsupported type thunk: {thunk!r}")


__all__ = ["NAME_RE", "TypeThunk", "ThunkKind", "TypeRef", "parse_type_ref", "classify_thunk"]
