# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
State shared by every composer: name, description, owning session and the
materialized-type cache.

Subclasses implement `create_temp` (build an unregistered composer from any
accepted definition form) and `_build_type` (compile the current mutable state
into a graphql-core type). Everything that mutates state must call
`_invalidate()` so the next `get_type()` recompiles.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from graphql import GraphQLList, GraphQLNamedType, GraphQLNonNull

from graphcompose.core.names import assert_valid_name
from graphcompose.core.options import DuplicatePolicy
from graphcompose.registry import SchemaComposer, schema_composer

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="NamedTypeComposer")


class NamedTypeComposer:
	def __init__(
		self,
		*,
		name: str,
		description: Optional[str] = None,
		sc: Optional[SchemaComposer] = None,
	) -> None:
		# `sc or ...` would treat an empty registry as missing
		self.sc: SchemaComposer = sc if sc is not None else schema_composer
		self._name = assert_valid_name(name)
		self._description = description
		self._gql_type: Optional[GraphQLNamedType] = None

	@classmethod
	def create_temp(cls: type[C], type_def: Any, *, sc: Optional[SchemaComposer] = None) -> C:
		"""Build a composer owned solely by the caller (never registered)."""
		raise NotImplementedError

	@classmethod
	def create(cls: type[C], type_def: Any, *, sc: Optional[SchemaComposer] = None) -> C:
		"""Build a composer and register it under its name."""
		composer = cls.create_temp(type_def, sc=sc)
		composer.sc.register(composer)
		return composer

	@classmethod
	def get_or_create(cls: type[C], type_def: Any, *, sc: Optional[SchemaComposer] = None) -> C:
		"""Return the registered composer for the definition's name, creating it if absent."""
		composer = cls.create_temp(type_def, sc=sc)
		registered = composer.sc.register(composer, on_duplicate=DuplicatePolicy.KEEP)
		if not isinstance(registered, cls):
			raise TypeError(
				f"Type '{composer.get_type_name()}' is already registered as {type(registered).__name__}"
			)
		return registered

	def get_type_name(self) -> str:
		return self._name

	def set_type_name(self: C, name: str) -> C:
		"""Rename the type. The registry entry under the old name is left untouched."""
		self._name = assert_valid_name(name)
		self._invalidate()
		return self

	def get_description(self) -> Optional[str]:
		return self._description

	def set_description(self: C, description: Optional[str]) -> C:
		if description is not None and not isinstance(description, str):
			raise TypeError(f"Description must be a string or None, got {description!r}")
		self._description = description
		self._invalidate()
		return self

	def get_type(self) -> GraphQLNamedType:
		if self._gql_type is None:
			logger.debug("materializing %s '%s'", type(self).__name__, self._name)
			self._gql_type = self._build_type()
		return self._gql_type

	def get_type_plural(self) -> GraphQLList:
		return GraphQLList(self.get_type())

	def get_type_non_null(self) -> GraphQLNonNull:
		return GraphQLNonNull(self.get_type())

	def _build_type(self) -> GraphQLNamedType:
		raise NotImplementedError

	def _register_clone(self, cloned: C) -> C:
		# a clone is always its own entry; KEEP would hand back the occupant
		policy = self.sc.options.on_duplicate
		if policy is DuplicatePolicy.KEEP:
			policy = DuplicatePolicy.ERROR
		self.sc.register(cloned, on_duplicate=policy)
		return cloned

	def _invalidate(self) -> None:
		self._gql_type = None

	def __repr__(self) -> str:
		return f"<{type(self).__name__} '{self._name}'>"


__all__ = ["NamedTypeComposer"]
