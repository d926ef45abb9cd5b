# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type registry for one schema-assembly session.

A `SchemaComposer` maps a type name to the composer that owns the mutable
definition for that name. It is the single source of truth the resolver
consults for bare-name references, which is what makes forward references
work: a name may be referenced before its composer exists, as long as
resolution happens after the composer is registered.

The registry only stores composers. It does not follow renames: a composer
renamed through `set_type_name` stays registered under the old name until the
caller re-registers it.

`schema_composer` is the process-wide default session. Independent assemblies
should construct their own `SchemaComposer` and pass it as `sc=` to the
composers; `clear()` starts a new session in place and must not be called in
the middle of an assembly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from graphcompose.core.errors import DuplicateRegistration, NotFound
from graphcompose.core.options import ComposerOptions, DuplicatePolicy

if TYPE_CHECKING:
	from graphcompose.composer_base import NamedTypeComposer
	from graphcompose.object_type_composer import ObjectTypeComposer
	from graphcompose.union_type_composer import UnionTypeComposer

logger = logging.getLogger(__name__)


class SchemaComposer:
	"""Name -> composer store for one schema-assembly session."""

	def __init__(self, options: Optional[ComposerOptions] = None) -> None:
		self.options = options or ComposerOptions()
		self._types: Dict[str, "NamedTypeComposer"] = {}

	def get(self, name: str) -> "NamedTypeComposer":
		try:
			return self._types[name]
		except KeyError:
			raise NotFound(name) from None

	def set(self, name: str, composer: "NamedTypeComposer") -> None:
		"""Register `composer` under `name`, replacing any previous entry."""
		if name in self._types and self._types[name] is not composer:
			logger.debug("replacing registry entry '%s'", name)
		self._types[name] = composer

	def has(self, name: str) -> bool:
		return name in self._types

	def delete(self, name: str) -> None:
		self._types.pop(name, None)

	def clear(self) -> None:
		logger.debug("clearing registry (%d entries)", len(self._types))
		self._types.clear()

	def names(self) -> List[str]:
		return list(self._types)

	def register(
		self,
		composer: "NamedTypeComposer",
		*,
		on_duplicate: Optional[DuplicatePolicy] = None,
	) -> "NamedTypeComposer":
		"""
		Insert `composer` under its current type name.

		Returns the composer that ends up registered: with DuplicatePolicy.KEEP
		that is the pre-existing entry, otherwise `composer` itself.
		"""
		policy = on_duplicate or self.options.on_duplicate
		name = composer.get_type_name()
		existing = self._types.get(name)
		if existing is not None and existing is not composer:
			if policy is DuplicatePolicy.ERROR:
				raise DuplicateRegistration(name)
			if policy is DuplicatePolicy.KEEP:
				return existing
		logger.debug("registering %s '%s'", type(composer).__name__, name)
		self._types[name] = composer
		return composer

	def get_otc(self, name: str) -> "ObjectTypeComposer":
		from graphcompose.object_type_composer import ObjectTypeComposer

		composer = self.get(name)
		if not isinstance(composer, ObjectTypeComposer):
			raise TypeError(f"Type '{name}' is a {type(composer).__name__}, not an ObjectTypeComposer")
		return composer

	def get_utc(self, name: str) -> "UnionTypeComposer":
		from graphcompose.union_type_composer import UnionTypeComposer

		composer = self.get(name)
		if not isinstance(composer, UnionTypeComposer):
			raise TypeError(f"Type '{name}' is a {type(composer).__name__}, not a UnionTypeComposer")
		return composer

	def get_or_create_otc(self, type_def: object) -> "ObjectTypeComposer":
		from graphcompose.object_type_composer import ObjectTypeComposer

		return ObjectTypeComposer.get_or_create(type_def, sc=self)

	def get_or_create_utc(self, type_def: object) -> "UnionTypeComposer":
		from graphcompose.union_type_composer import UnionTypeComposer

		return UnionTypeComposer.get_or_create(type_def, sc=self)

	def __contains__(self, name: object) -> bool:
		return name in self._types

	def __len__(self) -> int:
		return len(self._types)

	def __iter__(self) -> Iterator[str]:
		return iter(list(self._types))


schema_composer = SchemaComposer()


__all__ = ["SchemaComposer", "schema_composer"]
