# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Object type composer.

Holds a mutable object type definition: name, description and an ordered set
of fields whose types are stored as thunks. Field types are only resolved when
graphql-core reads `fields` on the materialized type, so a field may refer to
a type that is registered later.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from graphql import (
	GraphQLArgument,
	GraphQLField,
	GraphQLInterfaceType,
	GraphQLObjectType,
	GraphQLOutputType,
	is_output_type,
)

from graphcompose.composer_base import NamedTypeComposer
from graphcompose.core.errors import TypeResolutionError
from graphcompose.core.names import assert_valid_name, is_valid_name
from graphcompose.core.thunk import ThunkKind, classify_thunk
from graphcompose.registry import SchemaComposer
from graphcompose.sdl import ObjectDef, parse_definition
from graphcompose.type_resolver import resolve_type_thunk

_CONFIG_KEYS = {"name", "fields", "description"}
_FIELD_KEYS = {"type", "description", "resolve", "args", "deprecation_reason"}


@dataclass
class ComposeFieldConfig:
	"""One field of an object composer. `type` is an unresolved type thunk."""

	type: Any
	description: Optional[str] = None
	resolve: Optional[Callable[..., Any]] = None
	args: Optional[Dict[str, GraphQLArgument]] = None
	deprecation_reason: Optional[str] = None


FieldSpec = Union[ComposeFieldConfig, Mapping[str, Any], Any]


class ObjectTypeComposer(NamedTypeComposer):
	def __init__(
		self,
		gql_type: Optional[GraphQLObjectType] = None,
		*,
		name: Optional[str] = None,
		description: Optional[str] = None,
		sc: Optional[SchemaComposer] = None,
	) -> None:
		"""
		Wrap `gql_type` (without registering it), or start an empty composer
		named `name`. Use `create` / `create_temp` for the other forms.
		"""
		if gql_type is not None:
			if not isinstance(gql_type, GraphQLObjectType):
				raise TypeError(f"ObjectTypeComposer wraps a GraphQLObjectType, got {gql_type!r}")
			super().__init__(name=gql_type.name, description=gql_type.description, sc=sc)
			self._fields: Dict[str, ComposeFieldConfig] = {
				field_name: ComposeFieldConfig(
					type=field.type,
					description=field.description,
					resolve=field.resolve,
					args=dict(field.args) or None,
					deprecation_reason=field.deprecation_reason,
				)
				for field_name, field in gql_type.fields.items()
			}
			# rebuilt types keep what the composer does not edit
			self._interfaces: List[GraphQLInterfaceType] = list(gql_type.interfaces)
			self._is_type_of: Optional[Callable[..., Any]] = gql_type.is_type_of
			self._gql_type = gql_type
			return
		if name is None:
			raise TypeError("ObjectTypeComposer needs either a GraphQLObjectType or a name")
		super().__init__(name=name, description=description, sc=sc)
		self._fields = {}
		self._interfaces = []
		self._is_type_of = None

	@classmethod
	def create_temp(cls, type_def: Any, *, sc: Optional[SchemaComposer] = None) -> "ObjectTypeComposer":
		if isinstance(type_def, GraphQLObjectType):
			return cls(type_def, sc=sc)
		if isinstance(type_def, str):
			if is_valid_name(type_def.strip()):
				return cls(name=type_def.strip(), sc=sc)
			definition = parse_definition(type_def)
			if not isinstance(definition, ObjectDef):
				raise TypeError(f"Expected an object type definition, got: {type_def.strip()!r}")
			return cls.from_definition(definition, sc=sc)
		if isinstance(type_def, Mapping):
			return cls._from_config(type_def, sc=sc)
		raise TypeError(f"Cannot create ObjectTypeComposer from {type_def!r}")

	@classmethod
	def from_definition(cls, definition: ObjectDef, *, sc: Optional[SchemaComposer] = None) -> "ObjectTypeComposer":
		composer = cls(name=definition.name, description=definition.description, sc=sc)
		for field_def in definition.fields:
			# "[Int]!" style text round-trips through the name resolver
			composer._fields[field_def.name] = ComposeFieldConfig(
				type=str(field_def.type), description=field_def.description
			)
		return composer

	@classmethod
	def _from_config(cls, config: Mapping[str, Any], *, sc: Optional[SchemaComposer]) -> "ObjectTypeComposer":
		unknown = set(config) - _CONFIG_KEYS
		if unknown:
			raise TypeError(f"Unknown object type config keys: {sorted(unknown)}")
		if "name" not in config:
			raise TypeError("Object type config requires 'name'")
		composer = cls(name=assert_valid_name(config["name"]), sc=sc)
		composer.set_description(config.get("description"))
		fields = config.get("fields")
		if fields is not None:
			composer.add_fields(fields)
		return composer

	def get_fields(self) -> Dict[str, ComposeFieldConfig]:
		return dict(self._fields)

	def get_field_names(self) -> List[str]:
		return list(self._fields)

	def has_field(self, name: str) -> bool:
		return name in self._fields

	def get_field(self, name: str) -> ComposeFieldConfig:
		try:
			return self._fields[name]
		except KeyError:
			raise KeyError(f"Type '{self._name}' has no field '{name}'") from None

	def get_field_type(self, name: str) -> GraphQLOutputType:
		return self._resolve_field_type(name, self.get_field(name))

	def set_field(self, name: str, field: FieldSpec) -> "ObjectTypeComposer":
		self._fields[assert_valid_name(name)] = _field_config(name, field)
		self._invalidate()
		return self

	def add_fields(self, fields: Mapping[str, FieldSpec]) -> "ObjectTypeComposer":
		if not isinstance(fields, Mapping):
			raise TypeError(f"Fields must be a mapping of name -> field, got {fields!r}")
		for name, field in fields.items():
			self.set_field(name, field)
		return self

	def remove_field(self, names: Union[str, Iterable[str]]) -> "ObjectTypeComposer":
		for name in [names] if isinstance(names, str) else list(names):
			self._fields.pop(name, None)
		self._invalidate()
		return self

	def clone(self, new_name: str) -> "ObjectTypeComposer":
		"""Copy into an independently owned composer registered under `new_name`."""
		cloned = type(self)(name=new_name, description=self._description, sc=self.sc)
		cloned._fields = {name: replace(field) for name, field in self._fields.items()}
		cloned._interfaces = list(self._interfaces)
		cloned._is_type_of = self._is_type_of
		return self._register_clone(cloned)

	def _build_type(self) -> GraphQLObjectType:
		fields = dict(self._fields)

		def build_fields() -> Dict[str, GraphQLField]:
			return {
				name: GraphQLField(
					self._resolve_field_type(name, field),
					description=field.description,
					resolve=field.resolve,
					args=dict(field.args) if field.args else None,
					deprecation_reason=field.deprecation_reason,
				)
				for name, field in fields.items()
			}

		return GraphQLObjectType(
			self._name,
			fields=build_fields,
			interfaces=list(self._interfaces) or None,
			is_type_of=self._is_type_of,
			description=self._description,
		)

	def _resolve_field_type(self, name: str, field: ComposeFieldConfig) -> GraphQLOutputType:
		resolved = resolve_type_thunk(field.type, self.sc)
		if isinstance(resolved, list) or not is_output_type(resolved):
			raise TypeResolutionError(
				f"Field '{self._name}.{name}' must resolve to a single output type, got {resolved!r}"
			)
		return resolved


def _field_config(name: str, field: FieldSpec) -> ComposeFieldConfig:
	if isinstance(field, ComposeFieldConfig):
		return replace(field)
	if isinstance(field, Mapping):
		unknown = set(field) - _FIELD_KEYS
		if unknown:
			raise TypeError(f"Unknown keys for field '{name}': {sorted(unknown)}")
		if "type" not in field:
			raise TypeError(f"Field '{name}' requires 'type'")
		config = ComposeFieldConfig(
			type=field["type"],
			description=field.get("description"),
			resolve=field.get("resolve"),
			args=field.get("args"),
			deprecation_reason=field.get("deprecation_reason"),
		)
	else:
		config = ComposeFieldConfig(type=field)
	# fail fast on values no resolver could ever accept
	if classify_thunk(config.type) is ThunkKind.SEQUENCE:
		raise TypeError(f"Field '{name}' type must be a single type thunk, got {config.type!r}")
	if config.resolve is not None and not callable(config.resolve):
		raise TypeError(f"Field '{name}' resolve must be callable, got {config.resolve!r}")
	return config


__all__ = ["ComposeFieldConfig", "ObjectTypeComposer"]
