# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
graphcompose: mutable builders for GraphQL schema types.

Composers record type references as thunks (names, inline definitions,
concrete graphql-core types, other composers or producers of those) and only
resolve them, through the session registry, when a concrete type is
requested. This keeps forward references, renames and clones cheap.
"""

from graphcompose.core.errors import (
	ComposeError,
	DefinitionSyntaxError,
	DuplicateRegistration,
	InvalidCheckFunction,
	InvalidTarget,
	NotFound,
	TypeResolutionError,
)
from graphcompose.core.options import ComposerOptions, DuplicatePolicy
from graphcompose.object_type_composer import ComposeFieldConfig, ObjectTypeComposer
from graphcompose.registry import SchemaComposer, schema_composer
from graphcompose.type_resolver import resolve_type_thunk
from graphcompose.type_resolver_map import TypeResolverMap
from graphcompose.union_type_composer import UnionTypeComposer, UnionTypeConfig

__all__ = [
	"ComposeError",
	"ComposeFieldConfig",
	"ComposerOptions",
	"DefinitionSyntaxError",
	"DuplicatePolicy",
	"DuplicateRegistration",
	"InvalidCheckFunction",
	"InvalidTarget",
	"NotFound",
	"ObjectTypeComposer",
	"SchemaComposer",
	"TypeResolutionError",
	"TypeResolverMap",
	"UnionTypeComposer",
	"UnionTypeConfig",
	"resolve_type_thunk",
	"schema_composer",
]
