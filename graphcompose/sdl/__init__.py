# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Textual type definitions.

Parses the schema definition subset the composers accept (`union U = A | B`,
`type T { field: Type }`) into `graphcompose.sdl.ast` nodes.
"""

from .ast import Definition, FieldDef, ListType, Located, NamedType, NonNullType, ObjectDef, TypeNode, UnionDef
from .parser import parse_definition, parse_document

__all__ = [
	"parse_definition",
	"parse_document",
	"Definition",
	"FieldDef",
	"ListType",
	"Located",
	"NamedType",
	"NonNullType",
	"ObjectDef",
	"TypeNode",
	"UnionDef",
]
