# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Definition AST produced by `graphcompose.sdl.parser`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class TypeNode:
	"""Base for field type references (`Int`, `[Int]`, `Int!`)."""

	def base_name(self) -> str:
		raise NotImplementedError


@dataclass
class NamedType(TypeNode):
	name: str

	def base_name(self) -> str:
		return self.name

	def __str__(self) -> str:
		return self.name


@dataclass
class ListType(TypeNode):
	of_type: TypeNode

	def base_name(self) -> str:
		return self.of_type.base_name()

	def __str__(self) -> str:
		return f"[{self.of_type}]"


@dataclass
class NonNullType(TypeNode):
	of_type: TypeNode

	def base_name(self) -> str:
		return self.of_type.base_name()

	def __str__(self) -> str:
		return f"{self.of_type}!"


@dataclass
class FieldDef:
	name: str
	type: TypeNode
	loc: Located
	description: Optional[str] = None


@dataclass
class UnionDef:
	"""`union Name = A | B`; member names are kept in source order."""

	name: str
	types: List[str]
	loc: Located
	description: Optional[str] = None


@dataclass
class ObjectDef:
	name: str
	fields: List[FieldDef]
	loc: Located
	description: Optional[str] = None


Definition = Union[UnionDef, ObjectDef]


__all__ = [
	"Located",
	"TypeNode",
	"NamedType",
	"ListType",
	"NonNullType",
	"FieldDef",
	"UnionDef",
	"ObjectDef",
	"Definition",
]
