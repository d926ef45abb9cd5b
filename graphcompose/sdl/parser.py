# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark-based parser for the schema definition subset used by the composers.

The grammar lives next to this file (`grammar.lark`). Parse trees are walked
by small `_build_*` helpers into the dataclasses of `graphcompose.sdl.ast`;
lark errors are converted into `DefinitionSyntaxError` so callers never see
lark types.
"""

from __future__ import annotations

import inspect
import json
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedEOF, UnexpectedInput

from graphcompose.core.errors import DefinitionSyntaxError
from .ast import (
	Definition,
	FieldDef,
	ListType,
	Located,
	NamedType,
	NonNullType,
	ObjectDef,
	TypeNode,
	UnionDef,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)


def parse_document(source: str) -> List[Definition]:
	"""Parse every definition in `source`, preserving source order."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		token = getattr(exc, "token", None)
		if isinstance(exc, UnexpectedEOF) or (token is not None and token.type == "$END"):
			raise DefinitionSyntaxError(
				f"Unexpected end of type definition: {source.strip()!r}",
				source=source,
			) from exc
		context = exc.get_context(source).rstrip()
		raise DefinitionSyntaxError(
			f"Cannot parse type definition at {exc.line}:{exc.column}:\n{context}",
			source=source,
			loc=Located(line=exc.line, column=exc.column),
		) from exc
	return [_build_definition(child, source) for child in tree.children if isinstance(child, Tree)]


def parse_definition(source: str) -> Definition:
	"""Parse `source` which must hold exactly one definition."""
	defs = parse_document(source)
	if len(defs) != 1:
		raise DefinitionSyntaxError(
			f"Expected exactly one type definition, found {len(defs)} in: {source.strip()!r}",
			source=source,
		)
	return defs[0]


def _build_definition(tree: Tree, source: str) -> Definition:
	kind = _name(tree)
	if kind == "union_def":
		return _build_union_def(tree)
	if kind == "object_def":
		return _build_object_def(tree, source)
	raise DefinitionSyntaxError(f"Unsupported definition '{kind}'", source=source, loc=_loc(tree))


def _build_union_def(tree: Tree) -> UnionDef:
	name_token = next(child for child in tree.children if isinstance(child, Token) and child.type == "NAME")
	body = _child_tree(tree, "union_body")
	members: List[str] = []
	if body is not None:
		members = [tok.value for tok in body.children if isinstance(tok, Token) and tok.type == "NAME"]
	return UnionDef(
		name=name_token.value,
		types=members,
		loc=_loc(tree),
		description=_build_description(_child_tree(tree, "description")),
	)


def _build_object_def(tree: Tree, source: str) -> ObjectDef:
	name_token = next(child for child in tree.children if isinstance(child, Token) and child.type == "NAME")
	fields: List[FieldDef] = []
	body = _child_tree(tree, "fields")
	if body is not None:
		seen: set[str] = set()
		for node in body.children:
			if not isinstance(node, Tree) or _name(node) != "field_def":
				continue
			field_def = _build_field_def(node)
			if field_def.name in seen:
				raise DefinitionSyntaxError(
					f"Duplicate field '{field_def.name}' in type '{name_token.value}'",
					source=source,
					loc=field_def.loc,
				)
			seen.add(field_def.name)
			fields.append(field_def)
	return ObjectDef(
		name=name_token.value,
		fields=fields,
		loc=_loc(tree),
		description=_build_description(_child_tree(tree, "description")),
	)


def _build_field_def(tree: Tree) -> FieldDef:
	name_token = next(child for child in tree.children if isinstance(child, Token) and child.type == "NAME")
	type_node = next(
		child for child in tree.children if isinstance(child, Tree) and _name(child) != "description"
	)
	return FieldDef(
		name=name_token.value,
		type=_build_type_ref(type_node),
		loc=_loc(tree),
		description=_build_description(_child_tree(tree, "description")),
	)


def _build_type_ref(tree: Tree) -> TypeNode:
	kind = _name(tree)
	if kind == "named_type":
		return NamedType(name=tree.children[0].value)
	inner = next(child for child in tree.children if isinstance(child, Tree))
	if kind == "list_type":
		return ListType(of_type=_build_type_ref(inner))
	if kind == "non_null_type":
		return NonNullType(of_type=_build_type_ref(inner))
	raise ValueError(f"unexpected type reference node '{kind}'")


def _build_description(tree: Optional[Tree]) -> Optional[str]:
	if tree is None:
		return None
	tok = tree.children[0]
	if tok.type == "BLOCK_STRING":
		return inspect.cleandoc(tok.value[3:-3])
	return _decode_string_token(tok)


def _decode_string_token(tok: Token) -> str:
	# GraphQL string escapes are a subset of JSON ones
	return json.loads(tok.value)


def _child_tree(tree: Tree, name: str) -> Optional[Tree]:
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == name), None)


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=getattr(meta, "line", 1), column=getattr(meta, "column", 1))


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_document", "parse_definition"]
