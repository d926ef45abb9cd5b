# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy shared by the registry, the resolver and the composers.

Every error derives from `ComposeError` and from the closest builtin so callers
may catch either (`except LookupError` keeps working for missing names).
Messages always carry the offending name or value: most failures come from
referencing a type before its composer exists, and the name is the only useful
clue in that case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from graphcompose.sdl.ast import Located


class ComposeError(Exception):
	"""Base class for every error raised by graphcompose."""


class TypeResolutionError(ComposeError, TypeError):
	"""A type thunk could not be turned into a concrete GraphQL type."""


class NotFound(TypeResolutionError, LookupError):
	"""
	A bare type name has no registry entry (and is not a built-in scalar).

	This is the forward-reference failure: the name may become resolvable once
	a composer with that name is registered.
	"""

	def __init__(self, name: str) -> None:
		super().__init__(f"Cannot find type with name '{name}'")
		self.name = name


class DefinitionSyntaxError(ComposeError, ValueError):
	"""
	Malformed inline type definition text.

	Raised at resolution time rather than insertion time because thunks are
	stored verbatim. `loc` points into `source` when the parser reported a
	position.
	"""

	def __init__(self, message: str, *, source: str, loc: "Located | None" = None) -> None:
		super().__init__(message)
		self.source = source
		self.loc = loc


class DuplicateRegistration(ComposeError, ValueError):
	"""A second composer was registered under an occupied name."""

	def __init__(self, name: str) -> None:
		super().__init__(f"Type with name '{name}' is already registered")
		self.name = name


class InvalidTarget(ComposeError, TypeError):
	"""A resolver map key is neither an object type nor an object composer."""

	def __init__(self, target: object) -> None:
		super().__init__(
			f"Type resolver target must be a GraphQLObjectType or ObjectTypeComposer, got {target!r}"
		)
		self.target = target


class InvalidCheckFunction(ComposeError, TypeError):
	"""A resolver map value is not callable."""

	def __init__(self, target_name: str, check_fn: object) -> None:
		super().__init__(f"Type resolver check function for '{target_name}' must be callable, got {check_fn!r}")
		self.target_name = target_name
		self.check_fn = check_fn


__all__ = [
	"ComposeError",
	"TypeResolutionError",
	"NotFound",
	"DefinitionSyntaxError",
	"DuplicateRegistration",
	"InvalidTarget",
	"InvalidCheckFunction",
]
