# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
graphcompose.core: primitives shared by the registry, resolver and composers.

Modules:
  - errors: error taxonomy (NotFound, DuplicateRegistration, ...)
  - options: session options (DuplicatePolicy, ComposerOptions)
  - thunk: type thunk classification
"""

__all__ = [
	"errors",
	"options",
	"thunk",
]
