# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Session-level options for a `SchemaComposer`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class DuplicatePolicy(Enum):
	"""What registration does when the name is already taken."""

	ERROR = auto()  # raise DuplicateRegistration
	KEEP = auto()  # leave the existing entry, hand it back to the caller
	REPLACE = auto()  # overwrite silently


@dataclass(frozen=True)
class ComposerOptions:
	"""
	Options applied by a schema-assembly session.

	`on_duplicate` is the policy used by strict creation (`create`, `clone`).
	`get_or_create` always uses KEEP and `SchemaComposer.set` always replaces.
	"""

	on_duplicate: DuplicatePolicy = DuplicatePolicy.ERROR


__all__ = ["DuplicatePolicy", "ComposerOptions"]
