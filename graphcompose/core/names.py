# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""GraphQL name validation."""

from __future__ import annotations

import re

NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


def is_valid_name(name: object) -> bool:
	return isinstance(name, str) and NAME_RE.match(name) is not None


def assert_valid_name(name: object) -> str:
	"""Return `name` unchanged or raise TypeError naming the bad value."""
	if not is_valid_name(name):
		raise TypeError(f"Type name must match {NAME_RE.pattern}, got {name!r}")
	return name  # type: ignore[return-value]


__all__ = ["NAME_RE", "is_valid_name", "assert_valid_name"]
