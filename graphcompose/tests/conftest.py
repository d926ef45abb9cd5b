# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from graphcompose.registry import schema_composer


@pytest.fixture(autouse=True)
def _fresh_default_session():
	"""
	Every test starts with an empty default session.

	Composers created without `sc=` register into the process-wide
	`schema_composer`; leaving entries behind would leak names between tests.
	"""
	schema_composer.clear()
	yield
	schema_composer.clear()
