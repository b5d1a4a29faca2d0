"""Shared fixtures for all tests."""

import os
import pytest

from ghacheck.config import load_catalog
from ghacheck.parser import parse_workflow
from ghacheck.rules import run_all_rules


FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures/.github/workflows")
BUNDLED_CATALOG = os.path.join(os.path.dirname(__file__), "..", "ghacheck", "data", "checks.yaml")


@pytest.fixture
def catalog():
    """The default rule catalog shipped with ghacheck."""
    return load_catalog(BUNDLED_CATALOG)


@pytest.fixture
def insecure_workflow_path():
    """Path to the insecure example workflow fixture."""
    return os.path.join(FIXTURES_DIR, "insecure-example.yml")


@pytest.fixture
def secure_workflow_path():
    """Path to the secure example workflow fixture."""
    return os.path.join(FIXTURES_DIR, "secure-example.yml")


@pytest.fixture
def insecure_workflow(insecure_workflow_path):
    """Parsed insecure example workflow."""
    return parse_workflow(insecure_workflow_path)


@pytest.fixture
def insecure_findings(insecure_workflow, catalog):
    """All findings from the insecure example workflow."""
    return run_all_rules(insecure_workflow, catalog)


@pytest.fixture
def fixtures_dir():
    """Path to the fixtures workflow directory."""
    return FIXTURES_DIR
