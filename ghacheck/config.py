"""
Rule catalog loading for ghacheck.

The catalog is a checks.yaml file listing every rule ghacheck knows about,
its report text and whether it is enabled:

    checks:
      - id: action_ref
        description: "Check if actions are referenced by commit hash"
        message: "Non-commit hash reference: %s"
        detail: "Use full commit hash instead of tags or branches"
        enabled: true     # optional, defaults to true
        level: warning    # optional: error, warning or note

Disable a rule by setting `enabled: false`; its findings disappear while
every other rule keeps running.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml

from ghacheck.errors import CatalogError
from ghacheck.rules.catalog import LEVELS, Rule, RuleCatalog

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_FILENAME = "checks.yaml"


def load_catalog(catalog_path: Optional[str] = None) -> RuleCatalog:
    """
    Load the rule catalog.

    Search order:
      1. Explicit catalog_path if provided (must exist)
      2. checks.yaml in the current working directory
      3. The default catalog bundled with ghacheck

    Raises:
        CatalogError: If the file is missing, unreadable or malformed.
    """
    path = _find_catalog_file(catalog_path)

    if path is None:
        logger.debug("No checks.yaml found, using bundled catalog")
        text = resources.files("ghacheck").joinpath("data").joinpath(DEFAULT_CATALOG_FILENAME).read_text(encoding="utf-8")
        return parse_catalog(text, source="<bundled checks.yaml>")

    logger.info("Loading checks from %s", path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(f"error reading checks config: {e}") from e
    return parse_catalog(text, source=path)


def parse_catalog(text: str, source: str = "<string>") -> RuleCatalog:
    """Parse checks.yaml text into a RuleCatalog."""
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(f"error parsing checks config {source}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(f"checks config is not a YAML mapping: {source}")

    entries = raw.get("checks")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise CatalogError(f"'checks' must be a list in {source}")

    rules = [_parse_rule(entry, index, source) for index, entry in enumerate(entries)]
    catalog = RuleCatalog(rules)
    logger.debug(
        "Loaded %d rule(s) from %s, enabled: %s",
        len(catalog), source, catalog.enabled_ids,
    )
    return catalog


def _parse_rule(entry: Any, index: int, source: str) -> Rule:
    """Build a Rule from one catalog entry."""
    if not isinstance(entry, dict):
        raise CatalogError(f"check #{index + 1} in {source} is not a mapping")

    rule_id = entry.get("id")
    if not isinstance(rule_id, str) or not rule_id:
        raise CatalogError(f"check #{index + 1} in {source} has no string 'id'")

    enabled = entry.get("enabled")
    if enabled is None:
        enabled = True
    if not isinstance(enabled, bool):
        raise CatalogError(f"check '{rule_id}' in {source}: 'enabled' must be true or false")

    level = entry.get("level") or "warning"
    if level not in LEVELS:
        raise CatalogError(
            f"check '{rule_id}' in {source}: unknown level '{level}' "
            f"(expected one of {', '.join(LEVELS)})"
        )

    return Rule(
        id=rule_id,
        message=str(entry.get("message") or ""),
        detail=str(entry.get("detail") or ""),
        description=str(entry.get("description") or ""),
        enabled=enabled,
        level=level,
    )


def _find_catalog_file(catalog_path: Optional[str] = None) -> Optional[str]:
    """Find the catalog file, returning its path or None for the bundled one."""
    # 1. Explicit path
    if catalog_path:
        p = Path(catalog_path)
        if p.is_file():
            return str(p)
        raise CatalogError(f"checks config not found: {catalog_path}")

    # 2. Current working directory
    cwd_candidate = Path.cwd() / DEFAULT_CATALOG_FILENAME
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    return None
