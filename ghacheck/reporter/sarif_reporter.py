"""
SARIF reporter: outputs findings in SARIF 2.1.0 format for GitHub Code Scanning.

SARIF (Static Analysis Results Interchange Format) is a JSON standard that
GitHub's Code Scanning feature understands. Upload the output to GitHub and
findings appear as annotations on the workflow file in the Security tab.

Reference: https://docs.github.com/en/code-security/code-scanning/integrating-with-code-scanning/sarif-support-for-code-scanning
"""

import json
import logging
from typing import Any

from ghacheck import __version__
from ghacheck.rules.engine import Finding

logger = logging.getLogger(__name__)

# Catalog levels are already SARIF notification levels; this maps them to
# security-severity scores (CVSS-like 0.0-10.0)
_SECURITY_SEVERITY: dict[str, str] = {
    "error": "8.0",
    "warning": "5.0",
    "note": "2.0",
}

TOOL_NAME = "ghacheck"
SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
SARIF_VERSION = "2.1.0"


def _build_rules(findings: list[Finding]) -> list[dict[str, Any]]:
    """Build the SARIF rules array: one entry per unique rule ID."""
    seen: dict[str, Finding] = {}
    for f in findings:
        if f.rule_id not in seen:
            seen[f.rule_id] = f

    rules = []
    for rule_id, f in seen.items():
        rules.append({
            "id": rule_id,
            "name": rule_id.replace("_", " ").title().replace(" ", ""),
            "shortDescription": {"text": f.detail},
            "fullDescription": {"text": f.detail},
            "defaultConfiguration": {"level": f.level},
            "properties": {
                "security-severity": _SECURITY_SEVERITY.get(f.level, "5.0"),
                "tags": ["security", "github-actions"],
            },
        })
    return rules


def _build_result(f: Finding) -> dict[str, Any]:
    """Build a single SARIF result object from a Finding."""
    result: dict[str, Any] = {
        "ruleId": f.rule_id,
        "level": f.level,
        "message": {"text": f"{f.message}. {f.detail}" if f.detail else f.message},
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {
                        "uri": f.file_path,
                        "uriBaseId": "%SRCROOT%",
                    },
                    # SARIF requires a region; fall back to the start of the file
                    "region": {"startLine": f.line_number or 1},
                },
                "logicalLocations": _build_logical_locations(f),
            }
        ],
    }
    return result


def _build_logical_locations(f: Finding) -> list[dict[str, str]]:
    """Build logical location entries (job / step) for a finding."""
    locations = [{
        "name": f.scope,
        "kind": "job" if f.job_id else "workflow",
    }]
    if f.step_name:
        locations.append({
            "name": f.step_name,
            "kind": "step",
        })
    return locations


def report_sarif(findings: list[Finding]) -> str:
    """
    Format findings as a SARIF 2.1.0 JSON string.

    The output can be uploaded to GitHub Code Scanning via:
      gh code-scanning upload-results --sarif results.sarif

    Args:
        findings: List of Finding objects to report.

    Returns:
        A SARIF 2.1.0 JSON string.
    """
    sarif: dict[str, Any] = {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": __version__,
                        "rules": _build_rules(findings),
                    }
                },
                "results": [_build_result(f) for f in findings],
            }
        ],
    }

    output = json.dumps(sarif, indent=2)
    logger.info("SARIF report: %d finding(s), %d bytes", len(findings), len(output))
    return output
