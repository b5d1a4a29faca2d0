"""
Rule: Detect actions not pinned to a commit hash.

Actions referenced by tag (e.g. @v4) or branch (e.g. @main) can be
silently replaced by the action owner. Pinning to a full SHA-1 (40 hex)
or SHA-256 (64 hex) commit hash ensures you always run the exact code
you reviewed.
"""

import re
from typing import Optional

from ghacheck.parser.workflow_parser import Workflow
from ghacheck.rules.catalog import RuleCatalog
from ghacheck.rules.engine import register_rule, make_finding, Finding

COMMIT_HASH_PATTERN = re.compile(r"^[0-9a-f]{40}([0-9a-f]{24})?$")


def split_action_ref(uses: str) -> Optional[tuple[str, str]]:
    """Split 'owner/repo[/path]@ref' into (name, ref).

    Returns None unless there is exactly one '@'.
    """
    parts = uses.split("@")
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def is_commit_hash(ref: str) -> bool:
    return COMMIT_HASH_PATTERN.fullmatch(ref) is not None


@register_rule
def check_unpinned_actions(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    rule = catalog.lookup("action_ref")
    if rule is None:
        return []

    findings = []
    for job in workflow.jobs:
        for step in job.steps:
            if not step.uses:
                continue
            split = split_action_ref(step.uses)
            if split is None:
                continue
            _, ref = split
            if not is_commit_hash(ref):
                findings.append(make_finding(
                    rule, workflow,
                    job_id=job.job_id,
                    value=step.uses,
                    step=step,
                ))
    return findings
