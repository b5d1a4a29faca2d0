"""
Rule: Detect floating runner images.

Labels like 'ubuntu-latest' move to a new OS release without notice, so a
workflow that passed yesterday can break (or change behaviour) today.
Pinning an explicit version such as 'ubuntu-24.04' keeps runs reproducible.
"""

from ghacheck.parser.workflow_parser import Workflow
from ghacheck.rules.catalog import RuleCatalog
from ghacheck.rules.engine import register_rule, make_finding, Finding

FLOATING_MARKER = "latest"


@register_rule
def check_runner_version(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    rule = catalog.lookup("runner_version")
    if rule is None:
        return []

    findings = []
    for job in workflow.jobs:
        if job.runs_on is None:
            continue
        for label in job.runs_on.labels:
            if FLOATING_MARKER in label:
                findings.append(make_finding(
                    rule, workflow,
                    job_id=job.job_id,
                    value=label,
                    line_number=job.line_number,
                ))
    return findings
