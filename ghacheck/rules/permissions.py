"""
Rule: Detect missing or overly broad job permissions.

Jobs should follow the principle of least privilege. A job without a
'permissions' block inherits the repository's default GITHUB_TOKEN scopes,
which are often read-write. Granting 'write-all' on contents is the other
extreme and gives any compromised step full push access.
"""

from ghacheck.parser.workflow_parser import Workflow
from ghacheck.rules.catalog import RuleCatalog
from ghacheck.rules.engine import register_rule, make_finding, Finding


@register_rule
def check_permissions(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    missing_rule = catalog.lookup("permissions")
    broad_rule = catalog.lookup("unrestricted_permissions")
    findings = []

    for job in workflow.jobs:
        if job.permissions is None:
            if missing_rule:
                findings.append(make_finding(
                    missing_rule, workflow,
                    job_id=job.job_id,
                    line_number=job.line_number,
                ))
        elif job.permissions.get("contents") == "write-all":
            if broad_rule:
                findings.append(make_finding(
                    broad_rule, workflow,
                    job_id=job.job_id,
                    line_number=job.line_number,
                ))

    return findings
