"""
Rule: Detect jobs that can run forever.

The default job timeout is six hours. A hung test or a stuck network call
burns runner minutes until then. A job is fine if either the job itself
or at least one of its steps sets 'timeout-minutes'.
"""

from ghacheck.parser.workflow_parser import Job, Workflow
from ghacheck.rules.catalog import RuleCatalog
from ghacheck.rules.engine import register_rule, make_finding, Finding


def _has_timeout(job: Job) -> bool:
    if job.timeout_minutes is not None:
        return True
    return any(step.declares_timeout for step in job.steps)


@register_rule
def check_timeouts(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    rule = catalog.lookup("timeout")
    if rule is None:
        return []

    return [
        make_finding(rule, workflow, job_id=job.job_id, line_number=job.line_number)
        for job in workflow.jobs
        if not _has_timeout(job)
    ]
