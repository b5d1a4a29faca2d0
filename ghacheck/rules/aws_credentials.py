"""
Rule: Detect long-lived AWS access keys passed to configure-aws-credentials.

Handing 'aws-access-key-id' to the action means a static IAM user key lives
in the repository's secrets and is exposed to every step of the job. The
action supports OIDC ('role-to-assume'), which issues short-lived
credentials instead.
"""

from ghacheck.parser.workflow_parser import Step, Workflow
from ghacheck.rules.catalog import RuleCatalog
from ghacheck.rules.engine import register_rule, make_finding, Finding

AWS_CREDENTIALS_ACTION = "aws-actions/configure-aws-credentials"
ACCESS_KEY_INPUT = "aws-access-key-id"


def _is_aws_credentials_action(step: Step) -> bool:
    if not step.uses:
        return False
    return step.uses == AWS_CREDENTIALS_ACTION or step.uses.startswith(AWS_CREDENTIALS_ACTION + "@")


@register_rule
def check_aws_credentials(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    rule = catalog.lookup("aws_credentials")
    if rule is None:
        return []

    findings = []
    for job in workflow.jobs:
        for step in job.steps:
            if _is_aws_credentials_action(step) and ACCESS_KEY_INPUT in step.with_args:
                findings.append(make_finding(
                    rule, workflow,
                    job_id=job.job_id,
                    step=step,
                ))
    return findings
