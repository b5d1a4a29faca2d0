"""
Rules: workflow-wide settings.

Without a concurrency group, two runs of the same workflow (e.g. two pushes
in quick succession) can race each other on deployments or releases.
Without a default shell, each 'run:' step falls back to a platform-specific
shell, so the same script can behave differently across runners.
"""

from ghacheck.parser.workflow_parser import Workflow
from ghacheck.rules.catalog import RuleCatalog
from ghacheck.rules.engine import register_rule, make_finding, Finding


@register_rule
def check_concurrency(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    rule = catalog.lookup("concurrency")
    if rule is None or workflow.has_concurrency:
        return []
    return [make_finding(rule, workflow, line_number=workflow.line_number)]


@register_rule
def check_default_shell(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    rule = catalog.lookup("default_shell")
    if rule is None or workflow.default_shell:
        return []
    return [make_finding(rule, workflow, line_number=workflow.line_number)]
