"""
Rule engine: defines the Finding model and runs all rules against a workflow.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ghacheck.parser.workflow_parser import Step, Workflow
from ghacheck.rules.catalog import Rule, RuleCatalog

logger = logging.getLogger(__name__)

WORKFLOW_SCOPE = "workflow"


@dataclass(frozen=True)
class Finding:
    """A single issue produced by a rule."""
    rule_id: str          # e.g. "action_ref"
    message: str          # rule message with the offending value substituted
    detail: str           # rule detail, verbatim
    level: str            # error, warning or note
    file_path: str        # which workflow file
    job_id: str           # which job (empty string if workflow-level)
    step_name: str = ""   # which step (empty string if job/workflow-level)
    line_number: Optional[int] = None

    @property
    def scope(self) -> str:
        """The job this finding applies to, or "workflow"."""
        return self.job_id or WORKFLOW_SCOPE


# Type alias: a rule is a function that takes a Workflow and the catalog
# and returns findings
RuleFunc = Callable[[Workflow, RuleCatalog], list[Finding]]

# Registry of all rules
_rules: list[RuleFunc] = []


def register_rule(func: RuleFunc) -> RuleFunc:
    """Decorator to register a rule function."""
    _rules.append(func)
    logger.debug("Registered rule: %s", func.__name__)
    return func


def make_finding(
    rule: Rule,
    workflow: Workflow,
    job_id: str = "",
    value: Optional[str] = None,
    step: Optional[Step] = None,
    line_number: Optional[int] = None,
) -> Finding:
    """Build a Finding from a catalog rule, filling its message placeholder."""
    if step is not None:
        step_name = step.name or step.uses or ""
        line_number = line_number or step.line_number
    else:
        step_name = ""
    return Finding(
        rule_id=rule.id,
        message=rule.format_message(value),
        detail=rule.detail,
        level=rule.level,
        file_path=workflow.file_path,
        job_id=job_id,
        step_name=step_name,
        line_number=line_number,
    )


def sort_findings(findings: list[Finding]) -> list[Finding]:
    """Workflow-level findings first, then job findings grouped by job id.

    The sort is stable, so rule order and step order are kept within a group.
    """
    return sorted(findings, key=lambda f: (f.job_id != "", f.job_id))


def run_all_rules(workflow: Workflow, catalog: RuleCatalog) -> list[Finding]:
    """Run every registered rule against a workflow and return all findings."""
    logger.info("Running %d rule(s) against %s", len(_rules), workflow.file_path)
    t0 = time.monotonic()
    findings = []
    for rule in _rules:
        rule_t0 = time.monotonic()
        rule_findings = rule(workflow, catalog)
        rule_ms = (time.monotonic() - rule_t0) * 1000
        findings.extend(rule_findings)
        logger.debug(
            "Rule '%s': %d finding(s) in %.1fms",
            rule.__name__, len(rule_findings), rule_ms,
        )
    total_ms = (time.monotonic() - t0) * 1000
    logger.info(
        "Completed: %d finding(s) for %s in %.1fms",
        len(findings), workflow.file_path, total_ms,
    )
    return sort_findings(findings)
