"""
Parser for GitHub Actions workflow files.

Reads a single .yml/.yaml workflow and normalizes it into the structured
document model the rules analyze. Loosely typed fields (runs-on, with,
permissions) are resolved here once so the rules never inspect raw YAML.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, Union

import yaml

from ghacheck.errors import WorkflowError

logger = logging.getLogger(__name__)

LINE_KEY = "__line__"


class _LineLoader(yaml.SafeLoader):
    """PyYAML loader that stores the start line number on every mapping node."""


def _construct_mapping(loader: _LineLoader, node: yaml.MappingNode) -> dict[Any, Any]:
    mapping: dict[Any, Any] = loader.construct_mapping(node, deep=True)
    mapping[LINE_KEY] = node.start_mark.line + 1  # YAML lines are 0-indexed
    return mapping


_LineLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class RunsOn:
    """Runner labels of a job: either a single label or an ordered list."""
    labels: tuple[str, ...]
    is_list: bool = False

    @classmethod
    def single(cls, label: str) -> "RunsOn":
        return cls(labels=(label,), is_list=False)

    @classmethod
    def many(cls, labels: list[Any]) -> "RunsOn":
        return cls(labels=tuple(label for label in labels if isinstance(label, str)), is_list=True)


def _freeze(mapping: Optional[Mapping[Any, Any]]) -> Optional[Mapping[Any, Any]]:
    """Read-only view of a mapping; None stays None."""
    if mapping is None or isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Step:
    """A single step within a job."""
    name: Optional[str]
    uses: Optional[str]               # e.g. "actions/checkout@v4"
    with_args: Mapping[str, Any] = field(default_factory=dict)
    declares_timeout: bool = False    # step has a timeout-minutes key
    raw: Mapping[str, Any] = field(default_factory=dict)
    line_number: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "with_args", _freeze(self.with_args))
        object.__setattr__(self, "raw", _freeze(self.raw))


@dataclass(frozen=True)
class Job:
    """A single job within a workflow."""
    job_id: str
    runs_on: Optional[RunsOn] = None
    timeout_minutes: Any = None
    permissions: Optional[Mapping[str, str]] = None  # None when absent, {} is "no scopes"
    steps: tuple[Step, ...] = ()
    raw: Mapping[str, Any] = field(default_factory=dict)
    line_number: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "permissions", _freeze(self.permissions))
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "raw", _freeze(self.raw))


@dataclass(frozen=True)
class Workflow:
    """A parsed GitHub Actions workflow."""
    file_path: str
    has_concurrency: bool = False
    default_shell: Optional[str] = None
    jobs: tuple[Job, ...] = ()
    raw: Mapping[str, Any] = field(default_factory=dict)
    line_number: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "jobs", tuple(self.jobs))
        object.__setattr__(self, "raw", _freeze(self.raw))


def _strip_lines(mapping: dict[Any, Any]) -> dict[Any, Any]:
    """Drop the loader's line marker from a mapping."""
    return {k: v for k, v in mapping.items() if k != LINE_KEY}


def _parse_runs_on(runs_on_field: Union[str, list[Any], None]) -> Optional[RunsOn]:
    """Resolve the single-or-list 'runs-on' field into a RunsOn."""
    if isinstance(runs_on_field, str):
        return RunsOn.single(runs_on_field)
    if isinstance(runs_on_field, list):
        return RunsOn.many(runs_on_field)
    return None


def _parse_permissions(perm_field: Union[str, dict[str, str], None]) -> Optional[dict[str, str]]:
    """Normalize the permissions field into a dict or None."""
    if perm_field is None:
        return None
    if isinstance(perm_field, str):
        # e.g. "read-all" or "write-all"
        return {"_all": perm_field}
    if isinstance(perm_field, dict):
        return _strip_lines(perm_field)
    return None


def _parse_default_shell(defaults_field: Any) -> Optional[str]:
    """Return defaults.run.shell, or None when it is missing or empty."""
    if not isinstance(defaults_field, dict):
        return None
    run = defaults_field.get("run")
    if not isinstance(run, dict):
        return None
    shell = run.get("shell")
    if isinstance(shell, str) and shell:
        return shell
    return None


def _parse_step(step_raw: dict[str, Any]) -> Step:
    """Parse a raw step dictionary into a Step dataclass."""
    uses = step_raw.get("uses")
    with_raw = step_raw.get("with")
    return Step(
        name=step_raw.get("name"),
        uses=uses if isinstance(uses, str) else None,
        with_args=_strip_lines(with_raw) if isinstance(with_raw, dict) else {},
        declares_timeout="timeout-minutes" in step_raw,
        raw=step_raw,
        line_number=step_raw.get(LINE_KEY),
    )


def _parse_job(job_id: str, job_raw: Any) -> Job:
    """Parse a raw job dictionary into a Job dataclass."""
    if not isinstance(job_raw, dict):
        raise WorkflowError(f"Job '{job_id}' is not a mapping")

    steps_field = job_raw.get("steps") or []
    steps_raw = [s for s in steps_field if isinstance(s, dict)] if isinstance(steps_field, list) else []
    logger.debug("Parsing job '%s' with %d step(s)", job_id, len(steps_raw))
    return Job(
        job_id=str(job_id),
        runs_on=_parse_runs_on(job_raw.get("runs-on")),
        timeout_minutes=job_raw.get("timeout-minutes"),
        permissions=_parse_permissions(job_raw.get("permissions")),
        steps=[_parse_step(s) for s in steps_raw],
        raw=job_raw,
        line_number=job_raw.get(LINE_KEY),
    )


def parse_workflow_text(text: str, file_path: str = "<string>") -> Workflow:
    """
    Parse workflow YAML text into a Workflow.

    Raises:
        WorkflowError: If the text isn't valid YAML or isn't a workflow mapping.
    """
    try:
        raw = yaml.load(text, Loader=_LineLoader)  # noqa: S506  # _LineLoader is safe
    except yaml.YAMLError as e:
        raise WorkflowError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(raw, dict):
        logger.error("File is not a valid YAML mapping: %s", file_path)
        raise WorkflowError(f"Workflow file is not a valid YAML mapping: {file_path}")

    jobs_raw = raw.get("jobs") or {}
    if not isinstance(jobs_raw, dict):
        raise WorkflowError(f"'jobs' is not a mapping in {file_path}")

    jobs = [
        _parse_job(job_id, job_data)
        for job_id, job_data in jobs_raw.items()
        if job_id != LINE_KEY
    ]
    workflow = Workflow(
        file_path=file_path,
        has_concurrency=raw.get("concurrency") is not None,
        default_shell=_parse_default_shell(raw.get("defaults")),
        jobs=jobs,
        raw=raw,
        line_number=raw.get(LINE_KEY),
    )
    logger.debug(
        "Parsed '%s': %d job(s), concurrency=%s, shell=%s",
        raw.get("name", "(unnamed)"), len(jobs),
        workflow.has_concurrency, workflow.default_shell or "unset",
    )
    return workflow


def parse_workflow(file_path: str) -> Workflow:
    """
    Parse a single GitHub Actions workflow YAML file.

    Args:
        file_path: Path to the .yml/.yaml workflow file.

    Returns:
        A Workflow dataclass with normalized data.

    Raises:
        WorkflowError: If the file doesn't exist, can't be read,
            or isn't a valid workflow mapping.
    """
    path = Path(file_path)
    if not path.is_file():
        raise WorkflowError(f"Workflow file not found: {file_path}")

    logger.info("Parsing workflow: %s", file_path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WorkflowError(f"Could not read {file_path}: {e}") from e

    return parse_workflow_text(text, file_path=str(path))
