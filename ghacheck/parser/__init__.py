from .workflow_parser import parse_workflow, parse_workflow_text, Workflow, Job, Step, RunsOn

__all__ = ["parse_workflow", "parse_workflow_text", "Workflow", "Job", "Step", "RunsOn"]
