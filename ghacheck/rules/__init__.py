from .catalog import Rule, RuleCatalog
from .engine import run_all_rules, Finding

__all__ = ["run_all_rules", "Finding", "Rule", "RuleCatalog"]

# Import all rule modules so they register themselves via @register_rule.
# Import order is the order findings appear within a job.
from . import workflow_settings
from . import runner_version
from . import timeouts
from . import permissions
from . import unpinned_actions
from . import aws_credentials
