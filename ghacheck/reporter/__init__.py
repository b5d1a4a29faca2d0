from .console_reporter import report_console, NO_ISSUES
from .json_reporter import report_json
from .sarif_reporter import report_sarif

__all__ = ["report_console", "report_json", "report_sarif", "NO_ISSUES"]
