"""
Delivery audit - readiness checks for a UI + API test automation project.

Runs four phases against a project holding a Playwright UI suite and a
Maven API suite:
- Pre-flight: toolchain version, project layout, config files, secrets
- Tests: runs both suites
- Code quality: static scan of the UI sources
- Reports: generated report artifacts

Each check passes or fails; the failure count decides the verdict
(ready, minor fixes, major issues) and the exit code.
"""

__version__ = "0.1.0"

from deliveryaudit.recorder import Category, CategoryTally, CheckRecorder, ValidationState
from deliveryaudit.summary import AuditSummary, Verdict, summarize

__all__ = [
    "Category",
    "CategoryTally",
    "CheckRecorder",
    "ValidationState",
    "AuditSummary",
    "Verdict",
    "summarize",
]
