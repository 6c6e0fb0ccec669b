"""
Code-quality scanning for the delivery audit.

Two layers:
1. Detectors: pure functions over a single file's content
2. Tree scan: a directory walker that feeds every matching file to the detectors

Usage:
    from deliveryaudit.quality import run_quality_scan

    report = run_quality_scan("ui-tests")
    if report.console_locations:
        print("console.log left in:", report.console_locations)
"""

from deliveryaudit.quality.walker import (
    DEFAULT_EXTENSIONS,
    DEPENDENCY_CACHE_DIR,
    ScanSummary,
    default_skip_dir,
    extension_filter,
    scan,
    walk_tree,
)
from deliveryaudit.quality.detectors import (
    CREDENTIAL_PATTERN_DEFS,
    ErrorHandlingTally,
    Finding,
    classify_error_handling,
    find_console_statements,
    find_hardcoded_credentials,
)
from deliveryaudit.quality.report import (
    QualityReport,
    run_quality_scan,
)

__all__ = [
    # Walker
    "DEFAULT_EXTENSIONS",
    "DEPENDENCY_CACHE_DIR",
    "ScanSummary",
    "default_skip_dir",
    "extension_filter",
    "scan",
    "walk_tree",
    # Detectors
    "CREDENTIAL_PATTERN_DEFS",
    "ErrorHandlingTally",
    "Finding",
    "classify_error_handling",
    "find_console_statements",
    "find_hardcoded_credentials",
    # Tree scan
    "QualityReport",
    "run_quality_scan",
]
