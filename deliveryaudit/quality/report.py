"""
Tree-level quality scan.

Runs every detector over a source tree in a single walk and collects
the results the quality phase needs.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from deliveryaudit.quality.detectors import (
    ErrorHandlingTally,
    Finding,
    classify_error_handling,
    find_console_statements,
    find_hardcoded_credentials,
)
from deliveryaudit.quality.walker import DEFAULT_EXTENSIONS, ScanSummary, scan


@dataclass
class QualityReport:
    """Detector results for one source tree."""
    root: str
    summary: ScanSummary = field(default_factory=lambda: ScanSummary(root_found=False))
    console_statements: List[Finding] = field(default_factory=list)
    credential_findings: List[Finding] = field(default_factory=list)
    error_handling: ErrorHandlingTally = field(default_factory=ErrorHandlingTally)

    @property
    def console_locations(self) -> List[str]:
        """Console statements as `path:line` strings."""
        return [f.location for f in self.console_statements]

    @property
    def credential_paths(self) -> List[str]:
        """Paths of files with hardcoded credentials, one entry per finding."""
        return [f.path for f in self.credential_findings]


def run_quality_scan(
    root: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    dedupe_credentials: bool = False,
) -> QualityReport:
    """Scan a source tree with all quality detectors.

    Args:
        root: Directory to scan
        extensions: File extensions to include
        dedupe_credentials: Keep only the first credential finding per file

    Returns:
        QualityReport; report.summary.root_found tells a missing root
        apart from a clean one
    """
    report = QualityReport(root=root)

    def visit(path: str, content: str) -> None:
        report.console_statements.extend(find_console_statements(content, path))

        creds = find_hardcoded_credentials(content, path)
        if dedupe_credentials:
            creds = creds[:1]
        report.credential_findings.extend(creds)

        file_tally = ErrorHandlingTally()
        file_tally.count(classify_error_handling(content))
        report.error_handling.merge(file_tally)

    report.summary = scan(root, extensions, visit)
    return report
