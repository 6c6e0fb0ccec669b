"""
Audit phases.

Four phases run in order, each turning a fixed checklist into recorded
checks:
1. Pre-flight: toolchain version, project layout, manifests, config files
2. Test execution: UI suite (Playwright) and API suite (Maven)
3. Code quality: console statements, hardcoded credentials, error handling
4. Reports: generated report directories

A failing check never stops the audit; every phase runs so one report
covers everything. External commands run with an explicit working
directory, so the process working directory is never changed.
"""

from pathlib import Path
from typing import Optional
import json
import logging
import os

from deliveryaudit import ux
from deliveryaudit.config import AuditConfig
from deliveryaudit.quality import run_quality_scan
from deliveryaudit.recorder import Category, CheckRecorder, ValidationState
from deliveryaudit.shell import run_command

logger = logging.getLogger(__name__)

# Findings listed under a failed quality check
MAX_LISTED_FINDINGS = 10


def parse_major_version(version_output: str) -> Optional[int]:
    """Parse the major version from output like 'v20.11.1'."""
    version = version_output.strip().lstrip("v")
    try:
        return int(version.split(".")[0])
    except ValueError:
        return None


def parse_playwright_stats(output: str) -> dict:
    """Extract total/passed/failed from Playwright's JSON reporter output.

    Raises:
        ValueError: Output is not JSON or lacks the stats counters
    """
    data = json.loads(output)
    try:
        stats = data["stats"]
        return {
            "total": int(stats["total"]),
            "passed": int(stats["passed"]),
            "failed": int(stats["failed"]),
        }
    except (KeyError, TypeError) as e:
        raise ValueError(f"Missing test statistics: {e}") from e


def _has_dependencies(package_json: Path) -> bool:
    """True if package.json declares at least one dependency.

    Raises:
        ValueError: File is not valid JSON
    """
    with open(package_json, encoding="utf-8") as f:
        data = json.load(f)
    deps = data.get("dependencies") if isinstance(data, dict) else None
    return isinstance(deps, dict) and len(deps) > 0


def _is_non_empty_file(path: Path) -> bool:
    """True if path is a file with non-whitespace content."""
    try:
        return path.is_file() and bool(path.read_text(encoding="utf-8", errors="replace").strip())
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return False


# =============================================================================
# Phase 1: Pre-flight
# =============================================================================

def validate_preflight(project_path: str, config: AuditConfig, recorder: CheckRecorder) -> None:
    ux.print_section("🔍 PRE-FLIGHT CHECKS")
    root = Path(project_path)
    ui_dir = root / config.ui_dir
    api_dir = root / config.api_dir
    category = Category.PREFLIGHT

    result = run_command(config.node_version_command, cwd=project_path)
    major = None if result.failed else parse_major_version(result.output)
    if major is None:
        recorder.record(False, "Node.js not found or incompatible", category)
    else:
        version = result.output.strip().lstrip("v")
        recorder.record(
            major >= config.min_node_major,
            f"Node.js v{version} detected (>={config.min_node_major} required)",
            category,
        )

    recorder.record(
        ui_dir.is_dir() and api_dir.is_dir(),
        f"Project structure detected ({config.ui_dir}, {config.api_dir})",
        category,
    )

    package_json = ui_dir / "package.json"
    try:
        configured = package_json.is_file() and _has_dependencies(package_json)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {package_json}: {e}")
        configured = False
    recorder.record(
        configured,
        "UI dependencies configured" if configured else "UI package.json invalid or missing",
        category,
    )

    has_pom = _is_non_empty_file(api_dir / "pom.xml")
    recorder.record(
        has_pom,
        "API Maven configuration found" if has_pom else "API Maven configuration missing",
        category,
    )

    recorder.record((ui_dir / "playwright.config.ts").exists(), "Playwright config present", category)
    recorder.record((ui_dir / ".env.sample").exists(), "Environment sample file present", category)
    recorder.record((api_dir / ".env.sample").exists(), "API environment sample present", category)

    committed = [
        str(Path(d.name) / name)
        for d in (ui_dir, api_dir)
        for name in config.sensitive_files
        if (d / name).exists()
    ]
    if committed:
        logger.debug(f"Sensitive files present: {', '.join(committed)}")
    recorder.record(not committed, "No sensitive data files committed", category)


# =============================================================================
# Phase 2: Test execution
# =============================================================================

def validate_tests(project_path: str, config: AuditConfig, recorder: CheckRecorder) -> None:
    ux.print_section("🧪 TEST EXECUTION VALIDATION")
    _validate_ui_tests(Path(project_path) / config.ui_dir, config, recorder)
    _validate_api_tests(Path(project_path) / config.api_dir, config, recorder)


def _validate_ui_tests(ui_dir: Path, config: AuditConfig, recorder: CheckRecorder) -> None:
    category = Category.TESTS
    ux.print_subheader("📱 UI Tests:")

    if not ui_dir.is_dir():
        recorder.record(False, "UI tests directory not found", category)
        return

    ux.print_action("Installing UI dependencies...")
    install = run_command(config.ui_install_command, cwd=str(ui_dir))
    recorder.record(not install.failed, "UI dependencies installed successfully", category)

    ux.print_action("Running UI tests...")
    result = run_command(config.ui_test_command, cwd=str(ui_dir))
    if result.failed:
        recorder.record(False, "UI tests failed to execute", category)
        return

    try:
        stats = parse_playwright_stats(result.output)
    except ValueError as e:
        logger.warning(f"Could not parse UI test results: {e}")
        recorder.record(False, "UI test results could not be parsed", category)
        return

    recorder.record(
        stats["passed"] > 0,
        f"UI tests executed: {stats['passed']}/{stats['total']} passed",
        category,
    )
    recorder.record(
        stats["failed"] == 0,
        f"No UI test failures: {stats['failed']} failed",
        category,
    )


def _validate_api_tests(api_dir: Path, config: AuditConfig, recorder: CheckRecorder) -> None:
    category = Category.TESTS
    ux.print_subheader("🔌 API Tests:")

    if not api_dir.is_dir():
        recorder.record(False, "API tests directory not found", category)
        return

    ux.print_action("Running API tests...")
    result = run_command(config.api_test_command, cwd=str(api_dir))
    if result.failed:
        recorder.record(False, "API tests failed to execute", category)
    else:
        recorder.record(True, "API tests executed successfully", category)


# =============================================================================
# Phase 3: Code quality
# =============================================================================

def validate_code_quality(project_path: str, config: AuditConfig, recorder: CheckRecorder) -> None:
    ux.print_section("📊 CODE QUALITY CHECKS")
    category = Category.QUALITY

    report = run_quality_scan(
        os.path.join(project_path, config.ui_dir),
        config.scan_extensions,
        dedupe_credentials=config.dedupe_credential_findings,
    )
    logger.debug(
        f"Scanned {report.summary.files_visited} files under {report.root} "
        f"(root found: {report.summary.root_found})"
    )

    consoles = report.console_locations
    recorder.record(
        not consoles,
        f"No console.log statements found ({len(consoles)} found)",
        category,
    )
    _print_findings(consoles, project_path)

    creds = report.credential_paths
    recorder.record(
        not creds,
        f"No hardcoded credentials found ({len(creds)} found)",
        category,
    )
    _print_findings(creds, project_path)

    tally = report.error_handling
    logger.debug(
        f"Error handling: {tally.good} good, {tally.needs_improvement} need improvement"
    )
    recorder.record(tally.needs_improvement == 0, "Proper error handling implemented", category)


def _print_findings(locations, project_path: str) -> None:
    for location in locations[:MAX_LISTED_FINDINGS]:
        ux.print_line(f"      {os.path.relpath(location, project_path)}")
    if len(locations) > MAX_LISTED_FINDINGS:
        ux.print_line(f"      ... and {len(locations) - MAX_LISTED_FINDINGS} more")


# =============================================================================
# Phase 4: Reports
# =============================================================================

def validate_reports(project_path: str, config: AuditConfig, recorder: CheckRecorder) -> None:
    ux.print_section("📁 REPORTS & ARTIFACTS")
    category = Category.REPORTS
    ui_report = Path(project_path) / config.ui_dir / "playwright-report"
    api_report = Path(project_path) / config.api_dir / "target" / "surefire-reports"

    recorder.record(ui_report.exists(), "Playwright report directory exists", category)
    recorder.record(api_report.exists(), "API test reports directory exists", category)

    if ui_report.is_dir():
        recorder.record(any(ui_report.iterdir()), "Test reports generated", category)


# =============================================================================
# Orchestration
# =============================================================================

PHASES = [
    validate_preflight,
    validate_tests,
    validate_code_quality,
    validate_reports,
]


def run_audit(
    project_path: str,
    config: Optional[AuditConfig] = None,
    recorder: Optional[CheckRecorder] = None,
) -> ValidationState:
    """Run every phase in order against a project.

    Args:
        project_path: Project root containing the UI and API suites
        config: Audit configuration (default: AuditConfig())
        recorder: Recorder to fill (default: a fresh one)

    Returns:
        The populated ValidationState
    """
    config = config or AuditConfig()
    recorder = recorder or CheckRecorder()

    for phase in PHASES:
        phase(project_path, config, recorder)

    return recorder.state
