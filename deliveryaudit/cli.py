"""
Delivery audit CLI.

Run from the project root:

    delivery-audit

Runs pre-flight, test execution, code quality and report checks, prints
the report and exits 0 only if every check passed.
"""

import logging
import os
import sys

import click

from deliveryaudit import __version__, ux
from deliveryaudit.config import load_config
from deliveryaudit.phases import run_audit
from deliveryaudit.recorder import CheckRecorder
from deliveryaudit.summary import print_summary, summarize

logger = logging.getLogger("deliveryaudit")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.version_option(version=__version__)
@click.option("-p", "--project", default=None, type=click.Path(file_okay=False),
              help="Project root to audit (default: current directory)")
@click.option("-c", "--config", "config_file", default=None, type=click.Path(dir_okay=False),
              help="Config file (default: <project>/delivery-audit.yaml if present)")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr")
def main(project: str, config_file: str, no_color: bool, verbose: bool):
    """Audit a UI + API test project for delivery readiness.

    \b
    Phases:
        1. Pre-flight      - toolchain, layout, manifests, config files
        2. Tests           - UI (Playwright) and API (Maven) suites
        3. Code quality    - console.log, hardcoded credentials, error handling
        4. Reports         - generated report directories
    """
    _configure_logging(verbose)
    if no_color:
        ux.set_colors(False)

    project_path = project or os.getcwd()

    ux.print_banner("🔍 PROJECT VALIDATION REPORT", "Principal QA Engineer - Delivery Readiness Audit")

    try:
        config = load_config(project_path, config_file)
        recorder = CheckRecorder()
        state = run_audit(project_path, config, recorder)
        summary = summarize(state)
        print_summary(summary, state)
    except Exception as e:
        logger.exception("Audit aborted")
        ux.print_error(f"\n{ux.ICONS['major']} Validation failed with error: {e}", file=sys.stdout)
        sys.exit(1)

    sys.exit(summary.exit_code)


if __name__ == "__main__":
    main()
