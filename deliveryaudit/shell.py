"""
Shell command runner for the delivery audit.

Runs an external command to completion in an explicit working directory
and hands back a CommandResult. Never raises: a non-zero exit or a spawn
failure comes back as a result with `error` set.

Usage:
    from deliveryaudit.shell import run_command

    result = run_command("node --version", cwd=project_path)
    if result.failed:
        print(f"Command failed: {result.error}")
    else:
        print(result.output)
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os
import subprocess

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of running a single external command."""
    command: str
    cwd: str
    exit_code: Optional[int] = None  # None when the process never started
    stdout: str = ""
    stderr: str = ""
    error: str = ""

    @property
    def failed(self) -> bool:
        """Check if the command failed to run or exited non-zero."""
        return bool(self.error)

    @property
    def output(self) -> str:
        """Captured standard output."""
        return self.stdout


def run_command(command: str, cwd: Optional[str] = None) -> CommandResult:
    """Run a shell command and wait for it to finish.

    No timeout and no retry: a hung command blocks the caller.

    Args:
        command: Command line, interpreted by the shell
        cwd: Working directory (default: current directory)

    Returns:
        CommandResult with captured output, or with `error` set on failure
    """
    working_dir = cwd or os.getcwd()
    result = CommandResult(command=command, cwd=working_dir)

    logger.debug(f"Running `{command}` in {working_dir}")

    try:
        process = subprocess.run(
            command,
            shell=True,
            cwd=working_dir,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        result.error = str(e)
        logger.debug(f"Command could not start: {command}: {e}")
        return result

    result.exit_code = process.returncode
    result.stdout = process.stdout
    result.stderr = process.stderr

    if process.returncode != 0:
        result.error = f"Command failed with exit code {process.returncode}: {command}"
        logger.debug(f"{result.error}\n{process.stderr}")

    return result
