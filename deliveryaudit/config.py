"""
Delivery audit configuration.

Per-project settings stored in delivery-audit.yaml at the project root.
Every setting is optional; the defaults describe the standard layout:

    ui-tests/    Playwright UI suite (npm)
    api-tests/   API suite (Maven)

Verdict thresholds are fixed and deliberately not part of this file.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "delivery-audit.yaml"


@dataclass
class AuditConfig:
    """Project layout and external commands for an audit run."""
    ui_dir: str = "ui-tests"
    api_dir: str = "api-tests"

    # Pre-flight
    min_node_major: int = 18
    node_version_command: str = "node --version"
    sensitive_files: List[str] = field(
        default_factory=lambda: [".env", "credentials.json", "secrets.json"]
    )

    # Test execution
    ui_install_command: str = "npm ci"
    ui_test_command: str = "npx playwright test --reporter=json"
    api_test_command: str = "mvn test -Dtest=InventoryTestRunner"

    # Code quality
    scan_extensions: List[str] = field(default_factory=lambda: [".ts", ".js"])
    dedupe_credential_findings: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditConfig":
        """Build a config from a mapping.

        Unknown keys are ignored. A value of the wrong type keeps that
        key's default; a single string is accepted for a list setting.
        """
        defaults = cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        values = {}
        for key in known & set(data):
            value = _coerce(data[key], getattr(defaults, key))
            if value is None:
                logger.warning(
                    f"Invalid value for {key!r}: {data[key]!r}, using default "
                    f"{getattr(defaults, key)!r}"
                )
                continue
            values[key] = value
        return cls(**values)


def _coerce(value: Any, default: Any) -> Any:
    """Match value to the default's type. Returns None if it can't."""
    if isinstance(default, list):
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return value
        return None
    # bool is an int subclass, so compare exact types
    if type(value) is type(default):
        return value
    return None


def get_config_path(project_path: str) -> Path:
    """Get the config file path for a project."""
    return Path(project_path) / CONFIG_FILENAME


def load_config(project_path: str, config_file: Optional[str] = None) -> AuditConfig:
    """Load audit configuration. Returns defaults if not found.

    Args:
        project_path: Path to project root
        config_file: Explicit config file (default: <project>/delivery-audit.yaml)

    Returns:
        AuditConfig; defaults when the file is missing or malformed
    """
    path = Path(config_file) if config_file else get_config_path(project_path)

    if not path.exists():
        return AuditConfig()

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Could not parse {path}, using defaults: {e}")
            return AuditConfig()

    if not isinstance(data, dict):
        logger.warning(f"{path} is not a mapping, using defaults")
        return AuditConfig()

    return AuditConfig.from_dict(data)
