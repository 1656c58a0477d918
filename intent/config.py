"""
Engine settings and their YAML loader.

Settings files are small YAML mappings:

    contains_diagnostic_limit: 50
    compound_policy: first_failure
    log_level: DEBUG

Loading never raises for bad content; problems are collected in a
ValidationResult with one error per offending field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .expectations.models import CompoundPolicy
from .expectations.engine import DEFAULT_CONTAINS_LIMIT


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class EngineSettings:
    """Tunables shared by every suite built with them."""
    contains_diagnostic_limit: int = DEFAULT_CONTAINS_LIMIT
    compound_policy: CompoundPolicy = CompoundPolicy.ALL
    log_level: str = "WARNING"


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "compound_policy"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"{self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   Hint: {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of settings validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "Settings validation passed"
        lines = [f"Settings validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Validator
# ─────────────────────────────────────────────────────────────────────────────

class SettingsValidator:
    """Validates a raw parsed YAML mapping against EngineSettings."""

    KNOWN_KEYS = {"contains_diagnostic_limit", "compound_policy", "log_level"}
    VALID_POLICIES = {p.value for p in CompoundPolicy}
    VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_keys()
        self._validate_limit()
        self._validate_policy()
        self._validate_log_level()
        return self.result

    def _validate_keys(self) -> None:
        for key in set(self.data) - self.KNOWN_KEYS:
            self.result.add_error(
                str(key),
                f"Unknown setting '{key}'",
                suggestion=f"Valid settings are: {', '.join(sorted(self.KNOWN_KEYS))}"
            )

    def _validate_limit(self) -> None:
        if "contains_diagnostic_limit" not in self.data:
            return
        limit = self.data["contains_diagnostic_limit"]
        # bool is an int subclass; reject it explicitly
        if not isinstance(limit, int) or isinstance(limit, bool):
            self.result.add_error(
                "contains_diagnostic_limit",
                "Must be an integer",
                value=limit,
                suggestion="Use e.g. 'contains_diagnostic_limit: 20'"
            )
        elif limit < 1:
            self.result.add_error(
                "contains_diagnostic_limit",
                "Must be >= 1",
                value=limit
            )

    def _validate_policy(self) -> None:
        if "compound_policy" not in self.data:
            return
        policy = self.data["compound_policy"]
        if policy not in self.VALID_POLICIES:
            self.result.add_error(
                "compound_policy",
                "Unknown compound policy",
                value=policy,
                suggestion=f"Use one of: {', '.join(sorted(self.VALID_POLICIES))}"
            )

    def _validate_log_level(self) -> None:
        if "log_level" not in self.data:
            return
        level = self.data["log_level"]
        if not isinstance(level, str) or level.upper() not in self.VALID_LOG_LEVELS:
            self.result.add_error(
                "log_level",
                "Unknown log level",
                value=level,
                suggestion=f"Use one of: {', '.join(sorted(self.VALID_LOG_LEVELS))}"
            )


# ─────────────────────────────────────────────────────────────────────────────
# Loader
# ─────────────────────────────────────────────────────────────────────────────

def load_settings(path: str | Path) -> tuple[EngineSettings | None, ValidationResult]:
    """
    Load and validate settings from a YAML file.

    Args:
        path: Path to the YAML settings file

    Returns:
        Tuple of (EngineSettings or None, ValidationResult)
        If validation fails, EngineSettings will be None.
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    return parse_settings_yaml(path.read_text(), source=str(path))


def parse_settings_yaml(
    yaml_string: str,
    source: str = "yaml",
) -> tuple[EngineSettings | None, ValidationResult]:
    """
    Validate settings from a YAML string.

    An empty document yields the default settings.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            source,
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    if data is None:
        data = {}

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Settings must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    result = SettingsValidator(data).validate()
    if not result.is_valid:
        return None, result

    settings = EngineSettings(
        contains_diagnostic_limit=data.get("contains_diagnostic_limit", DEFAULT_CONTAINS_LIMIT),
        compound_policy=CompoundPolicy(data.get("compound_policy", CompoundPolicy.ALL.value)),
        log_level=data.get("log_level", "WARNING").upper(),
    )
    return settings, result


def configure_logging(settings: EngineSettings, handler: logging.Handler | None = None) -> None:
    """Apply ``settings.log_level`` to the ``intent`` logger."""
    package_logger = logging.getLogger("intent")
    package_logger.setLevel(settings.log_level)
    if handler is not None:
        package_logger.addHandler(handler)
