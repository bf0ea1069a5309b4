"""Data models for directives, scopes, violations, and diagnostics.

Typed, frozen dataclasses shared by the ordering checker, the front ends,
and the engine.  Directive and Violation are transient, scope-local values:
front ends build directives once per analysis pass, the checker builds
violations, and nothing holds on to either after the engine returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from aliasgate.exceptions import DirectiveError


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Location:
    """Position of a directive in its source.

    Attributes:
        path: File the directive came from.
        line: 1-based line number.
        column: 0-based column offset.
    """

    path: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Directive:
    """One import-style directive, in source order.

    Attributes:
        target_name: Imported namespace or type path, possibly qualified
            with a ``name::`` prefix.
        alias_name: Name bound by the directive, or None for a plain one.
        is_static: True for the member-import ("static") form.
        location: Where the directive appears.  Only used for reporting.
    """

    target_name: str
    alias_name: Optional[str] = None
    is_static: bool = False
    location: Location = field(default_factory=lambda: Location("", 0))

    def __post_init__(self) -> None:
        if self.alias_name is not None and not self.alias_name:
            raise DirectiveError(
                str(self.location), "alias name must not be empty", document=False
            )

    @property
    def has_alias(self) -> bool:
        return self.alias_name is not None


@dataclass(frozen=True)
class Scope:
    """An ordered run of directives from one lexical region.

    Attributes:
        kind: ``"file"`` or ``"namespace"``.
        name: Display name (the file path or the dotted namespace name).
        directives: Directives in exact source order.
    """

    kind: str
    name: str
    directives: tuple[Directive, ...] = ()

    def __len__(self) -> int:
        return len(self.directives)

    def __iter__(self):
        return iter(self.directives)

    def __getitem__(self, index: int) -> Directive:
        return self.directives[index]


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """An alias directive that precedes a plain directive."""

    alias_name: str
    required_predecessor_name: str
    location: Location


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Identity metadata for a rule, owned by the rule registry.

    Attributes:
        rule_id: Stable rule identifier (e.g. ``SA1209``).
        title: Short human-readable title.
        message_format: Template with positional ``{0}``/``{1}`` slots.
        category: Rule category.
        severity: Reporting severity.
        enabled_by_default: Registry default for whether the rule runs.
        description: Longer description.
        help_link: Documentation URL.
    """

    rule_id: str
    title: str
    message_format: str
    category: str
    severity: str
    enabled_by_default: bool
    description: str
    help_link: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiagnosticDescriptor:
        """Build from a raw mapping (e.g. ``defaults.yaml`` rules entry).

        Args:
            data: Rule metadata mapping.

        Returns:
            DiagnosticDescriptor instance.

        Raises:
            KeyError: If a required field is missing.
        """
        return cls(
            rule_id=data["rule_id"],
            title=data["title"],
            message_format=data["message_format"],
            category=data["category"],
            severity=data["severity"],
            enabled_by_default=bool(data.get("enabled_by_default", False)),
            description=data.get("description", ""),
            help_link=data.get("help_link", ""),
        )


@dataclass(frozen=True)
class Diagnostic:
    """A violation rendered against a descriptor, ready for a sink."""

    rule_id: str
    severity: str
    message: str
    location: Location
    scope_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping."""
        return {
            "rule": self.rule_id,
            "severity": self.severity,
            "message": self.message,
            "path": self.location.path,
            "line": self.location.line,
            "column": self.location.column,
            "scope": self.scope_name,
        }


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProjectConfig:
    """Project configuration from ``.aliasgate.yaml``.

    Attributes:
        enabled: Rule enabled override, or None to leave it unset.
        severity: Severity override, or None.
        logging_enabled: Whether scan telemetry is written.
        log_directory: Directory for the telemetry file.
    """

    enabled: Optional[bool] = None
    severity: Optional[str] = None
    logging_enabled: bool = False
    log_directory: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], rule_id: str) -> ProjectConfig:
        """Build from a raw ``.aliasgate.yaml`` dict.

        Args:
            data: Parsed YAML mapping (already validated).
            rule_id: Rule whose overrides should be picked up.

        Returns:
            ProjectConfig instance.
        """
        overrides = (data.get("rule_overrides") or {}).get(rule_id) or {}
        logging_cfg = data.get("logging") or {}
        return cls(
            enabled=overrides.get("enabled"),
            severity=overrides.get("severity"),
            logging_enabled=bool(logging_cfg.get("enabled", False)),
            log_directory=logging_cfg.get("directory", "") or "",
        )


def validate_project_config(data: Any) -> list[str]:
    """Validate the structure of a ``.aliasgate.yaml`` dict.

    Returns a list of human-readable error strings (empty = valid).

    Args:
        data: The parsed YAML content.

    Returns:
        List of validation error messages. Empty if valid.
    """
    errors: list[str] = []

    if data is None:
        return errors

    if not isinstance(data, dict):
        errors.append(f"Project config must be a mapping, got {type(data).__name__}")
        return errors

    overrides = data.get("rule_overrides")
    if overrides is not None:
        if not isinstance(overrides, dict):
            errors.append(
                f"'rule_overrides' must be a mapping, got {type(overrides).__name__}"
            )
        else:
            for rule_id, ovr in overrides.items():
                if not isinstance(ovr, dict):
                    errors.append(
                        f"rule_overrides.{rule_id} must be a mapping, "
                        f"got {type(ovr).__name__}"
                    )
                    continue
                enabled = ovr.get("enabled")
                if enabled is not None and not isinstance(enabled, bool):
                    errors.append(
                        f"rule_overrides.{rule_id}.enabled must be a boolean, "
                        f"got {type(enabled).__name__}"
                    )
                severity = ovr.get("severity")
                if severity is not None and not isinstance(severity, str):
                    errors.append(
                        f"rule_overrides.{rule_id}.severity must be a string, "
                        f"got {type(severity).__name__}"
                    )

    logging_cfg = data.get("logging")
    if logging_cfg is not None:
        if not isinstance(logging_cfg, dict):
            errors.append(
                f"'logging' must be a mapping, got {type(logging_cfg).__name__}"
            )
        else:
            directory = logging_cfg.get("directory")
            if directory is not None and not isinstance(directory, str):
                errors.append(
                    f"logging.directory must be a string, got {type(directory).__name__}"
                )

    return errors
