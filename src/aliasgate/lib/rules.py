"""rules: rule descriptor registry and project-level overrides.

The descriptor (rule id, title, message format, category, severity, help
link) is read from ``config/defaults.yaml`` and treated as immutable.  A
project's ``.aliasgate.yaml`` may layer ``rule_overrides`` on top, which
produces a new descriptor rather than mutating the registry entry.

Design notes:
    The ordering checker never reads descriptors.  Only this module turns
    violations into diagnostics, so the checker output stays independent of
    how a host chooses to present it.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Sequence, Union

import yaml

from aliasgate.exceptions import ConfigError
from aliasgate.lib import config
from aliasgate.lib.models import (
    Diagnostic,
    DiagnosticDescriptor,
    ProjectConfig,
    Scope,
    Violation,
    validate_project_config,
)
from aliasgate.lib.ordering import format_message


def load_descriptor(rule_id: Optional[str] = None) -> DiagnosticDescriptor:
    """Load a rule descriptor from defaults.yaml.

    Args:
        rule_id: Rule to load. Defaults to ``default_rule``.

    Returns:
        The registered descriptor.

    Raises:
        KeyError: If the rule is not registered.
    """
    rule_id = rule_id or config.get_str("default_rule")
    return DiagnosticDescriptor.from_dict(config.get(f"rules.{rule_id}"))


def resolve_descriptor(
    project: Optional[ProjectConfig],
    descriptor: Optional[DiagnosticDescriptor] = None,
) -> DiagnosticDescriptor:
    """Apply a project severity override to a descriptor.

    Args:
        project: Project config, or None when there is none.
        descriptor: Base descriptor. Defaults to the registered one.

    Returns:
        The effective descriptor.

    Raises:
        ConfigError: If the override names an unknown severity.
    """
    base = descriptor or load_descriptor()
    if project is None or project.severity is None:
        return base

    choices = config.get_list("severities.valid_choices")
    if project.severity not in choices:
        msg = config.get_str("messages.invalid_severity")
        raise ConfigError(
            "rule_overrides",
            [msg.format(severity=project.severity, choices=", ".join(choices))],
        )
    return dataclasses.replace(base, severity=project.severity)


def is_enabled(
    descriptor: DiagnosticDescriptor,
    project: Optional[ProjectConfig],
) -> bool:
    """Decide whether an explicitly invoked rule should run.

    A project ``enabled`` override always wins.  Without one the rule runs:
    ``enabled_by_default`` only describes the registry default for hosts
    that run every registered rule implicitly.
    """
    if project is not None and project.enabled is not None:
        return project.enabled
    return True


def load_project_config(
    path: Union[str, Path, None],
    rule_id: Optional[str] = None,
) -> Optional[ProjectConfig]:
    """Load and validate a project's ``.aliasgate.yaml``.

    Args:
        path: Path to the config file, or None.
        rule_id: Rule whose overrides to read. Defaults to ``default_rule``.

    Returns:
        ProjectConfig, or None if no path was given or the file is absent.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    if path is None:
        return None
    path = Path(path)
    if not path.is_file():
        return None

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigError(str(path), [str(exc)]) from exc

    errors = validate_project_config(data)
    if errors:
        raise ConfigError(str(path), errors)

    return ProjectConfig.from_dict(data or {}, rule_id or config.get_str("default_rule"))


def to_diagnostics(
    descriptor: DiagnosticDescriptor,
    scope: Scope,
    violations: Sequence[Violation],
) -> list[Diagnostic]:
    """Render a scope's violations as diagnostics, preserving order."""
    return [
        Diagnostic(
            rule_id=descriptor.rule_id,
            severity=descriptor.severity,
            message=format_message(descriptor, v),
            location=v.location,
            scope_name=scope.name,
        )
        for v in violations
    ]
