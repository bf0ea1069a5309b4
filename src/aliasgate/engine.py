"""aliasgate engine: thin orchestrator for the alias-ordering rule.

Composes the library modules to check one input (a Python source or a
directive document) and return structured results.  This is the main entry
point for programmatic usage.

Design notes:
    The engine never parses input itself.  It asks a front end
    (``SourceAnalyzer`` or the directive-document loader) for scopes, calls
    the ordering check once per scope, and hands the resulting violations to
    the rule registry to become diagnostics.
"""

from __future__ import annotations

import json
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from aliasgate._paths import find_project_config
from aliasgate.exceptions import AliasgateParseError
from aliasgate.lib import config
from aliasgate.lib.directives import parse_directive_document
from aliasgate.lib.formatter import format_diagnostics_json, format_report_stderr
from aliasgate.lib.logger import log_scan
from aliasgate.lib.models import Diagnostic, DiagnosticDescriptor, ProjectConfig, Scope
from aliasgate.lib.ordering import check
from aliasgate.lib.rules import (
    is_enabled,
    load_descriptor,
    load_project_config,
    resolve_descriptor,
    to_diagnostics,
)


@dataclass
class ScanResult:
    """Result of checking one input."""

    status: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0
    scope_count: int = 0
    scan_ms: int = 0
    rule_id: str = ""


def check_scopes(
    scopes: Sequence[Scope],
    descriptor: Optional[DiagnosticDescriptor] = None,
) -> list[Diagnostic]:
    """Run the ordering check on each scope independently.

    Args:
        scopes: Scopes in report order.
        descriptor: Descriptor used to render messages. Defaults to the
            registered one.

    Returns:
        Diagnostics for all scopes, scope by scope, each in source order.
    """
    descriptor = descriptor or load_descriptor()
    diagnostics: list[Diagnostic] = []
    for scope in scopes:
        diagnostics.extend(to_diagnostics(descriptor, scope, check(scope)))
    return diagnostics


def scan_source(
    source: str,
    filepath: str,
    *,
    config_path: Union[str, Path, None] = None,
    output_format: str = "",
) -> ScanResult:
    """Check a Python source string.

    Args:
        source: Python source code.
        filepath: Path used in locations and scope names.
        config_path: Project config path. Discovered when omitted.
        output_format: 'stderr', 'json', or 'none' for no output.
            Defaults to the value from config.

    Returns:
        ScanResult with status, diagnostics, and timing.

    Raises:
        AliasgateParseError: If the source is not valid Python.
        ConfigError: If the project config is invalid.
    """

    def _scopes() -> tuple[list[Scope], int]:
        # Wrap parse errors so callers get an AliasgateParseError instead of
        # a LibCST exception they cannot handle.
        try:
            from aliasgate.lib.analyzer import SourceAnalyzer

            analyzer = SourceAnalyzer(source, filepath)
            scopes = analyzer.scopes()
        except Exception as exc:
            raise AliasgateParseError(filepath, exc) from exc
        return scopes, analyzer.directive_count()

    return _scan(_scopes, source, filepath, config_path, output_format)


def scan_directives(
    text: str,
    filepath: str,
    *,
    config_path: Union[str, Path, None] = None,
    output_format: str = "",
) -> ScanResult:
    """Check a YAML directive document.

    Args:
        text: Document content.
        filepath: Document path, used in error locations.
        config_path: Project config path. Discovered when omitted.
        output_format: 'stderr', 'json', or 'none' for no output.

    Returns:
        ScanResult with status, diagnostics, and timing.

    Raises:
        DirectiveError: If the document is malformed.
        ConfigError: If the project config is invalid.
    """

    def _scopes() -> tuple[list[Scope], int]:
        scopes = parse_directive_document(text, filepath)
        return scopes, sum(len(s) for s in scopes)

    return _scan(_scopes, text, filepath, config_path, output_format)


def _scan(
    build_scopes,
    text: str,
    filepath: str,
    config_path: Union[str, Path, None],
    output_format: str,
) -> ScanResult:
    """Shared pipeline: config, scopes, check, diagnostics, log, output."""
    if not output_format:
        output_format = config.get_str("formats.default")

    status_passed = config.get_str("statuses.passed")
    status_rejected = config.get_str("statuses.rejected")
    sev_error = config.get_str("severities.error")
    sev_warning = config.get_str("severities.warning")

    start = time.time()

    # 1. Resolve project config and the effective descriptor
    if config_path is None:
        config_path = find_project_config()
    project: Optional[ProjectConfig] = load_project_config(config_path)
    descriptor = resolve_descriptor(project)
    if not is_enabled(descriptor, project):
        return ScanResult(status=status_passed, rule_id=descriptor.rule_id)

    # 2. Build scopes and check each one independently
    scopes, directive_count = build_scopes()
    diagnostics = check_scopes(scopes, descriptor)

    # 3. Count and time
    scan_ms = int((time.time() - start) * 1000)
    error_count = sum(1 for d in diagnostics if d.severity == sev_error)
    warning_count = sum(1 for d in diagnostics if d.severity == sev_warning)
    status = status_rejected if error_count > 0 else status_passed

    # 4. Log scan results (if enabled)
    if project is not None and project.logging_enabled and project.log_directory:
        log_scan(
            project.log_directory,
            filepath,
            descriptor.rule_id,
            status,
            [
                {"rule": d.rule_id, "severity": d.severity, "line": d.location.line}
                for d in diagnostics
            ],
            len(scopes),
            directive_count,
            text,
            scan_ms,
        )

    result = ScanResult(
        status=status,
        diagnostics=diagnostics,
        error_count=error_count,
        warning_count=warning_count,
        scope_count=len(scopes),
        scan_ms=scan_ms,
        rule_id=descriptor.rule_id,
    )

    # 5. Format output
    if output_format == config.get_str("formats.json"):
        json_data = format_diagnostics_json(
            diagnostics, filepath, descriptor.rule_id, len(scopes), status
        )
        sys.stderr.write(
            json.dumps(json_data, indent=config.get_int("defaults.json_indent")) + "\n"
        )
    elif output_format == config.get_str("formats.stderr") and diagnostics:
        sys.stderr.write(
            format_report_stderr(
                diagnostics,
                descriptor.rule_id,
                error_count,
                warning_count,
                len(scopes),
            )
            + "\n"
        )

    return result
