"""formatter: diagnostic output formatting for stderr and JSON.

Provides a compiler-style one-line-per-diagnostic stderr format with a
summary footer, and a structured JSON format for tools.  All labels and
templates come from ``config/defaults.yaml``.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from aliasgate.lib import config
from aliasgate.lib.models import Diagnostic
from aliasgate.lib.theme import colorize


# ---------------------------------------------------------------------------
# Stderr formatting
# ---------------------------------------------------------------------------


def format_diagnostic_stderr(diagnostic: Diagnostic, *, stream: Any = None) -> str:
    """Format a single diagnostic as ``path:line:col: severity id: message``.

    Args:
        diagnostic: The diagnostic to render.
        stream: Stream used to decide on colour. Defaults to sys.stderr.

    Returns:
        One line of text (plus the scope name when it is not the file).
    """
    line_tpl = config.get_str("messages.diagnostic_line")
    scope_tpl = config.get_str("messages.scope_suffix")
    loc = diagnostic.location

    text = line_tpl.format(
        path=colorize(loc.path, "file_path", stream=stream),
        line=loc.line,
        column=loc.column,
        severity=colorize(diagnostic.severity, diagnostic.severity, stream=stream),
        rule_id=diagnostic.rule_id,
        message=diagnostic.message,
    )
    if diagnostic.scope_name and diagnostic.scope_name != loc.path:
        text += scope_tpl.format(scope=diagnostic.scope_name)
    return text


def format_summary_stderr(
    rule_id: str,
    error_count: int,
    warning_count: int,
    scope_count: int,
    *,
    stream: Any = None,
) -> str:
    """Format the summary footer for stderr output.

    Args:
        rule_id: The rule that ran.
        error_count: Diagnostics with error severity.
        warning_count: Diagnostics with warning severity.
        scope_count: Number of scopes checked.
        stream: Stream used to decide on colour.

    Returns:
        Multi-line summary string.
    """
    bar_char = config.get_str("formatting.summary_bar_char")
    bar_width = config.get_int("formatting.summary_bar_width")
    lbl_rule = config.get_str("labels.rule")
    lbl_diags = config.get_str("labels.diagnostics")
    lbl_errors = config.get_str("labels.errors")
    lbl_warnings = config.get_str("labels.warnings")
    lbl_scopes = config.get_str("labels.scopes")

    bar = colorize(bar_char * bar_width, "summary_bar", stream=stream)
    if error_count > 0:
        verdict = colorize(config.get_str("labels.rejected"), "rejected", stream=stream)
    else:
        verdict = colorize(config.get_str("labels.passed"), "passed", stream=stream)

    parts = [
        bar,
        f"  {lbl_rule} {rule_id} ({scope_count} {lbl_scopes})",
        f"  {lbl_diags} {error_count} {lbl_errors}, {warning_count} {lbl_warnings}",
        f"  {verdict}",
        bar,
    ]
    return "\n".join(parts)


def format_report_stderr(
    diagnostics: Sequence[Diagnostic],
    rule_id: str,
    error_count: int,
    warning_count: int,
    scope_count: int,
    *,
    stream: Any = None,
) -> str:
    """Format every diagnostic followed by the summary footer."""
    sep = config.get_str("formatting.diagnostic_separator")
    lines = [format_diagnostic_stderr(d, stream=stream) for d in diagnostics]
    lines.append(
        format_summary_stderr(
            rule_id, error_count, warning_count, scope_count, stream=stream
        )
    )
    return sep.join(lines)


# ---------------------------------------------------------------------------
# JSON formatting
# ---------------------------------------------------------------------------


def format_diagnostics_json(
    diagnostics: Sequence[Diagnostic],
    filepath: str,
    rule_id: str,
    scope_count: int,
    status: Optional[str] = None,
) -> dict[str, Any]:
    """Format diagnostics as a JSON-compatible dict.

    Args:
        diagnostics: Diagnostics in report order.
        filepath: The scanned file.
        rule_id: The rule that ran.
        scope_count: Number of scopes checked.
        status: Overall status; derived from severities when omitted.

    Returns:
        Dict suitable for json.dumps().
    """
    sev_error = config.get_str("severities.error")
    sev_warning = config.get_str("severities.warning")

    errors = sum(1 for d in diagnostics if d.severity == sev_error)
    warnings = sum(1 for d in diagnostics if d.severity == sev_warning)
    if status is None:
        status = config.get_str(
            "statuses.rejected" if errors > 0 else "statuses.passed"
        )

    return {
        "status": status,
        "file": filepath,
        "rule": rule_id,
        "diagnostics": [d.to_dict() for d in diagnostics],
        "summary": {
            "errors": errors,
            "warnings": warnings,
            "scopes": scope_count,
        },
    }
