"""logger: JSONL scan telemetry.

Each scan appends a single JSON line to a log file inside the configured log
directory.  Every entry records the scanned file, rule, status, diagnostic
positions, a truncated SHA-256 hash of the input, and timing.  The log file
name and formatting constants are read from ``config/defaults.yaml``.
"""

from __future__ import annotations

import datetime
import hashlib
import json
import os
from typing import Any

from aliasgate.lib import config


def log_scan(
    log_dir: str,
    filepath: str,
    rule_id: str,
    status: str,
    diagnostics_data: list[dict[str, Any]],
    scope_count: int,
    directive_count: int,
    source: str,
    scan_ms: int,
) -> None:
    """Write a JSONL log entry for a scan result.

    Args:
        log_dir: Directory to write the log file in.
        filepath: Path to the scanned file.
        rule_id: Rule that was run.
        status: Scan status ('rejected' or 'passed').
        diagnostics_data: Summary dicts (rule, severity, line) per diagnostic.
        scope_count: Number of scopes checked.
        directive_count: Number of directives across all scopes.
        source: The scanned input text.
        scan_ms: Scan duration in milliseconds.
    """
    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, config.get_str("filenames.scan_log"))

    utc_src = config.get_str("formatting.utc_offset_source")
    utc_rep = config.get_str("formatting.utc_offset_replacement")
    hash_prefix = config.get_str("formatting.hash_prefix")
    hash_trunc = config.get_int("defaults.hash_truncation_length")
    separators = tuple(config.get_list("formatting.json_separators"))

    entry: dict[str, Any] = {
        "timestamp": (
            datetime.datetime.now(datetime.timezone.utc)
            .isoformat()
            .replace(utc_src, utc_rep)
        ),
        "event": "scan",
        "file": filepath,
        "rule": rule_id,
        "status": status,
        "diagnostics": diagnostics_data,
        "scope_count": scope_count,
        "directive_count": directive_count,
        "input_hash": hash_prefix + hashlib.sha256(source.encode()).hexdigest()[:hash_trunc],
        "scan_ms": scan_ms,
    }

    with open(log_path, "a", encoding="utf-8") as fh:
        fh.write(json.dumps(entry, separators=separators) + "\n")
