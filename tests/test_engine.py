"""Integration tests for aliasgate.engine."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import make_directives
from aliasgate.engine import ScanResult, check_scopes, scan_directives, scan_source
from aliasgate.exceptions import AliasgateParseError, ConfigError, DirectiveError
from aliasgate.lib.models import Scope


class TestScanSource:
    """Python sources through the full pipeline."""

    def test_passing_file(self, passing_source: str) -> None:
        """Aliases after plain imports produce no diagnostics."""
        result = scan_source(passing_source, "src/ok.py", output_format="none")
        assert isinstance(result, ScanResult)
        assert result.status == "passed"
        assert result.diagnostics == []
        assert result.scope_count == 2
        assert result.rule_id == "SA1209"

    def test_failing_file(self, failing_source: str) -> None:
        """Module and class scopes are each reported against their own anchor."""
        result = scan_source(failing_source, "src/bad.py", output_format="none")
        assert [(d.location.line, d.message) for d in result.diagnostics] == [
            (3, "Using alias directive for 'np' must appear after directive for 'sys'"),
            (5, "Using alias directive for 'pd' must appear after directive for 'sys'"),
            (12, "Using alias directive for 'js' must appear after directive for 'csv'"),
        ]
        assert result.warning_count == 3
        assert result.error_count == 0
        # Default severity is warning, which does not reject.
        assert result.status == "passed"

    def test_severity_override_rejects(
        self, failing_source: str, write_project_config
    ) -> None:
        """An error severity override turns diagnostics into a rejection."""
        path = write_project_config({"rule_overrides": {"SA1209": {"severity": "error"}}})
        result = scan_source(
            failing_source, "src/bad.py", config_path=path, output_format="none"
        )
        assert result.status == "rejected"
        assert result.error_count == 3

    def test_disabled_rule(self, failing_source: str, write_project_config) -> None:
        """A disabled rule passes without checking."""
        path = write_project_config({"rule_overrides": {"SA1209": {"enabled": False}}})
        result = scan_source(
            failing_source, "src/bad.py", config_path=path, output_format="none"
        )
        assert result.status == "passed"
        assert result.diagnostics == []
        assert result.scope_count == 0

    def test_discovers_project_config(
        self, failing_source: str, write_project_config
    ) -> None:
        """``.aliasgate.yaml`` in the working directory is picked up."""
        write_project_config({"rule_overrides": {"SA1209": {"severity": "error"}}})
        result = scan_source(failing_source, "src/bad.py", output_format="none")
        assert result.status == "rejected"

    def test_env_config(
        self, failing_source: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """ALIASGATE_CONFIG points at a config elsewhere."""
        cfg = tmp_path / "elsewhere.yaml"
        cfg.write_text("rule_overrides:\n  SA1209:\n    enabled: false\n", encoding="utf-8")
        monkeypatch.setenv("ALIASGATE_CONFIG", str(cfg))
        result = scan_source(failing_source, "src/bad.py", output_format="none")
        assert result.diagnostics == []

    def test_invalid_config(self, failing_source: str, write_project_config) -> None:
        """A malformed project config raises ConfigError."""
        path = write_project_config({"logging": "yes"})
        with pytest.raises(ConfigError):
            scan_source(failing_source, "src/bad.py", config_path=path)

    def test_syntax_error_raises(self) -> None:
        """Unparseable source raises AliasgateParseError."""
        with pytest.raises(AliasgateParseError):
            scan_source("def broken(\n    this is not valid\n", "src/bad.py")

    def test_empty_source(self) -> None:
        """An empty file has one empty scope and passes."""
        result = scan_source("", "empty.py", output_format="none")
        assert result.status == "passed"
        assert result.scope_count == 1


class TestScanDirectives:
    """Directive documents through the full pipeline."""

    def test_nested_document(self, failing_document: str) -> None:
        """Violations in each scope name that scope's anchor."""
        result = scan_directives(failing_document, "doc.yaml", output_format="none")
        assert [(d.scope_name, d.message) for d in result.diagnostics] == [
            (
                "Example.cs",
                "Using alias directive for 'Col' must appear after directive for 'System.Math'",
            ),
            (
                "Outer",
                "Using alias directive for 'T' must appear after directive for 'System.IO'",
            ),
        ]
        assert result.scope_count == 3

    def test_malformed_document(self) -> None:
        """A malformed document raises DirectiveError."""
        with pytest.raises(DirectiveError):
            scan_directives("usings: 3\n", "doc.yaml")


class TestOutput:
    """Output written to stderr."""

    def test_stderr_report(
        self, failing_source: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The stderr format lists diagnostics and a summary."""
        scan_source(failing_source, "src/bad.py", output_format="stderr")
        err = capsys.readouterr().err
        assert "src/bad.py:3:7: warning SA1209:" in err
        assert "[Loader]" in err
        assert "3 warning(s)" in err

    def test_stderr_silent_when_clean(
        self, passing_source: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Nothing is printed for a clean file."""
        scan_source(passing_source, "src/ok.py", output_format="stderr")
        assert capsys.readouterr().err == ""

    def test_json_report(
        self, failing_source: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The JSON format is parseable and complete."""
        scan_source(failing_source, "src/bad.py", output_format="json")
        data = json.loads(capsys.readouterr().err)
        assert data["status"] == "passed"
        assert data["summary"]["warnings"] == 3
        assert data["diagnostics"][2]["scope"] == "Loader"


class TestLogging:
    """Telemetry integration."""

    def test_scan_logged_when_enabled(
        self, failing_source: str, tmp_path: Path, write_project_config
    ) -> None:
        """Enabled logging writes one JSONL entry."""
        log_dir = tmp_path / "logs"
        path = write_project_config(
            {"logging": {"enabled": True, "directory": str(log_dir)}}
        )
        scan_source(failing_source, "src/bad.py", config_path=path, output_format="none")
        entry = json.loads((log_dir / "scan_log.jsonl").read_text(encoding="utf-8"))
        assert entry["file"] == "src/bad.py"
        assert entry["scope_count"] == 2
        assert entry["directive_count"] == 6
        assert [d["line"] for d in entry["diagnostics"]] == [3, 5, 12]


class TestCheckScopes:
    """The per-scope loop used by hosts that build their own scopes."""

    def test_scopes_are_independent(self) -> None:
        """A violation never crosses a scope boundary."""
        first = Scope("file", "a.cs", tuple(make_directives(("A", "Foo", False))))
        second = Scope("namespace", "N", tuple(make_directives((None, "Bar", False))))
        assert check_scopes([first, second]) == []
