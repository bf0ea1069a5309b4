"""aliasgate: alias import directives must follow plain import directives.

Stable public API:
    check: Run the ordering check on one scope.
    check_scopes: Check several scopes and render diagnostics.
    scan_source: Check a Python source string.
    scan_directives: Check a YAML directive document.
    ScanResult: Dataclass returned by the scan functions.
    Directive, Location, Scope, Violation, Diagnostic: Data records.
    AliasgateError, AliasgateParseError, DirectiveError, ConfigError:
        Exceptions raised by the front ends and the engine.
"""

__version__ = "0.1.0"

from aliasgate.engine import ScanResult, check_scopes, scan_directives, scan_source
from aliasgate.exceptions import (
    AliasgateError,
    AliasgateParseError,
    ConfigError,
    DirectiveError,
)
from aliasgate.lib.models import Diagnostic, Directive, Location, Scope, Violation
from aliasgate.lib.ordering import check, name_without_alias

__all__ = [
    "__version__",
    "check",
    "check_scopes",
    "name_without_alias",
    "scan_source",
    "scan_directives",
    "ScanResult",
    "Directive",
    "Location",
    "Scope",
    "Violation",
    "Diagnostic",
    "AliasgateError",
    "AliasgateParseError",
    "ConfigError",
    "DirectiveError",
]
