"""Custom exceptions for aliasgate.

Defines the exception hierarchy raised by the front ends, the project
config loader, and the engine. The ordering checker itself never raises.
All exceptions are importable from the top-level ``aliasgate`` package.

Exceptions:
    AliasgateError: Base class for every aliasgate failure.
    AliasgateParseError: Raised when LibCST cannot parse a Python source
        file. Wraps the original parse exception.
    DirectiveError: Raised when a directive document or a single directive
        record is malformed.
    ConfigError: Raised when a project config file is unreadable or fails
        validation.
"""

from __future__ import annotations

from typing import Optional

from aliasgate.lib import config


class AliasgateError(Exception):
    """Base class for aliasgate errors."""


class AliasgateParseError(AliasgateError):
    """Raised when LibCST cannot parse a source file.

    A file that cannot be parsed is reported as an input error rather
    than silently passing with zero scopes.
    """

    def __init__(self, filepath: str, original_error: Exception) -> None:
        """Initialize with parse error details.

        Args:
            filepath: Path to the file that failed parsing.
            original_error: The underlying parse exception.
        """
        self.filepath = filepath
        self.original_error = original_error
        msg = config.get_str("messages.parse_error")
        super().__init__(msg.format(filepath=filepath, error=original_error))


class DirectiveError(AliasgateError):
    """Raised for malformed directive documents and directive records."""

    def __init__(self, location: str, detail: str, *, document: bool = True) -> None:
        """Initialize with the offending location and a description.

        Args:
            location: Human-readable position, e.g. ``"doc.yaml:usings[2]"``.
            detail: What is wrong at that position.
            document: False when a single record was built directly rather
                than read from a directive document.
        """
        self.location = location
        self.detail = detail
        msg = config.get_str(
            "messages.directive_error" if document else "messages.invalid_directive"
        )
        super().__init__(msg.format(location=location, detail=detail))


class ConfigError(AliasgateError):
    """Raised when a project config cannot be loaded or is invalid."""

    def __init__(self, path: str, errors: Optional[list[str]] = None) -> None:
        """Initialize with the config path and validation errors.

        Args:
            path: Path to the offending config file.
            errors: Validation error strings.
        """
        self.path = path
        self.errors = list(errors or [])
        msg = config.get_str("messages.config_error")
        super().__init__(msg.format(path=path, errors="; ".join(self.errors)))
