"""theme: ANSI colour roles for diagnostic output.

Colour definitions are read lazily from ``config/theme.yaml`` and cached.
Nothing is coloured when the target stream is not a TTY, so piped output
and JSON consumers always see plain text.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

import yaml

from aliasgate._paths import theme_path


class Theme:
    """Lazy-loaded mapping of semantic roles to ANSI escape codes.

    Attributes:
        resolved: Mapping of role names (``error``, ``warning`` ...) to codes.
    """

    def __init__(self) -> None:
        self._resolved: Optional[dict[str, str]] = None

    def _load(self) -> dict[str, str]:
        tp = theme_path()
        if not tp.is_file():
            return {}
        with open(tp, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        if not raw:
            return {}
        ansi: dict[str, str] = raw.get("ansi", {})
        resolved = {
            role: ansi.get(color, "") for role, color in raw.get("roles", {}).items()
        }
        for attr in ("bold", "dim", "reset"):
            resolved[attr] = ansi.get(attr, "")
        return resolved

    @property
    def resolved(self) -> dict[str, str]:
        """Return the role mapping, loading it on first access."""
        if self._resolved is None:
            self._resolved = self._load()
        return self._resolved

    def colorize(self, text: str, role: str, *, stream: Any = None) -> str:
        """Wrap text in the codes for a role when the stream is a TTY.

        Args:
            text: The text to colorize.
            role: Semantic role name.
            stream: Stream checked for TTY. Defaults to sys.stderr.

        Returns:
            Colorized text, or the text unchanged.
        """
        target = stream or sys.stderr
        if not hasattr(target, "isatty") or not target.isatty():
            return text
        code = self.resolved.get(role, "")
        if not code:
            return text
        return f"{code}{text}{self.resolved.get('reset', '')}"


_theme = Theme()


def colorize(text: str, role: str, *, stream: Any = None) -> str:
    """Colorize text using the module-level theme."""
    return _theme.colorize(text, role, stream=stream)
