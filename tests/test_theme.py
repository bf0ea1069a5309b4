"""Unit tests for aliasgate.lib.theme ANSI colourisation."""

from __future__ import annotations

import io

from aliasgate.lib.theme import Theme, colorize


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestTheme:
    """Tests for the Theme class."""

    def test_non_tty_is_plain(self) -> None:
        """Non-TTY stream gets the text unchanged."""
        assert colorize("hello", "error", stream=io.StringIO()) == "hello"

    def test_tty_is_coloured(self) -> None:
        """A TTY stream gets the role's code and a reset."""
        result = colorize("hello", "error", stream=_TTY())
        assert result.startswith("\x1b[31m")
        assert result.endswith("\x1b[0m")

    def test_unknown_role_is_plain(self) -> None:
        """Roles without a colour leave text unchanged."""
        assert colorize("hello", "no-such-role", stream=_TTY()) == "hello"

    def test_lazy_loading(self) -> None:
        """Theme data is loaded on first use, not at construction."""
        theme = Theme()
        assert theme._resolved is None
        _ = theme.resolved
        assert theme._resolved is not None
