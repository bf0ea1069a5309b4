"""directives: load scopes from YAML directive documents.

A directive document describes already-parsed import directives for one
source file, language-neutrally.  This is how hosts that parse other
languages (for example C# ``using`` directives, with ``global::`` qualified
targets) hand their scopes to the ordering check::

    path: Example.cs
    usings:
      - target: System
      - alias: Col
        target: System.Collections
      - target: System.Math
        static: true
    namespaces:
      - name: Outer
        usings: [...]
        namespaces: [...]

Scopes come back file scope first, then namespaces depth-first in document
order.  Entries may carry ``line`` and ``column``; otherwise the line is the
entry's 1-based index within its list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml

from aliasgate.exceptions import DirectiveError
from aliasgate.lib import config
from aliasgate.lib.models import Directive, Location, Scope


def load_directive_document(path: Union[str, Path]) -> list[Scope]:
    """Read and parse a directive document from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        DirectiveError: If the document is malformed.
    """
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()
    return parse_directive_document(text, str(path))


def parse_directive_document(text: str, path: str) -> list[Scope]:
    """Parse directive document text into scopes.

    Args:
        text: YAML content.
        path: Document path, used for locations and as the default file name.

    Returns:
        The file scope followed by every namespace scope.

    Raises:
        DirectiveError: If the YAML is invalid or the structure is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise DirectiveError(path, f"invalid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DirectiveError(path, f"document must be a mapping, got {type(data).__name__}")

    source_path = data.get("path", path)
    if not isinstance(source_path, str):
        raise DirectiveError(path, "'path' must be a string")

    scopes: list[Scope] = [
        Scope(
            kind=config.get_str("scope_kinds.file"),
            name=source_path,
            directives=_parse_usings(data.get("usings"), source_path, path),
        )
    ]
    _collect_namespaces(data.get("namespaces"), [], source_path, path, scopes)
    return scopes


def _collect_namespaces(
    raw: Any,
    parents: list[str],
    source_path: str,
    where: str,
    out: list[Scope],
) -> None:
    """Append namespace scopes depth-first, in document order."""
    if raw is None:
        return
    if not isinstance(raw, list):
        raise DirectiveError(f"{where}:namespaces", "must be a list")

    kind = config.get_str("scope_kinds.namespace")
    for i, entry in enumerate(raw):
        here = f"{where}:namespaces[{i}]"
        if not isinstance(entry, dict):
            raise DirectiveError(here, "namespace entry must be a mapping")
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise DirectiveError(here, "namespace 'name' must be a non-empty string")

        names = parents + [name]
        out.append(Scope(
            kind=kind,
            name=".".join(names),
            directives=_parse_usings(entry.get("usings"), source_path, here),
        ))
        _collect_namespaces(entry.get("namespaces"), names, source_path, here, out)


def _parse_usings(raw: Any, source_path: str, where: str) -> tuple[Directive, ...]:
    """Convert a ``usings`` list into directives, keeping document order."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DirectiveError(f"{where}:usings", "must be a list")

    default_column = config.get_int("defaults.column")
    directives: list[Directive] = []
    for i, entry in enumerate(raw):
        here = f"{where}:usings[{i}]"
        if not isinstance(entry, dict):
            raise DirectiveError(here, "directive entry must be a mapping")

        target = entry.get("target")
        if not isinstance(target, str) or not target:
            raise DirectiveError(here, "'target' must be a non-empty string")

        alias = entry.get("alias")
        if alias is not None and (not isinstance(alias, str) or not alias):
            raise DirectiveError(here, "'alias' must be a non-empty string")

        is_static = entry.get("static", False)
        if not isinstance(is_static, bool):
            raise DirectiveError(here, "'static' must be a boolean")

        line = entry.get("line", i + 1)
        column = entry.get("column", default_column)
        if not _is_int(line) or not _is_int(column):
            raise DirectiveError(here, "'line' and 'column' must be integers")

        directives.append(Directive(
            target_name=target,
            alias_name=alias,
            is_static=is_static,
            location=Location(source_path, line, column),
        ))
    return tuple(directives)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
