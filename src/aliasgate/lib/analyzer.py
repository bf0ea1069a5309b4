"""SourceAnalyzer: single-parse extraction of import directives from Python source.

Each file is parsed exactly once into a LibCST concrete syntax tree, and a
shared MetadataWrapper resolves positions for every visitor.  The analyzer
then groups the file's import statements into scopes: the module body, and
every class or function body that holds imports of its own.

Mapping from Python imports to directive records:
    ``import a.b``             plain directive, target ``a.b``
    ``import a.b as c``        alias ``c``, target ``a.b``
    ``from a import b``        static (member) directive, target ``a.b``
    ``from a import b as c``   alias ``c``, target ``a.b``
    ``from a import *``        static directive, target ``a.*``

Imports under ``if``/``try`` blocks belong to the enclosing scope, since
Python binds them there.  Imports inside a nested ``def`` or ``class`` do
not.
"""

from __future__ import annotations

from typing import Optional, Union

import libcst as cst
from libcst.helpers import get_full_name_for_node
from libcst.metadata import MetadataWrapper, PositionProvider

from aliasgate.lib import config
from aliasgate.lib.models import Directive, Location, Scope


# ---------------------------------------------------------------------------
# CST visitor collecting directives per scope
# ---------------------------------------------------------------------------


class _ScopeBuilder:
    """Mutable accumulator for one scope while the visitor walks the tree."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        self.directives: list[Directive] = []

    def freeze(self) -> Scope:
        return Scope(kind=self.kind, name=self.name, directives=tuple(self.directives))


class _DirectiveCollector(cst.CSTVisitor):
    """Walk the CST and file each import under its innermost scope.

    Attributes:
        filepath: Path recorded in every directive location.
        builders: Scopes in the order they were opened (module first).
    """

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, filepath: str) -> None:
        self.filepath = filepath
        self._member_sep = config.get_str("directives.member_separator")
        self._wildcard = config.get_str("directives.wildcard")
        self._namespace_kind = config.get_str("scope_kinds.namespace")
        module = _ScopeBuilder(config.get_str("scope_kinds.file"), filepath)
        self.builders: list[_ScopeBuilder] = [module]
        self._stack: list[_ScopeBuilder] = [module]
        self._names: list[str] = []

    # Scope tracking
    def _open(self, name: str) -> None:
        self._names.append(name)
        builder = _ScopeBuilder(self._namespace_kind, ".".join(self._names))
        self.builders.append(builder)
        self._stack.append(builder)

    def _close(self) -> None:
        self._stack.pop()
        self._names.pop()

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        """Open a class scope."""
        self._open(node.name.value)
        return True

    def leave_ClassDef(self, original_node: cst.ClassDef) -> None:
        """Close a class scope."""
        self._close()

    def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
        """Open a function scope."""
        self._open(node.name.value)
        return True

    def leave_FunctionDef(self, original_node: cst.FunctionDef) -> None:
        """Close a function scope."""
        self._close()

    # Directives
    def _location(self, node: cst.CSTNode) -> Location:
        pos = self.get_metadata(PositionProvider, node, None)
        if pos is None:
            return Location(self.filepath, 0, 0)
        return Location(self.filepath, pos.start.line, pos.start.column)

    def _add(self, directive: Directive) -> None:
        self._stack[-1].directives.append(directive)

    def visit_Import(self, node: cst.Import) -> bool:
        """Record one directive per imported module."""
        for alias in node.names:
            self._add(Directive(
                target_name=alias.evaluated_name,
                alias_name=alias.evaluated_alias,
                location=self._location(alias),
            ))
        return False

    def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
        """Record one directive per imported member."""
        base = _from_module_name(node)
        sep = "" if not base or base.endswith(self._member_sep) else self._member_sep

        if isinstance(node.names, cst.ImportStar):
            self._add(Directive(
                target_name=f"{base}{sep}{self._wildcard}",
                is_static=True,
                location=self._location(node),
            ))
            return False

        for alias in node.names:
            asname = alias.evaluated_alias
            self._add(Directive(
                target_name=f"{base}{sep}{alias.evaluated_name}",
                alias_name=asname,
                is_static=asname is None,
                location=self._location(alias),
            ))
        return False


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def _from_module_name(node: cst.ImportFrom) -> str:
    """Return the dotted module of a ``from`` import, keeping relative dots."""
    dots = "." * len(node.relative)
    module: Optional[Union[cst.Attribute, cst.Name]] = node.module
    if module is None:
        return dots
    return dots + (get_full_name_for_node(module) or "")


# ---------------------------------------------------------------------------
# SourceAnalyzer: the entry point for the Python front end
# ---------------------------------------------------------------------------


class SourceAnalyzer:
    """Single parse and metadata resolution for a Python source file.

    Attributes:
        filepath: Path used for scope names and directive locations.
        wrapper: MetadataWrapper providing resolved metadata for visitors.
    """

    def __init__(self, source: str, filepath: str) -> None:
        """Parse source and prepare metadata resolution.

        Raises:
            libcst.ParserSyntaxError: If the source is not valid Python.
        """
        self.filepath = filepath
        self.wrapper = MetadataWrapper(cst.parse_module(source))
        self._scopes: Optional[list[Scope]] = None

    def scopes(self) -> list[Scope]:
        """Return the file scope followed by every nested scope with imports.

        Nested scopes come in source order of their ``def``/``class``
        header and are named by their dotted path (``Outer.method``).
        """
        if self._scopes is None:
            collector = _DirectiveCollector(self.filepath)
            self.wrapper.visit(collector)
            file_scope, *nested = collector.builders
            self._scopes = [file_scope.freeze()] + [
                b.freeze() for b in nested if b.directives
            ]
        return self._scopes

    def directive_count(self) -> int:
        """Return the total number of directives across all scopes."""
        return sum(len(s) for s in self.scopes())
