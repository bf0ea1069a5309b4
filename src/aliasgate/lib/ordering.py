"""ordering: alias-directive placement check for a single scope.

The check is a pure function of one scope's directives.  The host calls it
once for the file scope and once for every nested scope; nothing carries
over between calls, so independent scopes may be checked concurrently.

Precondition: directives are in true source order.  They are never
re-sorted here, since that would change which directives get flagged.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from aliasgate.lib.models import DiagnosticDescriptor, Directive, Scope, Violation

QUALIFIER_SEPARATOR = "::"


def name_without_alias(name: str) -> str:
    """Strip a leading ``alias::`` qualifier from a directive target.

    Only the first ``::`` counts: ``"global::A::B"`` becomes ``"A::B"``.
    """
    head, sep, tail = name.partition(QUALIFIER_SEPARATOR)
    return tail if sep else head


def check(scope: Union[Scope, Sequence[Directive]]) -> list[Violation]:
    """Report alias directives placed before a plain directive.

    A directive that has an alias and is followed by a directive with no
    alias that is not static gets reported.  Every other directive (no
    alias, or the last one in the scope) becomes the anchor, and all
    reports in the scope name the last anchor seen.

    Args:
        scope: The scope, or any sequence of its directives.

    Returns:
        Violations in source order.  Empty if there are none.
    """
    directives = scope.directives if isinstance(scope, Scope) else scope
    count = len(directives)

    anchor: Optional[Directive] = None
    flagged: list[Directive] = []

    for i, directive in enumerate(directives):
        if directive.has_alias and i + 1 < count:
            following = directives[i + 1]
            if not following.has_alias and not following.is_static:
                flagged.append(directive)
        else:
            anchor = directive

    if not flagged or anchor is None:
        return []

    predecessor = name_without_alias(anchor.target_name)
    return [
        Violation(
            alias_name=d.alias_name or "",
            required_predecessor_name=predecessor,
            location=d.location,
        )
        for d in flagged
    ]


def format_message(descriptor: DiagnosticDescriptor, violation: Violation) -> str:
    """Render a violation with the descriptor's positional message format."""
    return descriptor.message_format.format(
        violation.alias_name, violation.required_predecessor_name
    )
