import logging
import re
from pathlib import PurePosixPath

from go_include.core.constraints import (
    And,
    Expr,
    Tag,
    negate,
    parse_expression,
    parse_plus_build,
    positive_tags,
    render_expression,
    render_plus_build,
)
from go_include.core.parser import node_text, top_level_nodes
from go_include.models import CompilerDirective, DirectiveKind, SourceDocument, Splice, TextSpan

logger = logging.getLogger(__name__)

TOOL_NAMES = frozenset({"include", "go-include"})

_GO_BUILD_PREFIX = "//go:build "
_GO_GENERATE_PREFIX = "//go:generate "
_PLUS_BUILD_RE = re.compile(r"^//\s*\+build\s+(?P<options>.*)$")


def negated_directives(constraint: Expr) -> str:
    """Return the constraint lines activating a file exactly when ``constraint`` does not hold."""
    negated = negate(constraint)
    return f"//go:build {render_expression(negated)}\n// +build {render_plus_build(negated)}\n\n"


def parse_constraint(text: str) -> Expr | None:
    """Parse a ``//go:build`` or ``// +build`` comment, or return ``None`` for any other comment."""
    text = text.rstrip()
    try:
        if text.startswith(_GO_BUILD_PREFIX):
            return parse_expression(text[len(_GO_BUILD_PREFIX) :])
        m = _PLUS_BUILD_RE.match(text)
        if m:
            return parse_plus_build(m.group("options"))
    except ValueError:
        logger.debug("Ignoring malformed build constraint %r", text)
    return None


def match_directive(text: str, tag: str) -> DirectiveKind | None:
    """Classify a comment as one of this tool's directives, or ``None``.

    Build constraints belong to this tool when ``tag`` occurs in them
    without being negated.
    """
    text = text.rstrip()
    constraint = parse_constraint(text)
    if constraint is not None:
        if tag not in positive_tags(constraint):
            return None
        return DirectiveKind.BUILD if text.startswith(_GO_BUILD_PREFIX) else DirectiveKind.PLUS_BUILD

    if text.startswith(_GO_GENERATE_PREFIX):
        return DirectiveKind.GENERATE if _generates_with_tool(text[len(_GO_GENERATE_PREFIX) :]) else None

    return None


def _generates_with_tool(command: str) -> bool:
    words = command.split()
    if not words:
        return False
    if words[:2] == ["go", "run"] and len(words) > 2:
        program = words[2].split("@", 1)[0]
    else:
        program = words[0]
    return PurePosixPath(program).name in TOOL_NAMES


def collect_directives(document: SourceDocument, tag: str) -> list[CompilerDirective]:
    directives = []
    for comment in top_level_nodes(document, "comment"):
        text = node_text(comment, document.source)
        kind = match_directive(text, tag)
        if kind is None:
            continue
        directives.append(
            CompilerDirective(
                kind=kind,
                text=text,
                span=TextSpan(start=comment.start_byte, end=comment.end_byte),
            )
        )
    return directives


def stub_constraint(directives: list[CompilerDirective], tag: str) -> Expr:
    """Return the constraint under which the stub file builds.

    A ``//go:build`` line takes precedence over legacy ``// +build`` lines,
    which are ANDed together. Without either the stub is assumed to require
    just ``tag``.
    """
    for directive in directives:
        if directive.kind is DirectiveKind.BUILD:
            constraint = parse_constraint(directive.text)
            assert constraint is not None
            return constraint

    plus_build = [parse_constraint(d.text) for d in directives if d.kind is DirectiveKind.PLUS_BUILD]
    constraints = [c for c in plus_build if c is not None]
    if not constraints:
        return Tag(tag)
    return constraints[0] if len(constraints) == 1 else And(tuple(constraints))


def directive_splices(document: SourceDocument, tag: str) -> list[Splice]:
    """Remove this tool's directives and insert the negated constraint pair.

    The pair goes right after the last removed directive that precedes the
    package clause, or at the very start of the file.
    """
    package_start = next(
        (node.start_byte for node in top_level_nodes(document, "package_clause")),
        len(document.source),
    )

    directives = collect_directives(document, tag)
    splices = []
    insert_at = 0
    for directive in directives:
        logger.debug("Removing %s directive %r at %d", directive.kind.value, directive.text, directive.span.start)
        splices.append(Splice(span=directive.span))
        if directive.span.end <= package_start:
            insert_at = directive.span.end

    splices.append(
        Splice(
            span=TextSpan(start=insert_at, end=insert_at),
            replacement=negated_directives(stub_constraint(directives, tag)).encode("utf-8"),
        )
    )
    return splices
