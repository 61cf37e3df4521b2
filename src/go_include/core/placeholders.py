import logging
from collections.abc import Callable, Iterator

from tree_sitter import Node

from go_include.core.encoders import encode_bytes, encode_string
from go_include.core.parser import node_text, top_level_nodes
from go_include.core.resolve import read_include_file
from go_include.errors import UnsupportedArgumentError, UnsupportedFunctionError
from go_include.models import Options, PlaceholderCall, SourceDocument, Splice, TextSpan

logger = logging.getLogger(__name__)

ENCODERS: dict[str, Callable[[bytes], str]] = {
    "String": encode_string,
    "Bytes": encode_bytes,
}

_DECLARATION_TYPES = ("var_declaration", "const_declaration")
_SPEC_TYPES = ("var_spec", "const_spec")


def _value_specs(declaration: Node) -> Iterator[Node]:
    for child in declaration.named_children:
        if child.type in _SPEC_TYPES:
            yield child
        elif child.type.endswith("_spec_list"):
            yield from _value_specs(child)


def _initializers(spec: Node) -> list[Node]:
    value = spec.child_by_field_name("value")
    if value is None:
        return []
    if value.type == "expression_list":
        return [n for n in value.named_children if n.type != "comment"]
    return [value]


def _placeholder_from_call(call: Node, document: SourceDocument, namespace: str) -> PlaceholderCall | None:
    function = call.child_by_field_name("function")
    if function is None or function.type != "selector_expression":
        return None
    operand = function.child_by_field_name("operand")
    field = function.child_by_field_name("field")
    if operand is None or field is None or operand.type != "identifier":
        return None
    if node_text(operand, document.source) != namespace:
        return None

    arguments = call.child_by_field_name("arguments")
    args = [] if arguments is None else [n for n in arguments.named_children if n.type != "comment"]
    if len(args) != 1:
        return None

    selector = node_text(field, document.source)
    literal = node_text(args[0], document.source)
    if args[0].type != "interpreted_string_literal" or len(literal) < 2:
        raise UnsupportedArgumentError(selector, document.filename)
    if selector not in ENCODERS:
        raise UnsupportedFunctionError(selector, document.filename)

    return PlaceholderCall(
        selector=selector,
        filename=literal[1:-1],
        span=TextSpan(start=call.start_byte, end=call.end_byte),
    )


def find_placeholders(document: SourceDocument, options: Options) -> list[PlaceholderCall]:
    """Return the placeholder calls initializing top-level values, in source order.

    Only calls that are themselves an initializer are considered; calls nested
    in other expressions are left alone.
    """
    calls = []
    for declaration in top_level_nodes(document, *_DECLARATION_TYPES):
        for spec in _value_specs(declaration):
            for value in _initializers(spec):
                if value.type != "call_expression":
                    continue
                placeholder = _placeholder_from_call(value, document, options.namespace)
                if placeholder is not None:
                    calls.append(placeholder)
    return calls


def placeholder_splices(document: SourceDocument, options: Options) -> list[Splice]:
    splices = []
    for call in find_placeholders(document, options):
        content = read_include_file(call.filename, options.working_dir)
        replacement = ENCODERS[call.selector](content)
        logger.debug(
            "Replacing %s.%s(%r) at [%d, %d) with %d bytes",
            options.namespace,
            call.selector,
            call.filename,
            call.span.start,
            call.span.end,
            len(content),
        )
        splices.append(Splice(span=call.span, replacement=replacement.encode("utf-8")))
    return splices
