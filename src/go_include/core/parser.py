import logging
from collections.abc import Iterator
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from go_include.errors import ParseError
from go_include.models import SourceDocument

logger = logging.getLogger(__name__)

_LANGUAGE = "go"


def parse_source(filename: str, source: bytes) -> SourceDocument:
    """Parse Go source into a document whose nodes carry absolute byte offsets.

    Raises ``ParseError`` pointing at the first erroneous or missing node.
    """
    parser = get_parser(cast(SupportedLanguage, _LANGUAGE))
    tree = parser.parse(source)

    root = tree.root_node
    if root.has_error:
        bad = _first_error(root) or root
        line, column = bad.start_point
        raise ParseError(filename, line + 1, column + 1)

    logger.debug("Parsed %s (%d bytes, %d top-level nodes)", filename, len(source), root.child_count)
    return SourceDocument(filename=filename, source=source, tree=tree)


def _first_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def top_level_nodes(document: SourceDocument, *types: str) -> Iterator[Node]:
    """Yield the root's direct children of the given types in source order."""
    for child in document.tree.root_node.children:
        if child.type in types:
            yield child
