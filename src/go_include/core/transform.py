import logging
from pathlib import Path

from go_include.core.directives import directive_splices
from go_include.core.parser import parse_source
from go_include.core.placeholders import placeholder_splices
from go_include.core.ports.formatter import Formatter
from go_include.core.splice import apply_splices
from go_include.errors import ReadError
from go_include.models import Options

logger = logging.getLogger(__name__)

GENERATED_HEADER = b"//Code generated by include. DO NOT EDIT.\n\n"


def _default_formatter() -> Formatter:
    from go_include.formatter.goimports import GoimportsFormatter

    return GoimportsFormatter()


def transform(
    filename: str,
    source: bytes,
    options: Options | None = None,
    formatter: Formatter | None = None,
) -> bytes:
    """Rewrite Go ``source`` with every placeholder call replaced by the included content.

    ``filename`` is used for diagnostics and as the formatter's import
    resolution context. Raises an ``IncludeError`` subclass on the first
    failure; nothing is returned in that case.
    """
    options = (options or Options()).with_defaults()
    formatter = formatter or _default_formatter()

    document = parse_source(filename, source)

    splices = directive_splices(document, options.tag)
    replaced = placeholder_splices(document, options)
    splices.extend(replaced)

    out = bytearray(GENERATED_HEADER)
    apply_splices(document.source, splices, out)

    formatted = formatter.format(filename, bytes(out))
    logger.info(
        "Rewrote %s: %d placeholder(s) replaced, %d directive edit(s)",
        filename,
        len(replaced),
        len(splices) - len(replaced),
    )
    return formatted


def transform_file(path: str, options: Options | None = None, formatter: Formatter | None = None) -> bytes:
    try:
        source = Path(path).read_bytes()
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e

    return transform(path, source, options, formatter)
