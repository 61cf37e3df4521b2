from collections.abc import Iterable

from go_include.models import Splice


def order_splices(splices: Iterable[Splice]) -> list[Splice]:
    """Sort splices by span; a pure insertion comes before a removal starting at the same offset."""
    return sorted(splices, key=lambda s: (s.span.start, s.span.end))


def apply_splices(source: bytes, splices: Iterable[Splice], out: bytearray | None = None) -> bytearray:
    """Copy ``source`` into ``out`` with every splice applied.

    A single cursor walks the source forward: the bytes before each span are
    copied, the replacement is written and the span itself is skipped.
    """
    if out is None:
        out = bytearray()

    cursor = 0
    for splice in order_splices(splices):
        if splice.span.start < cursor:
            raise ValueError(f"splice [{splice.span.start}, {splice.span.end}) overlaps preceding edit ending at {cursor}")
        if splice.span.end > len(source):
            raise ValueError(f"splice [{splice.span.start}, {splice.span.end}) exceeds source of {len(source)} bytes")
        out += source[cursor : splice.span.start]
        out += splice.replacement
        cursor = splice.span.end

    out += source[cursor:]
    return out
