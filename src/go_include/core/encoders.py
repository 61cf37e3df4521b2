"""Encoders turning raw file content into Go literal expressions."""

BYTES_OPEN = "[]byte{\n"
BYTES_CLOSE = "\n}"
BYTES_LINE_WIDTH = 20

_RAW_DELIMITER = "`"

_SIMPLE_ESCAPES = {
    0x07: "\\a",
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0B: "\\v",
    0x0C: "\\f",
    0x0D: "\\r",
    0x22: '\\"',
    0x5C: "\\\\",
}


def encode_string(content: bytes) -> str:
    """Encode ``content`` as a Go string literal that evaluates to exactly these bytes.

    A raw literal is used whenever Go would read it back unchanged. Raw
    literals cannot contain a backtick, and the Go scanner drops carriage
    returns and rejects NUL, byte-order marks and invalid UTF-8, so such
    content falls back to an interpreted literal.
    """
    if _raw_safe(content):
        return _RAW_DELIMITER + content.decode("utf-8") + _RAW_DELIMITER
    return _interpreted_literal(content)


def _raw_safe(content: bytes) -> bool:
    if b"`" in content or b"\r" in content or b"\x00" in content:
        return False
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return "\ufeff" not in text


def _interpreted_literal(content: bytes) -> str:
    parts = ['"']
    for b in content:
        if b in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[b])
        elif 0x20 <= b < 0x7F:
            parts.append(chr(b))
        else:
            parts.append(f"\\x{b:02x}")
    parts.append('"')
    return "".join(parts)


def encode_bytes(content: bytes) -> str:
    """Encode ``content`` as a ``[]byte{...}`` composite literal of decimal values.

    A line break follows the separator of every byte whose absolute index is a
    positive multiple of 20.
    """
    parts = [BYTES_OPEN]
    for i, b in enumerate(content):
        parts.append(f"{b},")
        if i > 0 and i % BYTES_LINE_WIDTH == 0:
            parts.append("\n")
    parts.append(BYTES_CLOSE)
    return "".join(parts)
