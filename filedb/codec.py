"""
Line-oriented record format.

Disk format (one line per key, no trailing newline):
    key:escaped_value\nkey:escaped_value

Only two bytes are escaped inside values:
    newline   -> backslash + 'n'
    backslash -> backslash + backslash

Everything else, including ':' and bytes outside printable ASCII, is
written as-is. Keys must be identifiers (see filedb.ident); values are
bytes, so decode(encode(data)) == data for any valid record.
"""

from collections.abc import Mapping
from typing import Dict, Union

from filedb.ident import is_valid

Value = Union[bytes, bytearray]

NEWLINE = b"\n"
BACKSLASH = b"\\"
SEPARATOR = b":"


class EncodeError(ValueError):
    pass


class DecodeError(ValueError):
    pass


def encode_value(value: Value) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise EncodeError(f"Values must be bytes, got {type(value).__name__}")
    return bytes(value).replace(BACKSLASH, BACKSLASH + BACKSLASH).replace(
        NEWLINE, BACKSLASH + b"n"
    )


def decode_value(raw: bytes) -> bytes:
    """Reverse encode_value. Raises DecodeError on an unknown or dangling escape."""
    out = bytearray()
    i = 0
    n = len(raw)
    while i < n:
        c = raw[i]
        if c == 0x5C:  # backslash
            i += 1
            if i >= n:
                raise DecodeError("Dangling escape at end of value")
            nxt = raw[i]
            if nxt == 0x6E:  # 'n'
                out += NEWLINE
            elif nxt == 0x5C:
                out += BACKSLASH
            else:
                raise DecodeError(f"Invalid escape sequence: \\{chr(nxt)}")
        else:
            out.append(c)
        i += 1
    return bytes(out)


def encode(data: Mapping[str, Value]) -> bytes:
    """
    Encode a key -> value mapping, preserving its iteration order.

    Raises EncodeError if data is not a mapping, a key is not a valid
    identifier, or a value is not bytes. Nothing is returned
    in that case, so callers never see a partial encoding.
    """
    if not isinstance(data, Mapping):
        raise EncodeError(f"Record data must be a mapping, got {type(data).__name__}")

    lines = []
    for key, value in data.items():
        if not is_valid(key):
            raise EncodeError(f"Invalid key: {key!r}")
        lines.append(key.encode("ascii") + SEPARATOR + encode_value(value))
    return NEWLINE.join(lines)


def decode(raw: bytes) -> Dict[str, bytes]:
    """
    Parse encoded record bytes back into a dict of str -> bytes.

    Empty lines are skipped. Any malformed line (missing or leading ':',
    invalid or duplicate key, bad escape) rejects the whole record.
    """
    result: Dict[str, bytes] = {}
    for lineno, line in enumerate(raw.split(NEWLINE), start=1):
        if not line:
            continue

        pos = line.find(SEPARATOR)
        # -1 (missing) and 0 (empty key) are both invalid.
        if pos < 1:
            raise DecodeError(f"Line {lineno}: missing key separator")

        key = line[:pos].decode("ascii", "replace")
        if not is_valid(key):
            raise DecodeError(f"Line {lineno}: invalid key {key!r}")
        if key in result:
            raise DecodeError(f"Line {lineno}: duplicate key {key!r}")

        try:
            value = decode_value(line[pos + 1:])
        except DecodeError as exc:
            raise DecodeError(f"Line {lineno}: {exc}") from exc
        result[key] = value
    return result
