"""Record codec for cached tag record lists.

A tag's record list is stored as JSON Lines, one record per line:

    [["https://www.example.org"], 0]

The first element holds the value tokens (exactly one in a valid record),
the second the tag index. The tag itself is the cache key and is not
repeated in the records.
"""

from __future__ import annotations

import json
from typing import BinaryIO, Iterable

from ..core.exceptions import DamagedDataError
from ..core.types import Entry


def _encode_record(entry: Entry) -> bytes:
    record = [[entry.value], entry.tag_index]
    return json.dumps(record, ensure_ascii=False).encode("utf-8") + b"\n"


def encode(entries: Iterable[Entry], sink: BinaryIO) -> None:
    """Write a tag's record list to a binary sink.

    Args:
        entries: Entries of a single tag.
        sink: Writable binary stream.
    """
    for entry in entries:
        sink.write(_encode_record(entry))


def encode_bytes(entries: Iterable[Entry]) -> bytes:
    """Encode a tag's record list into a byte string."""
    return b"".join(_encode_record(entry) for entry in entries)


def _decode_record(line: bytes, tag: str) -> Entry:
    try:
        record = json.loads(line.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DamagedDataError(tag, f"invalid record: {e}") from e

    if not isinstance(record, list) or len(record) != 2:
        raise DamagedDataError(tag, "record is not a value-position pair")

    tokens, position = record
    if not isinstance(tokens, list) or len(tokens) != 1 or not isinstance(tokens[0], str):
        raise DamagedDataError(tag, "record value is not a single token")

    # bool is an int subclass but never a valid position
    if not isinstance(position, int) or isinstance(position, bool):
        raise DamagedDataError(tag, f"invalid tag index: {position!r}")

    return Entry(value=tokens[0], tag=tag, tag_index=position)


def decode(stream: BinaryIO, tag: str) -> list[Entry]:
    """Read a tag's record list from a binary stream.

    The stream is consumed line by line. The first malformed record aborts
    decoding and nothing is returned for the tag.

    Args:
        stream: Readable binary stream.
        tag: Tag the records belong to.

    Returns:
        Decoded entries in stored order.

    Raises:
        DamagedDataError: If any record is malformed.
    """
    entries: list[Entry] = []
    for line in stream:
        if not line.strip():
            continue
        entries.append(_decode_record(line, tag))

    return entries
