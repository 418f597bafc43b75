"""Type definitions for tagstash."""

from dataclasses import dataclass


@dataclass
class Entry:
    """A single value-tag association.

    Attributes:
        value: Value the tag belongs to.
        tag: Tag associated with the value.
        tag_index: Position of the tag in the list the value was tagged with.
            Lower positions describe the value more strongly.
    """

    value: str
    tag: str
    tag_index: int = 0
