"""Custom exceptions for tagstash."""


class TagStashError(Exception):
    """Base exception for all tagstash errors."""

    pass


class DamagedDataError(TagStashError):
    """Cached tag records could not be decoded."""

    def __init__(self, tag: str, reason: str):
        """Initialize exception with the affected tag.

        Args:
            tag: Tag whose cached record list is damaged.
            reason: Short description of the malformed record.
        """
        self.tag = tag
        self.reason = reason
        super().__init__(f"Damaged cache data for tag {tag!r}: {reason}")


class FailedToCacheError(TagStashError):
    """The blob cache refused to store a tag's record list."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Failed to cache entries for tag {tag!r}")


class NotSupportedError(TagStashError):
    """Operation is not supported by the configured stores."""

    pass


class AdmissionRefusedError(TagStashError):
    """Blob cache item does not fit in the configured capacity."""

    pass


class DatabaseError(TagStashError):
    """Database operation failed."""

    pass
