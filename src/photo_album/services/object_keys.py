"""Validation of client-supplied object keys."""

import re

from photo_album.domain.errors import ValidationError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def validate_object_key(raw: object) -> str:
    """Return the trimmed key, or raise when it is missing or unsafe.

    The key ends up in a URL path and in the string-to-sign, so traversal
    segments, backslashes and control characters are refused outright.
    Control characters are checked before trimming so a trailing newline
    cannot be stripped away silently. A "." segment is refused because URL
    normalization would drop it from the request path but not from the
    signed resource.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Missing parameter objectName")
    if ".." in raw or "\\" in raw or _CONTROL_CHARS.search(raw):
        raise ValidationError("Invalid objectName format")
    key = raw.strip()
    if "." in key.split("/"):
        raise ValidationError("Invalid objectName format")
    return key
