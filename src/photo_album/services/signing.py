"""Object store request signing (OSS header signature, version 1).

The provider verifies HMAC-SHA1 over a newline-joined string-to-sign. SHA-1 is
mandated by that protocol version; any other digest is rejected upstream.
"""

import base64
import hashlib
import hmac
from datetime import UTC, datetime
from email.utils import format_datetime

AUTH_SCHEME = "OSS"


def string_to_sign(
    verb: str,
    content_md5: str,
    content_type: str,
    date: str,
    canonicalized_resource: str,
) -> str:
    """Build the canonical string the signature is computed over."""
    return "\n".join([verb, content_md5, content_type, date, canonicalized_resource])


def sign_request(  # noqa: PLR0913
    secret: bytes | str,
    verb: str,
    content_md5: str,
    content_type: str,
    date: str,
    canonicalized_resource: str,
) -> str:
    """Return the base64 HMAC-SHA1 signature for a single request."""
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    message = string_to_sign(
        verb, content_md5, content_type, date, canonicalized_resource
    ).encode("utf-8")
    digest = hmac.new(key, message, hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def canonicalized_resource(bucket: str, object_key: str) -> str:
    """Return the provider's canonical form of an object path."""
    return f"/{bucket}/{object_key}"


def authorization_header(access_key_id: str, signature: str) -> str:
    """Return the ``Authorization`` header value."""
    return f"{AUTH_SCHEME} {access_key_id}:{signature}"


def http_date(moment: datetime | None = None) -> str:
    """Format a timestamp as an RFC 1123 HTTP date in GMT."""
    resolved = moment or datetime.now(tz=UTC)
    return format_datetime(resolved.astimezone(UTC), usegmt=True)
