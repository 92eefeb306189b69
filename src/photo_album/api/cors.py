"""CORS headers for the browser-facing endpoint."""

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOW_METHODS = "POST, OPTIONS"


def cors_headers(
    origin: str | None, allowed_origins: tuple[str, ...]
) -> dict[str, str]:
    """Return CORS headers for a request origin.

    An empty allow-list permits any origin and is meant for local development.
    Unlisted origins receive the first configured origin, which browsers reject.
    """
    if not allowed_origins:
        allow_origin = "*"
    elif origin and origin in allowed_origins:
        allow_origin = origin
    else:
        allow_origin = allowed_origins[0]
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
    }
