from __future__ import annotations

from urllib.parse import quote, urlencode, urlsplit, urlunsplit


def build_redirect_url(
    base_url: str,
    language: str,
    trip_type: str,
    user: str,
    secret: str,
    agency: str,
) -> str:
    """
    Build the microsite landing URL: ``{base}/{language}/home?tripType=...``.

    Inputs must already be normalized by the caller; values are only
    URL-encoded here, not validated.
    """
    scheme, netloc, path, query, fragment = urlsplit(base_url)
    path = f"{path.rstrip('/')}/{quote(language, safe='')}/home"

    params = urlencode(
        [
            ("tripType", trip_type),
            ("submit", "true"),
            ("user", user),
            ("password", secret),
            ("agency", agency),
        ]
    )
    query = f"{query}&{params}" if query else params
    return urlunsplit((scheme, netloc, path, query, fragment))
