"""Session cookie transport: one place for the auth cookie attribute policy.

Signup/signin set the cookie and signout clears it through the same option
merge, so the attributes cannot drift between the two paths.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from starlette.responses import Response

from acquisitions.core.config import get_settings

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

# One day, in milliseconds.
DEFAULT_MAX_AGE_MS = 24 * 60 * 60 * 1000


def cookie_options(
    overrides: Mapping[str, Any] | None = None,
    settings: "Settings | None" = None,
) -> dict[str, Any]:
    """Default cookie attributes merged with per-key overrides."""
    settings = settings or get_settings()
    options: dict[str, Any] = {
        "httpOnly": True,
        "secure": settings.is_production,
        "sameSite": "lax",
        "maxAge": DEFAULT_MAX_AGE_MS,
    }
    if overrides:
        options.update(overrides)
    return options


def build_cookie_header(name: str, value: str, options: Mapping[str, Any]) -> str:
    """
    Assemble a Set-Cookie header value.

    True flags are emitted as bare attribute names, False flags are omitted,
    anything else is emitted as key=value.
    """
    parts = [f"{name}={value}"]
    for key, val in options.items():
        if val is True:
            parts.append(key)
        elif val is not False:
            parts.append(f"{key}={val}")
    return "; ".join(parts)


def set_cookie(
    response: Response,
    name: str,
    value: str,
    options: Mapping[str, Any] | None = None,
    settings: "Settings | None" = None,
) -> str:
    """Append a Set-Cookie header to the response and return the header value."""
    header = build_cookie_header(name, value, cookie_options(options, settings))
    response.headers.append("set-cookie", header)
    return header


def clear_cookie(
    response: Response,
    name: str,
    options: Mapping[str, Any] | None = None,
    settings: "Settings | None" = None,
) -> str:
    """Expire the cookie: empty value and maxAge=0 whatever the caller passed."""
    merged = dict(options or {})
    merged["maxAge"] = 0
    header = build_cookie_header(name, "", cookie_options(merged, settings))
    response.headers.append("set-cookie", header)
    return header


def get_cookie(request: Any, name: str) -> str | None:
    """Read a cookie from the request's parsed cookie map; None if map or entry is absent."""
    cookies = getattr(request, "cookies", None)
    if not cookies:
        return None
    return cookies.get(name)
