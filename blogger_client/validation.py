"""Request parameter helpers."""

import re
from typing import Any, Iterable, Mapping
from urllib.parse import urlparse

from blogger_client.exceptions import MissingParameterError

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def humanize_param_name(name: str) -> str:
    """Space out camelCase boundaries: ``postId`` -> ``post Id``."""
    return _CAMEL_BOUNDARY.sub(r" \1", name)


def require_params(names: Iterable[str], params: Mapping[str, Any]) -> None:
    """Raise MissingParameterError for the first absent or falsy name."""
    for name in names:
        if not params.get(name):
            raise MissingParameterError(
                name, f"{humanize_param_name(name)} is required"
            )


def extract_domain(url: str) -> str:
    """Return the lowercased hostname of ``url`` without a leading ``www.``.

    Scheme-less input such as ``example.com/blog`` is treated as a host.
    Unparseable URLs yield an empty string.
    """
    if "://" not in url:
        url = f"//{url}"
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return re.sub(r"^www\.", "", hostname)
