"""
Domain-label cleanup for source names.

``normalize_domain()`` turns whatever the analytics API reports as a source
(full URL, bare host, host with path) into a lower-case host label without
a ``www.`` prefix, e.g.::

    "https://WWW.Example.com/blog/post"  -> "example.com"
    "www.reddit.com/r/python"            -> "reddit.com"
    None / "   "                         -> ""
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^https?://")
_WWW_RE = re.compile(r"^www\.")


def normalize_domain(value: Optional[str]) -> str:
    """Return the lower-case host label for a source URL or domain string."""
    if not value:
        return ""
    raw = value.strip().lower()
    if not raw:
        return ""

    if raw.startswith(("http://", "https://")):
        try:
            host = urlsplit(raw).hostname
        except ValueError:
            host = None
        if host:
            return _WWW_RE.sub("", host)
        return _WWW_RE.sub("", _SCHEME_RE.sub("", raw)).split("/")[0]

    return _WWW_RE.sub("", raw).split("/")[0]
