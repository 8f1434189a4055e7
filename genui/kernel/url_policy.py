"""
genui Kernel — URL policy for navigation actions.

Only http(s) absolute URLs and relative references are allowed through.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")

ALLOWED_SCHEMES: frozenset[str] = frozenset({"http", "https"})


@dataclass(frozen=True)
class UrlDecision:
    ok: bool
    url: str | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "url": self.url}
        return {"ok": False, "reason": self.reason}


def sanitize_url(raw: str) -> UrlDecision:
    """
    Decide whether a URL may be navigated to.

    Rejections carry a reason: "empty", "protocol-relative", or
    "disallowed-scheme:<scheme>" (scheme lowercased).
    """
    url = raw.strip() if isinstance(raw, str) else ""
    if not url:
        return UrlDecision(ok=False, reason="empty")
    if url.startswith("//"):
        return UrlDecision(ok=False, reason="protocol-relative")

    match = _SCHEME_RE.match(url)
    if match:
        scheme = match.group(1).lower()
        if scheme in ALLOWED_SCHEMES:
            return UrlDecision(ok=True, url=url)
        return UrlDecision(ok=False, reason=f"disallowed-scheme:{scheme}")

    return UrlDecision(ok=True, url=url)
