"""
URL policy

Covers:
  - http(s) and relative references allowed, trimmed
  - empty, protocol-relative and non-http schemes rejected with reasons
  - UrlDecision.to_dict
"""

import pytest

from genui.kernel.url_policy import UrlDecision, sanitize_url


class TestAllowed:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://example.com/a?b=c", "HTTPS://EXAMPLE.COM", "/docs", "docs/page", "#top", "?q=1"],
    )
    def test_allowed(self, url):
        assert sanitize_url(url) == UrlDecision(ok=True, url=url)

    def test_trimmed(self):
        assert sanitize_url("  https://example.com \n").url == "https://example.com"


class TestRejected:
    @pytest.mark.parametrize("url", ["", "   ", None, 42])
    def test_empty(self, url):
        assert sanitize_url(url) == UrlDecision(ok=False, reason="empty")

    def test_protocol_relative(self):
        assert sanitize_url("//evil.example").reason == "protocol-relative"

    @pytest.mark.parametrize(
        ("url", "scheme"),
        [
            ("javascript:alert(1)", "javascript"),
            ("JavaScript:alert(1)", "javascript"),
            ("data:text/html,<b>x</b>", "data"),
            ("mailto:a@b.com", "mailto"),
            ("file:///etc/passwd", "file"),
        ],
    )
    def test_disallowed_scheme(self, url, scheme):
        decision = sanitize_url(url)
        assert not decision.ok
        assert decision.url is None
        assert decision.reason == f"disallowed-scheme:{scheme}"


class TestToDict:
    def test_ok(self):
        assert sanitize_url("/a").to_dict() == {"ok": True, "url": "/a"}

    def test_rejected(self):
        assert sanitize_url("").to_dict() == {"ok": False, "reason": "empty"}
