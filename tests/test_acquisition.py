"""Tests for page acquisition and the prerender fallback."""

import httpx
import pytest
from seo_snapshot.acquisition import PageAcquirer, to_prerender_url
from seo_snapshot.config import FetchConfig
from seo_snapshot.constants import DEFAULT_USER_AGENT
from seo_snapshot.detector import PageVerdict
from seo_snapshot.exceptions import AcquisitionError, BlockedError
from seo_snapshot.fetcher import HttpFetcher

PAGE_URL = "https://a.com/x"
PRERENDER_URL = "https://r.jina.ai/http://a.com/x"
RENDERED = "<html><body><h1>Rendered</h1></body></html>"


class TestPrerenderUrl:
    """Test cases for to_prerender_url."""

    @pytest.mark.parametrize("url,expected", [
        ("https://a.com/x", "https://r.jina.ai/http://a.com/x"),
        ("http://a.com/x?q=1", "https://r.jina.ai/http://a.com/x?q=1"),
        ("HTTPS://a.com/", "https://r.jina.ai/http://a.com/"),
        ("a.com/x", "https://r.jina.ai/http://a.com/x"),
    ])
    def test_scheme_is_replaced(self, url, expected):
        assert to_prerender_url(url) == expected

    def test_custom_proxy(self):
        assert to_prerender_url("https://a.com", "https://render.local/") == \
            "https://render.local/http://a.com"


class TestPageAcquirer:
    """Test cases for PageAcquirer.acquire."""

    async def _acquire(self, transport, url=PAGE_URL, force=False, **kwargs):
        async with HttpFetcher(FetchConfig(), transport=transport.transport) as fetcher:
            acquirer = PageAcquirer(fetcher, **kwargs)
            return await acquirer.acquire(url, force_prerender=force)

    @pytest.mark.asyncio
    async def test_normal_page_is_not_prerendered(self, scripted, padded_page):
        html = padded_page(6000)
        transport = scripted({PAGE_URL: (200, html)})

        page = await self._acquire(transport)

        assert page.html == html
        assert page.final_status == 200
        assert page.prerendered is False
        assert transport.urls == [PAGE_URL]

    @pytest.mark.asyncio
    async def test_shell_page_triggers_fallback(self, scripted, padded_page):
        transport = scripted({
            PAGE_URL: (200, padded_page(4000)),
            PRERENDER_URL: (200, RENDERED),
        })

        page = await self._acquire(transport)

        assert page.prerendered is True
        assert page.html == RENDERED
        assert len(transport.requests) == 2
        assert transport.requests[1].url.host == "r.jina.ai"

    @pytest.mark.asyncio
    async def test_forced_prerender_replaces_long_page(self, scripted, padded_page):
        transport = scripted({
            PAGE_URL: (200, padded_page(20000)),
            PRERENDER_URL: (200, RENDERED),
        })

        page = await self._acquire(transport, force=True)

        assert page.prerendered is True
        assert page.html == RENDERED

    @pytest.mark.asyncio
    async def test_failed_fallback_still_replaces_body(self, scripted, padded_page):
        """prerendered reflects intent, not success of the proxy."""
        transport = scripted({
            PAGE_URL: (200, padded_page(3000)),
            PRERENDER_URL: (502, "bad gateway"),
        })

        page = await self._acquire(transport)

        assert page.prerendered is True
        assert page.html == "bad gateway"
        assert page.final_status == 502

    @pytest.mark.asyncio
    async def test_fallback_headers_replace_primary_headers(self, scripted, padded_page):
        transport = scripted({
            PAGE_URL: (200, padded_page(3000), {"X-Robots-Tag": "noindex"}),
            PRERENDER_URL: (200, RENDERED, {"X-Robots-Tag": "nofollow"}),
        })

        page = await self._acquire(transport)

        assert page.headers["x-robots-tag"] == "nofollow"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [403, 404, 500])
    async def test_error_status_is_blocked_without_fallback(self, scripted, status):
        transport = scripted({PAGE_URL: (status, "<html></html>")})

        with pytest.raises(BlockedError) as exc_info:
            await self._acquire(transport, force=True)

        assert exc_info.value.status_code == status
        assert transport.urls == [PAGE_URL]

    @pytest.mark.asyncio
    async def test_bot_check_is_blocked(self, scripted):
        transport = scripted({PAGE_URL: (200, "<title>Just a moment...</title>")})

        with pytest.raises(BlockedError) as exc_info:
            await self._acquire(transport)

        assert exc_info.value.reason == "bot-check"
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error_raises_acquisition_error(self, scripted):
        transport = scripted({PAGE_URL: httpx.ConnectError("connection refused")})

        with pytest.raises(AcquisitionError) as exc_info:
            await self._acquire(transport)

        assert "connection refused" in exc_info.value.detail
        assert len(transport.requests) == 1  # No retry

    @pytest.mark.asyncio
    async def test_primary_timeout_is_blocked(self, scripted):
        transport = scripted({PAGE_URL: httpx.ReadTimeout("timed out")})

        with pytest.raises(BlockedError) as exc_info:
            await self._acquire(transport)

        assert exc_info.value.reason == "timeout"

    @pytest.mark.asyncio
    async def test_fallback_transport_error_raises(self, scripted, padded_page):
        transport = scripted({
            PAGE_URL: (200, padded_page(3000)),
            PRERENDER_URL: httpx.ConnectError("proxy down"),
        })

        with pytest.raises(AcquisitionError):
            await self._acquire(transport)

    @pytest.mark.asyncio
    async def test_browser_headers_are_sent(self, scripted, padded_page):
        transport = scripted({
            PAGE_URL: (200, padded_page(3000)),
            PRERENDER_URL: (200, RENDERED),
        })

        await self._acquire(transport)

        for request in transport.requests:
            assert request.headers["user-agent"] == DEFAULT_USER_AGENT
            assert request.headers["accept-language"] == "en-US,en;q=0.9"
            assert request.headers["accept"].startswith("text/html")

    @pytest.mark.asyncio
    async def test_custom_classifier(self, scripted, padded_page):
        transport = scripted({
            PAGE_URL: (200, padded_page(20000, with_script=False)),
            PRERENDER_URL: (200, RENDERED),
        })

        page = await self._acquire(transport, classifier=lambda result: PageVerdict.SHELL)

        assert page.prerendered is True
        assert page.html == RENDERED

    @pytest.mark.asyncio
    async def test_redirects_are_followed(self, scripted, padded_page):
        html = padded_page(6000)
        transport = scripted({
            PAGE_URL: (301, "", {"location": "https://a.com/moved"}),
            "https://a.com/moved": (200, html),
        })

        async with HttpFetcher(FetchConfig(), transport=transport.transport) as fetcher:
            result = await fetcher.fetch(PAGE_URL)
            page = await PageAcquirer(fetcher).acquire(PAGE_URL)

        assert result.status_code == 200
        assert result.url == "https://a.com/moved"
        assert page.html == html
        assert page.prerendered is False
