"""Tests for the Pwned Passwords range checker, using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from passwarden.analyzers.breach import BreachChecker, PwnedPasswordsChecker, suffix_in_range
from passwarden.core.exceptions import BreachLookupError, InvalidArgumentError
from shared.config import BreachConfig

# SHA-1("password") = 5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8
PASSWORD_PREFIX = "5BAA6"
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"


def _config(**overrides) -> BreachConfig:
    settings = {"api_url": "https://breach.test", "max_retries": 0, "backoff_base": 0.0}
    settings.update(overrides)
    return BreachConfig(**settings)


class Recorder:
    """Mock transport handler returning queued responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class TestSuffixInRange:
    def test_case_insensitive(self):
        assert suffix_in_range(f"{PASSWORD_SUFFIX.lower()}:12\r\n", PASSWORD_SUFFIX)

    def test_padding_line_is_not_a_match(self):
        assert not suffix_in_range(f"{PASSWORD_SUFFIX}:0\r\n", PASSWORD_SUFFIX)

    def test_absent(self):
        assert not suffix_in_range("0018A45C4D1DEF81644B54AB7F969B88D65:3\r\n", PASSWORD_SUFFIX)


class TestPwnedPasswordsChecker:
    def test_satisfies_protocol(self):
        assert isinstance(PwnedPasswordsChecker(_config()), BreachChecker)

    @pytest.mark.asyncio
    async def test_only_prefix_is_sent(self):
        handler = Recorder(httpx.Response(200, text=f"{PASSWORD_SUFFIX}:3861493\r\n"))
        async with PwnedPasswordsChecker(_config(), transport=httpx.MockTransport(handler)) as checker:
            assert await checker.is_compromised("password") is True

        request = handler.requests[0]
        assert request.url.path == f"/range/{PASSWORD_PREFIX}"
        assert PASSWORD_SUFFIX not in str(request.url)

    @pytest.mark.asyncio
    async def test_padding_header(self):
        handler = Recorder(httpx.Response(200, text=""))
        async with PwnedPasswordsChecker(_config(), transport=httpx.MockTransport(handler)) as checker:
            await checker.is_compromised("password")
        assert handler.requests[0].headers["Add-Padding"] == "true"

    @pytest.mark.asyncio
    async def test_padding_header_disabled(self):
        handler = Recorder(httpx.Response(200, text=""))
        config = _config(add_padding=False)
        async with PwnedPasswordsChecker(config, transport=httpx.MockTransport(handler)) as checker:
            await checker.is_compromised("password")
        assert "Add-Padding" not in handler.requests[0].headers

    @pytest.mark.asyncio
    async def test_not_compromised(self):
        handler = Recorder(httpx.Response(200, text="0018A45C4D1DEF81644B54AB7F969B88D65:1\r\n"))
        async with PwnedPasswordsChecker(_config(), transport=httpx.MockTransport(handler)) as checker:
            assert await checker.is_compromised("password") is False

    @pytest.mark.asyncio
    async def test_repeat_lookup_is_cached(self):
        handler = Recorder(httpx.Response(200, text=f"{PASSWORD_SUFFIX}:1\r\n"))
        async with PwnedPasswordsChecker(_config(), transport=httpx.MockTransport(handler)) as checker:
            await checker.is_compromised("password")
            await checker.is_compromised("password")
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_lookup_failure(self):
        handler = Recorder(httpx.Response(503))
        async with PwnedPasswordsChecker(_config(), transport=httpx.MockTransport(handler)) as checker:
            with pytest.raises(BreachLookupError):
                await checker.is_compromised("password")

    @pytest.mark.asyncio
    async def test_client_error_is_lookup_failure(self):
        handler = Recorder(httpx.Response(404))
        async with PwnedPasswordsChecker(_config(), transport=httpx.MockTransport(handler)) as checker:
            with pytest.raises(BreachLookupError):
                await checker.is_compromised("password")

    @pytest.mark.asyncio
    async def test_transient_error_is_retried(self):
        handler = Recorder(
            httpx.Response(503),
            httpx.Response(200, text=f"{PASSWORD_SUFFIX}:5\r\n"),
        )
        config = _config(max_retries=2)
        async with PwnedPasswordsChecker(config, transport=httpx.MockTransport(handler)) as checker:
            assert await checker.is_compromised("password") is True
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_empty_password(self):
        async with PwnedPasswordsChecker(_config()) as checker:
            with pytest.raises(InvalidArgumentError):
                await checker.is_compromised("")
