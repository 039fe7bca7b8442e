from __future__ import annotations

from aury.fetcher import DEFAULT_HEADERS, Fetcher, FetcherSettings
from aury.fetcher.transport import AiohttpTransport

from .conftest import RecordingLogger


class TestFetcherSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FETCHER_HEADERS", raising=False)
        monkeypatch.delenv("FETCHER_TIMEOUT", raising=False)
        settings = FetcherSettings()
        assert settings.headers == DEFAULT_HEADERS
        assert settings.logger_name == "fetch"
        assert settings.timeout is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FETCHER_HEADERS", '{"accept": "text/plain"}')
        monkeypatch.setenv("FETCHER_TIMEOUT", "2.5")
        monkeypatch.setenv("FETCHER_LOGGER_NAME", "api")
        settings = FetcherSettings()
        assert settings.headers == {"accept": "text/plain"}
        assert settings.timeout == 2.5
        assert settings.logger_name == "api"


class TestFromSettings:
    def test_builds_fetcher(self):
        settings = FetcherSettings(headers={"accept": "text/plain"}, timeout=3)
        fetcher = Fetcher.from_settings(settings)
        assert dict(fetcher.headers) == {"accept": "text/plain"}
        assert isinstance(fetcher._transport, AiohttpTransport)
        assert fetcher._transport._timeout.total == 3

    def test_explicit_logger_wins(self):
        logger = RecordingLogger()
        fetcher = Fetcher.from_settings(FetcherSettings(), logger=logger)
        assert fetcher.logger is logger
