from __future__ import annotations

from typing import Any

import pytest

from aury.fetcher import Fetcher, HttpResponse


class RecordingLogger:
    """记录 error / debug 调用的日志器。"""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, tuple[Any, ...]]] = []

    def error(self, message: str, *args: Any) -> None:
        self.records.append(("error", message, args))

    def debug(self, message: str, *args: Any) -> None:
        self.records.append(("debug", message, args))

    def levels(self) -> list[str]:
        return [level for level, _, _ in self.records]


class FakeTransport:
    """返回预设响应并记录请求的传输层。"""

    def __init__(self, response: HttpResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or HttpResponse(status_code=200, reason="OK", url="", text="")
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def send(self, method, url, *, headers, body=None, **options):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "body": body, "options": options}
        )
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


def make_response(status_code: int = 200, reason: str = "OK", text: str = "") -> HttpResponse:
    return HttpResponse(
        status_code=status_code,
        reason=reason,
        url="https://example.test/",
        text=text,
        content=text.encode(),
    )


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def fetcher(transport: FakeTransport, recording_logger: RecordingLogger) -> Fetcher:
    return Fetcher(logger=recording_logger, transport=transport)
