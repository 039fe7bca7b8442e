"""HTTP 相关异常。

传输层异常（aiohttp.ClientError、asyncio.TimeoutError）不在此处定义，
它们原样抛给调用方。
"""

from __future__ import annotations

from aury.fetcher.common.exceptions import FetcherError


class HttpError(FetcherError):
    """HTTP 错误基类。"""

    pass


class HttpStatusError(HttpError):
    """HTTP 状态码错误。

    收到了响应，但状态码不在 2xx 范围内。异常消息即状态文本
    （例如 ``"Not Found"``）。

    Attributes:
        status_code: HTTP 状态码
        reason: 状态文本
        url: 请求 URL
        method: 请求方法
        body: 响应体文本，便于排查问题
    """

    def __init__(
        self,
        reason: str,
        *,
        status_code: int,
        url: str = "",
        method: str = "GET",
        body: str = "",
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
        self.url = url
        self.method = method
        self.body = body

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} {self.method} {self.url} "
            f"status={self.status_code} reason={self.reason!r}>"
        )


class HttpDecodeError(HttpError, ValueError):
    """响应体不是合法的 JSON。"""

    def __init__(self, message: str, *, text: str = "") -> None:
        super().__init__(message)
        self.text = text


__all__ = [
    "HttpDecodeError",
    "HttpError",
    "HttpStatusError",
]
