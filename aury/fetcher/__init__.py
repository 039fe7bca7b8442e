"""aury.fetcher - 基于 aiohttp 的 JSON 请求封装。

使用示例:
    from aury.fetcher import fetcher

    data = await fetcher.get("https://api.example.com/users")
"""

from .client import Body, Fetcher, RequestInit, encode_body
from .common import FetcherError, FetchLogger, get_logger, setup_logging
from .config import DEFAULT_HEADERS, FetcherSettings
from .exceptions import HttpDecodeError, HttpError, HttpStatusError
from .transport import AiohttpTransport, HttpResponse, Transport

# 默认实例
fetcher = Fetcher()

__all__ = [
    "DEFAULT_HEADERS",
    "AiohttpTransport",
    "Body",
    "FetchLogger",
    "Fetcher",
    "FetcherError",
    "FetcherSettings",
    "HttpDecodeError",
    "HttpError",
    "HttpResponse",
    "HttpStatusError",
    "RequestInit",
    "Transport",
    "encode_body",
    "fetcher",
    "get_logger",
    "setup_logging",
]
