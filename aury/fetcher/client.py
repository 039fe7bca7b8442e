"""Fetcher - JSON 请求封装。

在传输层之上补充：
- 默认请求头（可整体替换）
- 请求体自动序列化为 JSON 文本
- 按状态码判断成功/失败并记录日志
- 响应体自动解析为 JSON
- GET/POST/PUT/PATCH/DELETE 快捷方法

不做重试，不做缓存，超时等控制通过透传给传输层的参数实现。
"""

from __future__ import annotations

from collections.abc import Mapping
import json
from typing import Any, TypedDict

from pydantic import BaseModel
from yarl import URL

from aury.fetcher.common.logging import FetchLogger, get_logger
from aury.fetcher.config import DEFAULT_HEADERS, FetcherSettings
from aury.fetcher.exceptions import HttpStatusError
from aury.fetcher.transport import AiohttpTransport, Transport

Body = str | bytes | Mapping[str, Any] | list[Any] | tuple[Any, ...] | BaseModel

# 不透传给传输层的键
RESERVED_KEYS = frozenset({"method", "headers", "body", "data", "json"})


class RequestInit(TypedDict, total=False):
    """单次请求的配置。

    除下列键外，其余键（params、timeout、ssl、allow_redirects 等）
    原样透传给传输层。
    ``data`` 和 ``json`` 会被忽略，请求体只能通过 ``body`` 传入。
    """

    method: str
    headers: Mapping[str, str]
    body: Body


def encode_body(body: Body) -> str | bytes:
    """将请求体转换为可发送的文本。

    str / bytes 原样返回；字典、列表和 pydantic 模型序列化为紧凑的 JSON 文本。
    """
    if isinstance(body, (str, bytes)):
        return body
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json")
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


class Fetcher:
    """JSON 请求封装。

    使用示例:
        fetcher = Fetcher()
        data = await fetcher.get("https://api.example.com/users")
        # 日志: 请求成功 https://api.example.com/users GET 状态: 200 OK

        await fetcher.post("https://api.example.com/users", {"body": {"name": "aury"}})

        # 透传 aiohttp 参数
        await fetcher.get("https://api.example.com/users", params={"page": 2})

        # 非 2xx 响应抛出 HttpStatusError，消息为状态文本
        await fetcher.get("https://api.example.com/404")
        # HttpStatusError: Not Found

    注意：``set_headers`` / ``set_logger`` 与进行中的请求之间没有同步，
    每次请求开始时读取一次当前值。
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        logger: FetchLogger | None = None,
        transport: Transport | None = None,
    ) -> None:
        """初始化 Fetcher。

        Args:
            headers: 默认请求头，不传则使用 JSON 默认请求头
            logger: 日志器，需提供 error / debug 方法
            transport: 传输层，不传则使用 AiohttpTransport
        """
        self._headers: Mapping[str, str] = (
            headers if headers is not None else dict(DEFAULT_HEADERS)
        )
        self._logger: FetchLogger = logger if logger is not None else get_logger("fetch")
        self._transport: Transport = transport if transport is not None else AiohttpTransport()

    @classmethod
    def from_settings(
        cls,
        settings: FetcherSettings | None = None,
        *,
        logger: FetchLogger | None = None,
    ) -> Fetcher:
        """从配置创建 Fetcher。

        Args:
            settings: Fetcher 配置，不传则从环境变量读取
            logger: 日志器，不传则按 settings.logger_name 创建

        Returns:
            Fetcher: 实例
        """
        settings = settings or FetcherSettings()
        return cls(
            headers=dict(settings.headers),
            logger=logger or get_logger(settings.logger_name),
            transport=AiohttpTransport(timeout=settings.timeout),
        )

    @property
    def headers(self) -> Mapping[str, str]:
        """当前默认请求头。"""
        return self._headers

    @property
    def logger(self) -> FetchLogger:
        """当前日志器。"""
        return self._logger

    def set_headers(self, headers: Mapping[str, str]) -> None:
        """整体替换默认请求头（不合并）。

        Args:
            headers: 新的默认请求头
        """
        self._headers = headers

    def set_logger(self, logger: FetchLogger) -> None:
        """替换日志器。

        Args:
            logger: 新的日志器
        """
        self._logger = logger

    async def fetch(
        self,
        url: str | URL,
        init: RequestInit | None = None,
        **options: Any,
    ) -> Any | None:
        """发送请求并将响应解析为 JSON。

        只传 ``init`` 时，结构化的 ``init["body"]`` 会被原地替换为序列化后的文本。

        Args:
            url: 请求URL
            init: 请求配置（method、headers、body 及透传参数）
            **options: 额外的请求配置，覆盖 init 中的同名键

        Returns:
            解析后的响应数据；响应体为空时返回 None

        Raises:
            HttpStatusError: 响应状态码不在 2xx 范围内
            HttpDecodeError: 响应体不是合法的 JSON
            aiohttp.ClientError: 传输层错误，原样抛出
        """
        if options:
            init = {**(init or {}), **options}
        elif init is None:
            init = {}

        default_headers = self._headers
        logger = self._logger

        headers = {**default_headers, **(init.get("headers") or {})}
        body = init.get("body")
        if body is not None and not isinstance(body, (str, bytes)):
            body = encode_body(body)
            init["body"] = body

        method = init.get("method") or "GET"
        extra = {
            key: value
            for key, value in init.items()
            if key not in RESERVED_KEYS
        }

        response = await self._transport.send(
            method,
            url,
            headers=headers,
            body=body,
            **extra,
        )

        if not response.ok:
            logger.error(
                f"请求失败 {url} {method} 状态: {response.status_code} {response.reason}"
            )
            raise HttpStatusError(
                response.reason,
                status_code=response.status_code,
                url=str(url),
                method=method,
                body=response.text,
            )

        logger.debug(
            f"请求成功 {url} {method} 状态: {response.status_code} {response.reason}"
        )
        return response.json()

    async def get(self, url: str | URL, init: RequestInit | None = None, **options: Any) -> Any | None:
        """GET请求。"""
        return await self.fetch(url, {**(init or {}), **options, "method": "GET"})

    async def post(self, url: str | URL, init: RequestInit | None = None, **options: Any) -> Any | None:
        """POST请求。"""
        return await self.fetch(url, {**(init or {}), **options, "method": "POST"})

    async def put(self, url: str | URL, init: RequestInit | None = None, **options: Any) -> Any | None:
        """PUT请求。"""
        return await self.fetch(url, {**(init or {}), **options, "method": "PUT"})

    async def patch(self, url: str | URL, init: RequestInit | None = None, **options: Any) -> Any | None:
        """PATCH请求。"""
        return await self.fetch(url, {**(init or {}), **options, "method": "PATCH"})

    async def delete(self, url: str | URL, init: RequestInit | None = None, **options: Any) -> Any | None:
        """DELETE请求。"""
        return await self.fetch(url, {**(init or {}), **options, "method": "DELETE"})

    async def close(self) -> None:
        """关闭传输层。"""
        await self._transport.close()

    async def __aenter__(self) -> Fetcher:
        """异步上下文管理器入口。"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """异步上下文管理器出口。"""
        await self.close()

    def __repr__(self) -> str:
        """字符串表示。"""
        return f"<Fetcher headers={dict(self._headers)!r} transport={self._transport!r}>"


__all__ = [
    "Body",
    "Fetcher",
    "RequestInit",
    "encode_body",
]
