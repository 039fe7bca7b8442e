"""传输层 - 单次 HTTP 请求/响应。

Fetcher 只依赖 ``Transport`` 协议；默认实现 ``AiohttpTransport``
基于 aiohttp，懒加载一个 ClientSession 并复用它。

传输层不做重试、不做状态码判断，也不包装 aiohttp 的异常。
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import json
import time
from typing import Any, Protocol

import aiohttp
from yarl import URL

from aury.fetcher.common.logging import LoggerMixin
from aury.fetcher.exceptions import HttpDecodeError


@dataclass
class HttpResponse:
    """响应对象。"""

    status_code: int
    reason: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """状态码是否在 2xx 范围内。"""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """解析 JSON 响应。

        Returns:
            解析后的数据；响应体为空时返回 None

        Raises:
            HttpDecodeError: 响应体不是合法的 JSON
        """
        if not self.text.strip():
            return None
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise HttpDecodeError(
                f"响应不是合法的 JSON: {exc}",
                text=self.text,
            ) from exc


class Transport(Protocol):
    """传输层接口。"""

    async def send(
        self,
        method: str,
        url: str | URL,
        *,
        headers: dict[str, str],
        body: str | bytes | None = None,
        **options: Any,
    ) -> HttpResponse: ...

    async def close(self) -> None: ...


class AiohttpTransport(LoggerMixin):
    """基于 aiohttp 的传输层实现。

    使用示例:
        transport = AiohttpTransport(timeout=10)
        response = await transport.send("GET", "https://api.example.com/users", headers={})
        await transport.close()
    """

    def __init__(self, timeout: float | None = None) -> None:
        """初始化传输层。

        Args:
            timeout: 会话总超时时间（秒），为空则使用 aiohttp 默认值
        """
        self._timeout = (
            aiohttp.ClientTimeout(total=timeout)
            if timeout is not None
            else None
        )
        # aiohttp 会话（延迟创建），与创建它的事件循环绑定
        self._session: aiohttp.ClientSession | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """确保会话已创建。

        会话属于其他事件循环时（例如两次 asyncio.run 之间）重新创建。
        """
        loop = asyncio.get_running_loop()
        if self._session is not None and self._loop is not loop:
            # 旧会话只能在它自己的事件循环里关闭
            self._session = None
            self.logger.debug("事件循环已变化，丢弃旧的HTTP会话")
        if self._session is None or self._session.closed:
            if self._timeout is not None:
                self._session = aiohttp.ClientSession(timeout=self._timeout)
            else:
                self._session = aiohttp.ClientSession()
            self._loop = loop
            self.logger.debug("HTTP会话已创建")
        return self._session

    async def send(
        self,
        method: str,
        url: str | URL,
        *,
        headers: dict[str, str],
        body: str | bytes | None = None,
        **options: Any,
    ) -> HttpResponse:
        """发送一次 HTTP 请求。

        Args:
            method: HTTP方法
            url: 请求URL（字符串或 yarl.URL）
            headers: 完整的请求头
            body: 已序列化的请求体
            **options: 其他 aiohttp 参数（params、timeout、ssl 等），原样透传

        Returns:
            HttpResponse: 响应对象

        Raises:
            aiohttp.ClientError: 网络错误、DNS 错误、URL 非法等
            asyncio.TimeoutError: 超时
        """
        session = await self._ensure_session()
        start_time = time.perf_counter()
        async with session.request(
            method,
            url,
            headers=headers,
            data=body,
            **options,
        ) as resp:
            content = await resp.read()
            encoding = resp.get_encoding() if content else "utf-8"
            elapsed = time.perf_counter() - start_time
            return HttpResponse(
                status_code=resp.status,
                reason=resp.reason or "",
                url=str(resp.url),
                headers=dict(resp.headers),
                text=content.decode(encoding, errors="replace"),
                content=content,
                elapsed_seconds=elapsed,
            )

    async def close(self) -> None:
        """关闭会话。"""
        if (
            self._session is not None
            and not self._session.closed
            and self._loop is asyncio.get_running_loop()
        ):
            await self._session.close()
            self.logger.debug("HTTP会话已关闭")
        self._session = None
        self._loop = None

    def __repr__(self) -> str:
        total = self._timeout.total if self._timeout is not None else None
        return f"<AiohttpTransport timeout={total}>"


__all__ = [
    "AiohttpTransport",
    "HttpResponse",
    "Transport",
]
