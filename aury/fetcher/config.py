"""Fetcher 配置。

使用 pydantic-settings 从环境变量读取，只在构造 Fetcher 时使用。
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "accept": "application/json",
}


class FetcherSettings(BaseSettings):
    """Fetcher 配置。

    环境变量前缀: FETCHER_
    示例: FETCHER_HEADERS='{"accept": "text/plain"}', FETCHER_TIMEOUT=10
    """

    headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        description="默认请求头（整体替换，不与内置默认值合并）"
    )
    logger_name: str = Field(
        default="fetch",
        description="默认日志器名称"
    )
    timeout: float | None = Field(
        default=None,
        description="aiohttp 会话总超时时间（秒），为空则使用 aiohttp 默认值"
    )

    model_config = SettingsConfigDict(
        env_prefix="FETCHER_",
        case_sensitive=False,
    )


__all__ = [
    "DEFAULT_HEADERS",
    "FetcherSettings",
]
