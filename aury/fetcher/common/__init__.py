"""Common 层模块。

最基础层，提供：
- 异常基类
- 日志系统
"""

from .exceptions import FetcherError
from .logging import (
    FetchLogger,
    LoggerMixin,
    get_logger,
    logger,
    setup_logging,
)

__all__ = [
    # 异常
    "FetcherError",
    # 日志
    "FetchLogger",
    "LoggerMixin",
    "get_logger",
    "logger",
    "setup_logging",
]
