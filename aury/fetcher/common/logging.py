"""日志管理 - 基于 loguru 的统一日志配置。

提供：
- 全局 loguru logger
- 按名称绑定的日志器（get_logger）
- 控制台 / 文件输出配置（setup_logging）
- 日志混入类

Fetcher 默认使用 ``get_logger("fetch")``，调用方可以通过
``Fetcher.set_logger`` 换成任何带有 ``error`` / ``debug`` 方法的对象。
"""

from __future__ import annotations

import sys
from typing import Any, Protocol

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<yellow>{extra[name]}</yellow> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{extra[name]} | "
    "{name}:{function}:{line} - "
    "{message}"
)


class FetchLogger(Protocol):
    """Fetcher 所需的日志接口。

    Fetcher 只传入已格式化好的消息文本，loguru logger 和标准库
    ``logging.Logger`` 都满足此接口。
    """

    def error(self, msg: str, *args: Any) -> Any: ...

    def debug(self, msg: str, *args: Any) -> Any: ...


def _default_name(record) -> bool:
    """未绑定 name 的日志也能使用上面的格式。"""
    record["extra"].setdefault("name", "-")
    return True


def get_logger(name: str):
    """获取绑定了名称的日志器。

    Args:
        name: 日志器名称，会出现在日志行的 ``extra[name]`` 字段

    Returns:
        绑定后的 loguru logger
    """
    return logger.bind(name=name)


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
    *,
    enable_console: bool = True,
    rotation: str = "00:00",
    retention_days: int = 7,
) -> None:
    """设置日志配置。

    会移除 loguru 现有的所有输出，再按参数重新添加。

    Args:
        log_level: 日志级别（DEBUG/INFO/WARNING/ERROR/CRITICAL）
        log_file: 日志文件路径（可选，不传则不写文件）
        enable_console: 是否输出到控制台
        rotation: 文件滚动规则（默认：每天 00:00）
        retention_days: 日志保留天数
    """
    log_level = log_level.upper()
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_level,
            filter=_default_name,
            colorize=True,
        )

    if log_file:
        logger.add(
            log_file,
            rotation=rotation,
            retention=f"{retention_days} days",
            level=log_level,
            format=FILE_FORMAT,
            filter=_default_name,
            encoding="utf-8",
            enqueue=True,  # 异步写入
        )

    logger.debug(f"日志系统初始化完成，级别: {log_level}")


class LoggerMixin:
    """日志混入类。

    使用示例:
        class MyService(LoggerMixin):
            def do_something(self):
                self.logger.info("执行操作")
    """

    @property
    def logger(self):
        """获取类专用的日志器。"""
        class_name = self.__class__.__name__
        module_name = self.__class__.__module__
        return logger.bind(name=f"{module_name}.{class_name}")


__all__ = [
    "FetchLogger",
    "LoggerMixin",
    "get_logger",
    "logger",
    "setup_logging",
]
