"""异常基类。

aury.fetcher 中所有自定义异常都继承自 FetcherError。
"""

from __future__ import annotations


class FetcherError(Exception):
    """Fetcher 异常基类。

    Attributes:
        message: 错误消息
    """

    def __init__(self, message: str = "", *args: object) -> None:
        super().__init__(message, *args)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} message={self.message!r}>"


__all__ = [
    "FetcherError",
]
