"""json2tar 日志记录器.

库只挂一个 `NullHandler`, 日志的输出方式由应用决定. 这样在未配置日志的
程序中, 转换失败时不会由 logging 的兜底处理器额外打印一行错误.
命令行在 `-v` 下通过 `debug_logging` 把调试信息写到 stderr.
"""

import contextlib
import logging
import sys
from collections.abc import Iterator
from typing import IO

logger = logging.getLogger("json2tar")
logger.addHandler(logging.NullHandler())

_DEBUG_FORMAT = "%(levelname)s %(message)s"


@contextlib.contextmanager
def debug_logging(stream: IO[str] | None = None) -> Iterator[logging.Handler]:
    """在上下文中将 json2tar 的全部日志写到指定流.

    退出时移除处理器并恢复原日志级别.

    Args:
        stream: 输出流, 默认为调用时的 `sys.stderr`.

    Yields:
        临时挂载的处理器.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


def get_hexdump(
    data: bytes | bytearray | memoryview, pos: int, window: int = 16
) -> str:
    """返回 `pos` 前后各 `window` 字节的十六进制转储.

    Args:
        data: 输入缓冲区.
        pos: 出错位置的字节偏移, 可以越界.
        window: 单侧显示的字节数.

    Returns:
        两行文本: 区间说明和以空格分隔的字节.
    """
    start = max(0, pos - window)
    end = min(len(data), pos + window)
    hex_str = bytes(data[start:end]).hex(" ")

    return f"位置 {pos} 的上下文 (字节 {start}-{end}):\n{hex_str}"
