"""json2tar API模块.

提供将 JSON 文档转换为 tar 归档的高级接口 `dumps`, `dump`, `convert`,
以及一次性读取完整输入的 `read_input`.
"""

import io
from collections.abc import Callable
from typing import IO

from .config import Config
from .const import CHUNK_SIZE, MAX_DEPTH
from .converter import JsonTarConverter
from .encoder import TarEntry
from .exceptions import ArchiveIOError, OutOfMemoryError
from .options import ConvertOption

JsonInput = bytes | bytearray | memoryview | str


def _as_bytes(data: JsonInput) -> bytes | bytearray | memoryview:
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def read_input(fp: IO[bytes], chunk_size: int = CHUNK_SIZE) -> bytes:
    """分块读取输入直到 EOF.

    Args:
        fp: 二进制输入流.
        chunk_size: 单次读取字节数.

    Returns:
        完整的输入字节.

    Raises:
        ArchiveIOError: 读取失败.
        OutOfMemoryError: 无法为输入分配内存.
    """
    buffer = bytearray()
    try:
        while chunk := fp.read(chunk_size):
            buffer.extend(chunk)
    except OSError as e:
        raise ArchiveIOError(f"read error: {e}") from e
    except MemoryError as e:
        raise OutOfMemoryError("out of memory") from e
    return bytes(buffer)


def dump(
    data: JsonInput,
    fp: IO[bytes],
    option: ConvertOption = ConvertOption.NONE,
    max_depth: int = MAX_DEPTH,
    on_entry: Callable[[TarEntry], None] | None = None,
) -> int:
    """将 JSON 文档转换为 tar 归档并写入文件对象.

    Args:
        data: JSON 文档. `str` 按 UTF-8 编码.
        fp: 二进制输出流. 记录按发出顺序写入, 不会回退.
        option: 转换选项 (如 `ConvertOption.ROOT_DIRECTORY`).
        max_depth: 允许同时打开的容器数.
        on_entry: 每写出一个条目后调用的回调.

    Returns:
        int: 写出的头部记录数.

    Raises:
        Json2TarError: 转换失败. 失败前已写出的字节保留在 `fp` 中.
    """
    config = Config.from_params(option=option, max_depth=max_depth)
    converter = JsonTarConverter(fp, config, on_entry)
    return converter.convert(_as_bytes(data))


def dumps(
    data: JsonInput,
    option: ConvertOption = ConvertOption.NONE,
    max_depth: int = MAX_DEPTH,
) -> bytes:
    """将 JSON 文档转换为 tar 归档字节.

    Args:
        data: JSON 文档. `str` 按 UTF-8 编码.
        option: 转换选项.
        max_depth: 允许同时打开的容器数.

    Returns:
        bytes: 由 512 字节记录拼接而成的归档.

    Examples:
        >>> from json2tar import dumps
        >>> archive = dumps(b'{"a": 1}')
        >>> len(archive)
        1024
        >>> archive[:1]
        b'a'
    """
    buffer = io.BytesIO()
    dump(data, buffer, option=option, max_depth=max_depth)
    return buffer.getvalue()


def convert(
    src: IO[bytes],
    dst: IO[bytes],
    option: ConvertOption = ConvertOption.NONE,
    max_depth: int = MAX_DEPTH,
    on_entry: Callable[[TarEntry], None] | None = None,
) -> int:
    """读取 `src` 中的完整 JSON 文档并将归档写入 `dst`.

    Args:
        src: 二进制输入流.
        dst: 二进制输出流.
        option: 转换选项.
        max_depth: 允许同时打开的容器数.
        on_entry: 每写出一个条目后调用的回调.

    Returns:
        int: 写出的头部记录数.
    """
    data = read_input(src)
    return dump(data, dst, option=option, max_depth=max_depth, on_entry=on_entry)
