"""USTAR 记录编码器.

该模块提供结构化的头部记录 `TarHeader`, 将其序列化为 512 字节块的
`encode_header`, 以及按发出顺序写入输出端的 `TarWriter`.
"""

import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO, Literal

from pydantic import BaseModel, ConfigDict, Field

from .const import (
    BLOCK_SIZE,
    CHECKSUM_FIELD_SIZE,
    CHECKSUM_MODULUS,
    CHECKSUM_OFFSET,
    ID_FIELD_SIZE,
    MODE_DIRECTORY,
    MODE_FIELD_SIZE,
    MODE_REGULAR,
    MTIME_FIELD_SIZE,
    PATH_MAX,
    SIZE_FIELD_SIZE,
    TYPE_DIRECTORY,
    TYPE_REGULAR,
    USTAR_MAGIC,
    USTAR_VERSION,
)
from .exceptions import ArchiveIOError, PathTooLongError
from .log import logger

# name mode uid gid size mtime chksum typeflag linkname magic version
# uname gname devmajor devminor prefix (pad)
_HEADER = struct.Struct("100s8s8s8s12s12s8sc100s6s2s32s32s8s8s155s12x")

_ZERO_BLOCK = bytes(BLOCK_SIZE)
_CHECKSUM_PLACEHOLDER = b" " * CHECKSUM_FIELD_SIZE


class TarHeader(BaseModel):
    """USTAR 头部记录.

    所有权和时间字段固定为零, 链接名和用户/组名为空.
    """

    model_config = ConfigDict(frozen=True)

    name: bytes
    mode: int = Field(ge=0, le=0o7777777)
    typeflag: Literal["0", "5"]
    size: int = Field(default=0, ge=0, le=0o77777777777)
    uid: int = Field(default=0, ge=0, le=0o7777777)
    gid: int = Field(default=0, ge=0, le=0o7777777)
    mtime: int = Field(default=0, ge=0, le=0o77777777777)


@dataclass(frozen=True, slots=True)
class TarEntry:
    """已写出条目的描述."""

    path: str
    kind: Literal["file", "directory"]
    size: int = 0


def _octal(value: int, width: int) -> bytes:
    """将数值格式化为以 NUL 结尾的零填充八进制字段."""
    return ("%0*o" % (width - 1, value)).encode("ascii") + b"\0"


def _entry_name(path: bytes) -> str:
    return path.decode("ascii", "backslashreplace")


def tar_checksum(block: bytes | bytearray) -> int:
    """计算头部块的校验和.

    Args:
        block: 512 字节头部, 校验和字段应已填充为空格.

    Returns:
        所有字节的无符号和对校验和模数取模的结果.
    """
    return sum(block) % CHECKSUM_MODULUS


def tar_padding(nbyte: int) -> int:
    """返回将 `nbyte` 字节补齐到块边界所需的零字节数."""
    return -nbyte % BLOCK_SIZE


def encode_header(header: TarHeader) -> bytes:
    """将头部记录序列化为 512 字节块.

    Args:
        header: 头部记录.

    Returns:
        包含正确校验和的头部块.

    Raises:
        PathTooLongError: 名称超出名称字段容量.
    """
    if len(header.name) > PATH_MAX:
        raise PathTooLongError(header.name, PATH_MAX)

    block = bytearray(
        _HEADER.pack(
            header.name,
            _octal(header.mode, MODE_FIELD_SIZE),
            _octal(header.uid, ID_FIELD_SIZE),
            _octal(header.gid, ID_FIELD_SIZE),
            _octal(header.size, SIZE_FIELD_SIZE),
            _octal(header.mtime, MTIME_FIELD_SIZE),
            _CHECKSUM_PLACEHOLDER,
            header.typeflag.encode("ascii"),
            b"",
            USTAR_MAGIC,
            USTAR_VERSION,
            b"",
            b"",
            b"",
            b"",
            b"",
        )
    )
    checksum = tar_checksum(block)
    end = CHECKSUM_OFFSET + CHECKSUM_FIELD_SIZE
    block[CHECKSUM_OFFSET:end] = b"%06o\0 " % checksum
    return bytes(block)


class TarWriter:
    """按发出顺序写出 tar 记录, 不回退, 不缓冲整个归档."""

    __slots__ = (
        "_on_entry",
        "_sink",
        "bytes_written",
        "records_written",
    )

    _sink: IO[bytes]
    _on_entry: Callable[[TarEntry], None] | None

    def __init__(
        self,
        sink: IO[bytes],
        on_entry: Callable[[TarEntry], None] | None = None,
    ):
        """初始化写入器.

        Args:
            sink: 二进制输出端.
            on_entry: 每写出一个条目后调用的回调.
        """
        self._sink = sink
        self._on_entry = on_entry
        self.bytes_written = 0
        self.records_written = 0

    def _write(self, data: bytes) -> None:
        if not data:
            return
        try:
            written = self._sink.write(data)
        except OSError as e:
            raise ArchiveIOError(f"write error: {e}") from e
        if written is not None and written != len(data):
            raise ArchiveIOError(
                f"write error: short write ({written} of {len(data)} bytes)"
            )
        self.bytes_written += len(data)

    def write_header(self, header: TarHeader) -> None:
        """写出一个头部块."""
        self._write(encode_header(header))
        self.records_written += 1

    def write_directory(self, path: bytes) -> None:
        """写出目录条目 (仅头部)."""
        self.write_header(
            TarHeader(name=path, mode=MODE_DIRECTORY, typeflag=TYPE_DIRECTORY)
        )
        logger.debug("[TarWriter] 目录 %s", path)
        if self._on_entry is not None:
            self._on_entry(TarEntry(_entry_name(path), "directory"))

    def write_regular_file(self, path: bytes, data: bytes) -> None:
        """写出普通文件条目: 头部, 内容以及补齐到块边界的零字节."""
        nbyte = len(data)
        self.write_header(
            TarHeader(name=path, mode=MODE_REGULAR, typeflag=TYPE_REGULAR, size=nbyte)
        )
        self._write(data)
        self._write(_ZERO_BLOCK[: tar_padding(nbyte)])
        logger.debug("[TarWriter] 文件 %s (%d 字节)", path, nbyte)
        if self._on_entry is not None:
            self._on_entry(TarEntry(_entry_name(path), "file", nbyte))

    def write_end_of_archive(self) -> None:
        """写出两个全零块作为归档结束标记."""
        self._write(_ZERO_BLOCK * 2)
        logger.debug("[TarWriter] 归档结束标记")
