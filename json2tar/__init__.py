"""JSON 转 tar 归档库.

将一个 JSON 文档转换为 USTAR 归档: 对象和数组成为目录, 标量成为普通文件.
"""

from .api import convert, dump, dumps, read_input
from .config import Config
from .const import MAX_DEPTH, PATH_MAX
from .converter import JsonTarConverter
from .encoder import TarEntry, TarHeader, TarWriter, encode_header
from .exceptions import (
    ArchiveIOError,
    DepthExceededError,
    Json2TarError,
    JsonParseError,
    OutOfMemoryError,
    PathTooLongError,
    StackStateError,
)
from .options import ConvertOption
from .path import build_path, percent_encode
from .stack import ContainerFrame, ContainerStack, FrameKind
from .tokenizer import JsonTokenizer, Token, TokenType, decode_string

__version__ = "0.1.0"

__all__ = [
    "MAX_DEPTH",
    "PATH_MAX",
    "ArchiveIOError",
    "Config",
    "ContainerFrame",
    "ContainerStack",
    "ConvertOption",
    "DepthExceededError",
    "FrameKind",
    "Json2TarError",
    "JsonParseError",
    "JsonTarConverter",
    "JsonTokenizer",
    "OutOfMemoryError",
    "PathTooLongError",
    "StackStateError",
    "TarEntry",
    "TarHeader",
    "TarWriter",
    "Token",
    "TokenType",
    "__version__",
    "build_path",
    "convert",
    "decode_string",
    "dump",
    "dumps",
    "encode_header",
    "percent_encode",
    "read_input",
]
