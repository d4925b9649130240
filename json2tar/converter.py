"""JSON 到 tar 的转换驱动器.

驱动器从词法分析器逐个拉取记号, 更新容器栈, 为当前节点构建路径,
并按顺序写出对应的 tar 记录. 整个过程是单次前向遍历.
"""

from collections.abc import Callable
from typing import IO

from .config import Config
from .const import LITERAL_FALSE, LITERAL_NULL, LITERAL_TRUE, ROOT_SEGMENT
from .encoder import TarEntry, TarWriter
from .exceptions import Json2TarError
from .log import logger
from .path import build_path
from .stack import ContainerStack, FrameKind
from .tokenizer import JsonTokenizer, Token, TokenType, decode_string

_SCALAR_LITERALS = {
    TokenType.TRUE: LITERAL_TRUE,
    TokenType.FALSE: LITERAL_FALSE,
    TokenType.NULL: LITERAL_NULL,
}

_START_KINDS = {
    TokenType.ARRAY_START: FrameKind.ARRAY,
    TokenType.OBJECT_START: FrameKind.OBJECT,
}


class JsonTarConverter:
    """单次转换的驱动器.

    每次调用构造一个实例, 容器栈由该实例独占.
    """

    __slots__ = ("_config", "_root_emitted", "_stack", "_writer")

    _writer: TarWriter
    _config: Config

    def __init__(
        self,
        sink: IO[bytes],
        config: Config | None = None,
        on_entry: Callable[[TarEntry], None] | None = None,
    ):
        """初始化转换驱动器.

        Args:
            sink: 二进制输出端.
            config: 转换配置.
            on_entry: 每写出一个条目后调用的回调.
        """
        self._config = config if config is not None else Config()
        self._writer = TarWriter(sink, on_entry)
        self._stack = ContainerStack(self._config.max_depth)
        self._root_emitted = False

    @property
    def records_written(self) -> int:
        """已写出的头部记录数."""
        return self._writer.records_written

    def convert(self, data: bytes | bytearray | memoryview) -> int:
        """转换一个完整的 JSON 文档.

        Args:
            data: JSON 文档字节.

        Returns:
            写出的头部记录数.

        Raises:
            Json2TarError: 转换失败. 已写出的字节保留在输出端.
        """
        try:
            logger.debug("[Converter] 开始转换 %d 字节", len(data))
            tokenizer = JsonTokenizer(data)
            for token in tokenizer:
                self._handle(token)
            if self._config.end_of_archive:
                self._writer.write_end_of_archive()
            logger.debug(
                "[Converter] 成功写出 %d 条记录 (%d 字节)",
                self._writer.records_written,
                self._writer.bytes_written,
            )
            return self._writer.records_written
        except Json2TarError as e:
            logger.error("[Converter] 转换失败: %s", e)
            raise

    def _handle(self, token: Token) -> None:
        token_type = token.type
        if token_type in _START_KINDS:
            self._start_container(_START_KINDS[token_type])
        elif token_type in (TokenType.ARRAY_END, TokenType.OBJECT_END):
            self._stack.pop()
            # 该容器作为父对象字段的值已处理完毕
            self._stack.clear_field_name()
        elif token_type is TokenType.FIELD_NAME:
            self._stack.set_field_name(self._string_content(token.raw))
        else:
            self._scalar(token)

    def _string_content(self, raw: bytes) -> bytes:
        if self._config.decode_strings:
            return decode_string(raw)
        return raw

    def _path(self) -> bytes:
        return build_path(self._stack, self._config.root_directory)

    def _ensure_root_directory(self) -> None:
        """在 `root` 目录中的第一个条目之前写出该目录."""
        if self._config.root_directory and not self._root_emitted:
            self._writer.write_directory(ROOT_SEGMENT)
            self._root_emitted = True

    def _start_container(self, kind: FrameKind) -> None:
        if self._stack.is_empty:
            # 文档根容器不对应任何条目
            self._stack.push(kind)
            return
        self._stack.note_value()
        self._stack.check_depth()
        path = self._path()
        self._ensure_root_directory()
        self._writer.write_directory(path)
        self._stack.push(kind)

    def _scalar(self, token: Token) -> None:
        self._stack.note_value()
        path = self._path()
        if token.type in _SCALAR_LITERALS:
            content = _SCALAR_LITERALS[token.type]
        elif token.type is TokenType.STRING:
            content = self._string_content(token.raw)
        else:
            content = token.raw
        if not self._stack.is_empty:
            self._ensure_root_directory()
        self._writer.write_regular_file(path, content)
        self._stack.clear_field_name()
