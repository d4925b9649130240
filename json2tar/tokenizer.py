"""JSON 词法分析器.

该模块提供按需拉取的 `JsonTokenizer`, 它在内存缓冲区上逐个产生结构和标量
记号. 数字和字符串记号携带源文本中的原始字节片段, 不做任何数值解释.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from .exceptions import JsonParseError
from .log import get_hexdump, logger


class TokenType(IntEnum):
    """记号类型."""

    DOCUMENT_END = 0
    FIELD_NAME = 1
    ARRAY_START = 2
    OBJECT_START = 3
    ARRAY_END = 4
    OBJECT_END = 5
    TRUE = 6
    FALSE = 7
    NULL = 8
    NUMBER = 9
    STRING = 10


@dataclass(frozen=True, slots=True)
class Token:
    """一个记号.

    Attributes:
        type: 记号类型.
        raw: 数字的源文本, 或字符串/字段名引号之间的字节 (转义未解码).
        pos: 记号在输入中的起始字节偏移.
    """

    type: TokenType
    raw: bytes = b""
    pos: int = 0


class _Expect(IntEnum):
    VALUE = 0
    VALUE_OR_ARRAY_END = 1
    KEY = 2
    KEY_OR_OBJECT_END = 3
    COMMA_OR_END = 4
    DONE = 5


_WHITESPACE = frozenset(b" \t\n\r")

_NUMBER_RE = re.compile(rb"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")

# 字符串内部: 普通字符序列, 或一个合法转义
_STRING_CHUNK_RE = re.compile(rb'[^"\\\x00-\x1f]+|\\(?:["\\/bfnrt]|u[0-9a-fA-F]{4})')

_ESCAPE_RE = re.compile(
    rb"\\u([dD][89abAB][0-9a-fA-F]{2})\\u([dD][c-fC-F][0-9a-fA-F]{2})"
    rb"|\\u([0-9a-fA-F]{4})"
    rb'|\\(["\\/bfnrt])'
)

_SIMPLE_ESCAPES = {
    b'"': b'"',
    b"\\": b"\\",
    b"/": b"/",
    b"b": b"\b",
    b"f": b"\f",
    b"n": b"\n",
    b"r": b"\r",
    b"t": b"\t",
}

_LITERALS = {
    ord("t"): (b"true", TokenType.TRUE),
    ord("f"): (b"false", TokenType.FALSE),
    ord("n"): (b"null", TokenType.NULL),
}


def _unescape(match: re.Match[bytes]) -> bytes:
    high, low, single, simple = match.groups()
    if high is not None:
        code = 0x10000 + ((int(high, 16) - 0xD800) << 10) + (int(low, 16) - 0xDC00)
        return chr(code).encode("utf-8")
    if single is not None:
        # 孤立代理项无法以 UTF-8 表示, 按原码点写出
        return chr(int(single, 16)).encode("utf-8", "surrogatepass")
    return _SIMPLE_ESCAPES[simple]


def decode_string(raw: bytes) -> bytes:
    r"""解码字符串记号中的 JSON 转义序列.

    Args:
        raw: 引号之间的原始字节.

    Returns:
        UTF-8 字节. 代理对合并为单个码点.

    Examples:
        >>> decode_string(rb"caf\u00e9\n")
        b'caf\xc3\xa9\n'
    """
    if b"\\" not in raw:
        return raw
    return _ESCAPE_RE.sub(_unescape, raw)


class JsonTokenizer:
    """JSON 文档的拉取式词法分析器.

    只接受一个被可选空白包围的 JSON 值. 任何语法错误都会抛出
    `JsonParseError`.

    Usage:
        >>> tokenizer = JsonTokenizer(b'{"a": [1]}')
        >>> [t.type.name for t in tokenizer][:3]
        ['OBJECT_START', 'FIELD_NAME', 'ARRAY_START']
    """

    __slots__ = ("_containers", "_data", "_expect", "_pos", "length")

    def __init__(self, data: bytes | bytearray | memoryview):
        """初始化词法分析器.

        Args:
            data: 完整的 JSON 文档.
        """
        self._data = bytes(data)
        self._pos = 0
        self.length = len(self._data)
        self._expect = _Expect.VALUE
        # 打开的容器: True 为对象, False 为数组
        self._containers: list[bool] = []

    def __iter__(self) -> Iterator[Token]:
        """迭代记号, 不包括最后的 DOCUMENT_END."""
        while True:
            token = self.next_token()
            if token.type is TokenType.DOCUMENT_END:
                return
            yield token

    def _error(self, msg: str, pos: int | None = None) -> JsonParseError:
        pos = self._pos if pos is None else pos
        logger.debug("[Tokenizer] %s\n%s", msg, get_hexdump(self._data, pos))
        return JsonParseError(msg, pos)

    def _skip_whitespace(self) -> None:
        data = self._data
        pos = self._pos
        while pos < self.length and data[pos] in _WHITESPACE:
            pos += 1
        self._pos = pos

    def _after_value(self) -> None:
        self._expect = _Expect.COMMA_OR_END if self._containers else _Expect.DONE

    def _read_string(self) -> bytes:
        """读取以引号开头的字符串, 返回引号之间的原始字节."""
        start = self._pos + 1
        pos = start
        data = self._data
        while True:
            if pos >= self.length:
                raise self._error("unterminated string", self._pos)
            if data[pos] == 0x22:
                self._pos = pos + 1
                return data[start:pos]
            match = _STRING_CHUNK_RE.match(data, pos)
            if match is None:
                if data[pos] == 0x5C:
                    raise self._error("invalid escape sequence", pos)
                raise self._error("control character in string", pos)
            pos = match.end()

    def _read_literal(self) -> Token:
        literal, token_type = _LITERALS[self._data[self._pos]]
        if not self._data.startswith(literal, self._pos):
            raise self._error("invalid literal")
        token = Token(token_type, literal, self._pos)
        self._pos += len(literal)
        return token

    def _read_number(self) -> Token:
        match = _NUMBER_RE.match(self._data, self._pos)
        if match is None:
            raise self._error("invalid number")
        token = Token(TokenType.NUMBER, match.group(), self._pos)
        self._pos = match.end()
        return token

    def _read_key(self) -> Token:
        start = self._pos
        token = Token(TokenType.FIELD_NAME, self._read_string(), start)
        self._skip_whitespace()
        if self._pos >= self.length or self._data[self._pos] != 0x3A:
            raise self._error("expected ':' after field name")
        self._pos += 1
        self._expect = _Expect.VALUE
        return token

    def _read_value(self, ch: int) -> Token:
        start = self._pos
        if ch == 0x7B:
            self._pos += 1
            self._containers.append(True)
            self._expect = _Expect.KEY_OR_OBJECT_END
            return Token(TokenType.OBJECT_START, pos=start)
        if ch == 0x5B:
            self._pos += 1
            self._containers.append(False)
            self._expect = _Expect.VALUE_OR_ARRAY_END
            return Token(TokenType.ARRAY_START, pos=start)
        if ch == 0x22:
            token = Token(TokenType.STRING, self._read_string(), start)
        elif ch in _LITERALS:
            token = self._read_literal()
        elif ch == 0x2D or 0x30 <= ch <= 0x39:
            token = self._read_number()
        else:
            raise self._error(f"unexpected character {chr(ch)!r}")
        self._after_value()
        return token

    def _close(self, is_object: bool) -> Token:
        start = self._pos
        self._pos += 1
        self._containers.pop()
        self._after_value()
        if is_object:
            return Token(TokenType.OBJECT_END, pos=start)
        return Token(TokenType.ARRAY_END, pos=start)

    def next_token(self) -> Token:
        """读取下一个记号.

        Returns:
            下一个记号. 文档完整结束后始终返回 DOCUMENT_END.

        Raises:
            JsonParseError: 输入不是合法的 JSON.
        """
        while True:
            self._skip_whitespace()
            if self._pos >= self.length:
                if self._expect is _Expect.DONE:
                    return Token(TokenType.DOCUMENT_END, pos=self._pos)
                raise self._error("unexpected end of input")

            ch = self._data[self._pos]
            expect = self._expect

            if expect is _Expect.DONE:
                raise self._error("trailing data after document")

            if expect is _Expect.COMMA_OR_END:
                in_object = self._containers[-1]
                if ch == 0x2C:
                    self._pos += 1
                    self._expect = _Expect.KEY if in_object else _Expect.VALUE
                    continue
                if ch == (0x7D if in_object else 0x5D):
                    return self._close(in_object)
                raise self._error(f"unexpected character {chr(ch)!r}")

            if expect in (_Expect.KEY, _Expect.KEY_OR_OBJECT_END):
                if ch == 0x7D and expect is _Expect.KEY_OR_OBJECT_END:
                    return self._close(True)
                if ch == 0x22:
                    return self._read_key()
                raise self._error("expected field name")

            if ch == 0x5D and expect is _Expect.VALUE_OR_ARRAY_END:
                return self._close(False)
            return self._read_value(ch)
