"""测试 JSON 词法分析器."""

import logging

import pytest

from json2tar import JsonParseError, JsonTokenizer, TokenType, decode_string

T = TokenType


def _types(data: bytes) -> list[TokenType]:
    return [token.type for token in JsonTokenizer(data)]


def test_tokenize_nested_document() -> None:
    """应按文档顺序产生结构和标量记号."""
    tokens = list(JsonTokenizer(b'{"a": [1, "x", true, false, null], "b": {}}'))

    assert [t.type for t in tokens] == [
        T.OBJECT_START,
        T.FIELD_NAME,
        T.ARRAY_START,
        T.NUMBER,
        T.STRING,
        T.TRUE,
        T.FALSE,
        T.NULL,
        T.ARRAY_END,
        T.FIELD_NAME,
        T.OBJECT_START,
        T.OBJECT_END,
        T.OBJECT_END,
    ]
    assert tokens[1].raw == b"a"
    assert tokens[3].raw == b"1"
    assert tokens[4].raw == b"x"
    assert tokens[9].raw == b"b"


def test_document_end_repeats() -> None:
    """文档结束后 next_token() 应持续返回 DOCUMENT_END."""
    tokenizer = JsonTokenizer(b"  7  ")

    assert tokenizer.next_token().type is T.NUMBER
    assert tokenizer.next_token().type is T.DOCUMENT_END
    assert tokenizer.next_token().type is T.DOCUMENT_END


@pytest.mark.parametrize(
    "number",
    [
        b"0",
        b"-0",
        b"12",
        b"-3.25",
        b"1e10",
        b"1E+2",
        b"6.02e-23",
        b"12345678901234567890",
    ],
)
def test_number_raw_text(number: bytes) -> None:
    """数字记号应携带源文本原样."""
    tokens = list(JsonTokenizer(b"[" + number + b"]"))

    assert tokens[1].type is T.NUMBER
    assert tokens[1].raw == number


def test_string_raw_keeps_escapes() -> None:
    """字符串记号的 raw 应保留转义序列."""
    tokens = list(JsonTokenizer(rb'["a\"b\\c\u0041"]'))

    assert tokens[1].raw == rb"a\"b\\c\u0041"


def test_token_positions() -> None:
    """记号应记录起始字节偏移."""
    tokens = list(JsonTokenizer(b'{ "k" : 10 }'))

    assert [t.pos for t in tokens] == [0, 2, 8, 11]


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"   ",
        b"[1,",
        b"[1 2]",
        b"[1,]",
        b'{"a":1,}',
        b'{"a" 1}',
        b"{1:2}",
        b"[tru]",
        b"nul",
        b"[01]",
        b"[1.]",
        b"[-]",
        b"[.5]",
        b"[+1]",
        b'["abc',
        b'["a\\x"]',
        b'["a\\u12"]',
        b'["a\nb"]',
        b"[1]]",
        b"1 2",
        b"{}x",
        b"[}",
        b"{]",
        b"'a'",
    ],
)
def test_malformed_input(data: bytes) -> None:
    """非法 JSON 应抛出 JsonParseError."""
    with pytest.raises(JsonParseError):
        list(JsonTokenizer(data))


def test_parse_error_position() -> None:
    """JsonParseError 应包含出错位置."""
    with pytest.raises(JsonParseError) as exc_info:
        list(JsonTokenizer(b"[1, @]"))

    assert exc_info.value.pos == 4
    assert "at byte 4" in str(exc_info.value)


def test_parse_error_logs_hexdump(caplog: pytest.LogCaptureFixture) -> None:
    """解析错误应在 debug 级别记录出错位置附近的十六进制转储."""
    with caplog.at_level(logging.DEBUG, logger="json2tar"):
        with pytest.raises(JsonParseError):
            list(JsonTokenizer(b"[@]"))

    assert "5b 40 5d" in caplog.text


def test_non_ascii_bytes_in_string() -> None:
    """字符串中的非 ASCII 字节应原样保留."""
    data = '["日本"]'.encode()

    tokens = list(JsonTokenizer(data))

    assert tokens[1].raw == "日本".encode()


# --- 转义解码 ---


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (b"plain", b"plain"),
        (rb"a\"b", b'a"b'),
        (rb"\\\/", b"\\/"),
        (rb"\b\f\n\r\t", b"\b\f\n\r\t"),
        (rb"\u0041", b"A"),
        (rb"caf\u00e9", "caf\u00e9".encode()),
        (rb"\ud83d\ude00", "\U0001f600".encode()),
        (rb"\\u0041", rb"\u0041"),
    ],
)
def test_decode_string(raw: bytes, expected: bytes) -> None:
    """decode_string() 应解码 JSON 转义序列为 UTF-8 字节."""
    assert decode_string(raw) == expected


def test_decode_string_lone_surrogate() -> None:
    """孤立代理项应按原码点写出而不报错."""
    assert decode_string(rb"\ud800") == b"\xed\xa0\x80"
