"""测试归档路径构建."""

import pytest

from json2tar import (
    PATH_MAX,
    ContainerStack,
    FrameKind,
    PathTooLongError,
    build_path,
    percent_encode,
)


def _stack_with(*labels: bytes | int) -> ContainerStack:
    """按标签构建栈: bytes 为对象字段名, int 为数组下标."""
    stack = ContainerStack()
    for label in labels:
        if isinstance(label, int):
            frame = stack.push(FrameKind.ARRAY)
            frame.element_count = label + 1
        else:
            stack.push(FrameKind.OBJECT)
            stack.set_field_name(label)
    return stack


# --- 百分号编码 ---


def test_percent_encode_unreserved() -> None:
    """字母, 数字和 -._~ 应原样保留."""
    name = b"AZaz09-._~"

    assert percent_encode(name) == name


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        (b"k y/z", b"k%20y%2Fz"),
        (b"a%b", b"a%25b"),
        (b"\x00\x7f", b"%00%7F"),
        ("é".encode(), b"%C3%A9"),
        (b"", b""),
    ],
)
def test_percent_encode_reserved(name: bytes, expected: bytes) -> None:
    """其余字节应编码为 % 加两位大写十六进制数."""
    assert percent_encode(name) == expected


def test_percent_encode_every_byte_is_single_segment() -> None:
    """任何字节编码后都不应包含 / 或 NUL."""
    encoded = percent_encode(bytes(range(256)))

    assert b"/" not in encoded
    assert b"\x00" not in encoded
    assert encoded.isascii()


# --- 路径构建 ---


def test_build_path_empty_stack_is_root() -> None:
    """栈为空时路径应为 root."""
    assert build_path(ContainerStack()) == b"root"
    assert build_path(ContainerStack(), root_directory=True) == b"root"


def test_build_path_mixed_frames() -> None:
    """路径应由各帧标签以 / 连接, 下标为 element_count - 1."""
    stack = _stack_with(b"a", 3, b"b c")

    assert build_path(stack) == b"a/3/b%20c"


def test_build_path_root_directory_prefix() -> None:
    """root_directory 选项应在非根路径前加上 root/."""
    stack = _stack_with(b"a", 0)

    assert build_path(stack, root_directory=True) == b"root/a/0"


def test_build_path_index_not_encoded() -> None:
    """下标段和 root 字面量不做百分号编码."""
    stack = _stack_with(12)

    assert build_path(stack, root_directory=True) == b"root/12"


def test_build_path_transient_empty_labels() -> None:
    """没有待定字段名或元素时, 对应段为空."""
    stack = ContainerStack()
    stack.push(FrameKind.OBJECT)
    stack.push(FrameKind.ARRAY)

    assert build_path(stack) == b"/"


def test_build_path_exact_limit() -> None:
    """恰好 PATH_MAX 字节的路径应被接受."""
    stack = _stack_with(b"x" * PATH_MAX)

    assert len(build_path(stack)) == PATH_MAX


def test_build_path_too_long() -> None:
    """超出 PATH_MAX 字节时应抛出 PathTooLongError."""
    stack = _stack_with(b"x" * (PATH_MAX + 1))

    with pytest.raises(PathTooLongError) as exc_info:
        build_path(stack)

    assert exc_info.value.limit == PATH_MAX


def test_build_path_too_long_after_encoding() -> None:
    """长度上限作用于编码后的路径."""
    stack = _stack_with(b" " * 34)

    with pytest.raises(PathTooLongError):
        build_path(stack)
