"""归档路径构建.

路径由栈中各帧的标签以 `/` 连接而成: 对象帧使用百分号编码后的字段名,
数组帧使用从零开始的元素下标. 文档根本身映射为字面量 `root`.
"""

from .const import PATH_MAX, PATH_SEPARATOR, ROOT_SEGMENT
from .exceptions import PathTooLongError
from .stack import ContainerStack, FrameKind

_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)

# 每个字节值对应的编码结果
_ENCODE_TABLE = [
    bytes([byte]) if byte in _UNRESERVED else b"%%%02X" % byte for byte in range(256)
]


def percent_encode(name: bytes) -> bytes:
    """对字段名进行百分号编码.

    字母, 数字以及 `-._~` 原样保留, 其余字节 (包括 `/`, 空格和所有非 ASCII 字节)
    编码为 `%` 加两位大写十六进制数.

    Args:
        name: 字段名的原始字节.

    Returns:
        可作为单个文件系统路径段的字节串.
    """
    return b"".join([_ENCODE_TABLE[byte] for byte in name])


class _PathBuffer:
    """带长度上限的路径累积缓冲区."""

    __slots__ = ("_buf", "_limit")

    def __init__(self, limit: int):
        self._buf = bytearray()
        self._limit = limit

    def append(self, segment: bytes) -> None:
        if len(self._buf) + len(segment) > self._limit:
            raise PathTooLongError(bytes(self._buf), self._limit)
        self._buf.extend(segment)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


def build_path(
    stack: ContainerStack, root_directory: bool = False, limit: int = PATH_MAX
) -> bytes:
    """根据容器栈为当前节点构建规范路径.

    Args:
        stack: 当前容器栈.
        root_directory: 是否在非根路径前添加 `root/`.
        limit: 路径最大字节数.

    Returns:
        路径字节串.

    Raises:
        PathTooLongError: 路径超出上限.
    """
    path = _PathBuffer(limit)
    if stack.is_empty:
        path.append(ROOT_SEGMENT)
        return path.getvalue()

    if root_directory:
        path.append(ROOT_SEGMENT)

    for index, frame in enumerate(stack):
        if index or root_directory:
            path.append(PATH_SEPARATOR)
        if frame.kind is FrameKind.OBJECT:
            if frame.field_name is not None:
                path.append(percent_encode(frame.field_name))
        elif frame.element_count:
            path.append(b"%d" % (frame.element_count - 1))
    return path.getvalue()
