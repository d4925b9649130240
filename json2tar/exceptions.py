"""json2tar 异常类.

该模块为 json2tar 库定义了异常层次结构. 所有错误都是致命的,
转换在第一个错误处中止, 已写出的字节保留在输出端.
"""


class Json2TarError(Exception):
    """所有 json2tar 异常的基类."""

    pass


class OutOfMemoryError(Json2TarError, MemoryError):
    """缓冲输入或保存字段名时内存不足."""

    pass


class DepthExceededError(Json2TarError):
    """容器嵌套层数超过上限时抛出."""

    def __init__(self, max_depth: int) -> None:
        """初始化嵌套过深错误.

        Args:
            max_depth: 允许同时打开的容器数.
        """
        super().__init__(f"too deep: more than {max_depth} nested containers")
        self.max_depth = max_depth


class PathTooLongError(Json2TarError, ValueError):
    """编码后的路径超出 tar 名称字段容量时抛出."""

    def __init__(self, path: bytes, limit: int) -> None:
        """初始化路径过长错误.

        Args:
            path: 超限时已累积的路径前缀.
            limit: 允许的最大字节数.
        """
        super().__init__(f"path too long: exceeds {limit} bytes")
        self.path = path
        self.limit = limit


class ArchiveIOError(Json2TarError, OSError):
    """读取输入或写出归档失败时抛出."""

    pass


class JsonParseError(Json2TarError, ValueError):
    """JSON 输入格式错误时抛出.

    Case:
        - 非法字面量或数字.
        - 字符串未闭合或包含非法转义.
        - 文档提前结束或存在多余数据.
    """

    def __init__(self, msg: str, pos: int | None = None) -> None:
        """初始化解析错误.

        Args:
            msg: 错误描述信息.
            pos: 出错位置的字节偏移.
        """
        super().__init__(msg)
        self.pos = pos

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.pos is not None:
            return f"JSON read error: {base_msg} (at byte {self.pos})"
        return f"JSON read error: {base_msg}"


class StackStateError(Json2TarError, RuntimeError):
    """容器栈被以不一致的顺序操作时抛出 (驱动逻辑错误)."""

    pass
