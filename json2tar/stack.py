"""容器栈.

每个打开的 JSON 数组或对象对应一个栈帧. 栈为空时表示文档根 (虚拟容器).
"""

from collections.abc import Iterator
from enum import Enum

from .const import MAX_DEPTH
from .exceptions import DepthExceededError, StackStateError


class FrameKind(Enum):
    """栈帧类型."""

    ARRAY = "A"
    OBJECT = "O"


class ContainerFrame:
    """容器栈帧."""

    __slots__ = ("element_count", "field_name", "kind")

    def __init__(self, kind: FrameKind):
        self.kind = kind
        self.field_name: bytes | None = None  # 仅对象: 等待值的字段名
        self.element_count = 0  # 仅数组: 已追加的元素数

    def __repr__(self) -> str:
        if self.kind is FrameKind.OBJECT:
            return f"ContainerFrame(OBJECT, field_name={self.field_name!r})"
        return f"ContainerFrame(ARRAY, element_count={self.element_count})"


class ContainerStack:
    """有界深度的容器栈, 由单个转换驱动器独占."""

    __slots__ = ("_frames", "max_depth")

    def __init__(self, max_depth: int = MAX_DEPTH):
        self._frames: list[ContainerFrame] = []
        self.max_depth = max_depth

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[ContainerFrame]:
        """从最外层到最内层迭代栈帧."""
        return iter(self._frames)

    @property
    def is_empty(self) -> bool:
        """栈是否为空 (当前位于文档根)."""
        return not self._frames

    @property
    def top(self) -> ContainerFrame | None:
        """栈顶帧, 栈为空时为 None."""
        return self._frames[-1] if self._frames else None

    def check_depth(self) -> None:
        """检查是否还能再压入一帧.

        Raises:
            DepthExceededError: 栈已满.
        """
        if len(self._frames) >= self.max_depth:
            raise DepthExceededError(self.max_depth)

    def push(self, kind: FrameKind) -> ContainerFrame:
        """压入一个新的空栈帧.

        Args:
            kind: 栈帧类型.

        Returns:
            新压入的栈帧.

        Raises:
            DepthExceededError: 栈已满.
        """
        self.check_depth()
        frame = ContainerFrame(kind)
        self._frames.append(frame)
        return frame

    def pop(self) -> ContainerFrame:
        """弹出栈顶帧并释放其字段名.

        Raises:
            StackStateError: 栈为空.
        """
        if not self._frames:
            raise StackStateError("pop from empty container stack")
        frame = self._frames.pop()
        frame.field_name = None
        return frame

    def set_field_name(self, name: bytes) -> None:
        """设置栈顶对象帧的待定字段名, 替换之前的名称.

        栈为空时 (文档根) 为空操作.

        Raises:
            StackStateError: 栈顶不是对象帧.
        """
        frame = self.top
        if frame is None:
            return
        if frame.kind is not FrameKind.OBJECT:
            raise StackStateError("field name outside of an object")
        frame.field_name = name

    def clear_field_name(self) -> None:
        """清除栈顶对象帧的待定字段名."""
        frame = self.top
        if frame is not None and frame.kind is FrameKind.OBJECT:
            frame.field_name = None

    def note_array_element(self) -> None:
        """栈顶数组帧的元素计数加一.

        Raises:
            StackStateError: 栈顶不是数组帧.
        """
        frame = self.top
        if frame is None or frame.kind is not FrameKind.ARRAY:
            raise StackStateError("array element outside of an array")
        frame.element_count += 1

    def note_value(self) -> None:
        """在父容器中记录一个值.

        父容器为数组时递增计数; 为对象时由待定字段名标记, 无需操作.
        """
        frame = self.top
        if frame is not None and frame.kind is FrameKind.ARRAY:
            self.note_array_element()
