"""json2tar 配置对象."""

from dataclasses import dataclass

from .const import MAX_DEPTH
from .options import ConvertOption


@dataclass(frozen=True)
class Config:
    """转换配置 (不可变).

    在 API 入口层创建, 然后传递给转换驱动器.

    Attributes:
        flags: 转换选项标志 (IntFlag).
        max_depth: 允许同时打开的容器数.
    """

    flags: ConvertOption = ConvertOption.NONE
    max_depth: int = MAX_DEPTH

    @classmethod
    def from_params(
        cls,
        option: ConvertOption = ConvertOption.NONE,
        max_depth: int = MAX_DEPTH,
    ) -> "Config":
        """从参数构建配置对象.

        Args:
            option: ConvertOption 枚举.
            max_depth: 允许同时打开的容器数.

        Returns:
            Config: 配置对象.

        Raises:
            ValueError: 如果 `max_depth` 小于 1.
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        return cls(flags=ConvertOption(option), max_depth=max_depth)

    @property
    def decode_strings(self) -> bool:
        """是否解码字符串中的转义序列."""
        return bool(self.flags & ConvertOption.DECODE_STRINGS)

    @property
    def root_directory(self) -> bool:
        """是否将条目放在 `root` 目录下."""
        return bool(self.flags & ConvertOption.ROOT_DIRECTORY)

    @property
    def end_of_archive(self) -> bool:
        """是否写入归档结束标记."""
        return bool(self.flags & ConvertOption.END_OF_ARCHIVE)
