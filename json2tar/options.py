"""json2tar 转换选项.

该模块定义了用于控制 `dumps` 和 `dump` 函数行为的选项标志.
"""

from enum import IntFlag


class ConvertOption(IntFlag):
    """转换选项标志.

    可以使用位运算组合多个选项:
        option = ConvertOption.ROOT_DIRECTORY | ConvertOption.END_OF_ARCHIVE
    """

    # 默认行为: 字符串按源文本原样写出, 不写归档结束标记
    NONE = 0x0000

    # 解码字符串值和字段名中的 JSON 转义序列
    DECODE_STRINGS = 0x0001

    # 所有条目放在显式的 `root` 目录下
    ROOT_DIRECTORY = 0x0002

    # 在文档结束后写入两个全零块
    END_OF_ARCHIVE = 0x0004
