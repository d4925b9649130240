"""json2tar 常量.

该模块定义了 USTAR 头部布局、容器/路径上限以及标量字面量.
"""

# tar 块大小
BLOCK_SIZE = 512

# USTAR 头部字段宽度
NAME_FIELD_SIZE = 100
MODE_FIELD_SIZE = 8
ID_FIELD_SIZE = 8
SIZE_FIELD_SIZE = 12
MTIME_FIELD_SIZE = 12
CHECKSUM_FIELD_SIZE = 8
CHECKSUM_OFFSET = 148

# 名称字段保留一个字节作为终止符
PATH_MAX = NAME_FIELD_SIZE - 1

TYPE_REGULAR = "0"
TYPE_DIRECTORY = "5"

MODE_REGULAR = 0o644
MODE_DIRECTORY = 0o755

USTAR_MAGIC = b"ustar"
USTAR_VERSION = b"00"

CHECKSUM_MODULUS = 0o777777

# 同时打开的容器数上限
MAX_DEPTH = 64

# 输入读取块大小
CHUNK_SIZE = 4096

ROOT_SEGMENT = b"root"
PATH_SEPARATOR = b"/"

LITERAL_TRUE = b"true"
LITERAL_FALSE = b"false"
LITERAL_NULL = b"null"
