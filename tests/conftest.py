"""提供 json2tar 测试的公共 Fixtures."""

import io
import tarfile
from collections.abc import Callable

import pytest

# (名称, 是否目录, 内容)
ArchiveMember = tuple[str, bool, bytes]


def _read_archive(data: bytes) -> list[ArchiveMember]:
    members: list[ArchiveMember] = []
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:") as tar:
        for info in tar:
            if info.isdir():
                members.append((info.name, True, b""))
            else:
                fileobj = tar.extractfile(info)
                assert fileobj is not None
                members.append((info.name, False, fileobj.read()))
    return members


def _split_records(data: bytes) -> list[bytes]:
    assert len(data) % 512 == 0
    return [data[i : i + 512] for i in range(0, len(data), 512)]


@pytest.fixture
def read_archive() -> Callable[[bytes], list[ArchiveMember]]:
    """提供归档读取函数.

    使用标准库 tarfile 按顺序读取归档中的所有条目.

    Returns:
        读取函数, 返回 (名称, 是否目录, 内容) 列表.
    """
    return _read_archive


@pytest.fixture
def split_records() -> Callable[[bytes], list[bytes]]:
    """提供将归档切分为 512 字节块的函数."""
    return _split_records
