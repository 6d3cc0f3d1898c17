"""
Key range rendering for role permissions.
"""

from typing import Iterable, Iterator, Optional

from .encoding import raw_text
from .types import OPEN_ENDED, Permission, PermissionType

_READ_TYPES = (PermissionType.READ, PermissionType.READWRITE)
_WRITE_TYPES = (PermissionType.WRITE, PermissionType.READWRITE)


def prefix_range_end(key: bytes) -> Optional[bytes]:
    """前缀范围的结束键"""
    # last byte below 0xff incremented, everything after it dropped;
    # an all-0xff (or empty) key has no such bound
    end = bytearray(key)
    for i in range(len(end) - 1, -1, -1):
        if end[i] < 0xFF:
            end[i] += 1
            return bytes(end[:i + 1])
    return None


def is_prefix_range(key: bytes, range_end: bytes) -> bool:
    """判断范围是否恰好为键的前缀范围"""
    if not key:
        return False
    end = prefix_range_end(key)
    return end is not None and end == range_end


def format_range(perm: Permission) -> str:
    """格式化多键权限范围"""
    key = raw_text(perm.key)
    if perm.range_end == OPEN_ENDED:
        # no closing bracket
        text = f"[{key}, <open ended>"
    else:
        text = f"[{key}, {raw_text(perm.range_end)})"
    if is_prefix_range(perm.key, perm.range_end):
        text += f" (prefix {key})"
    return text


def format_permission(perm: Permission) -> str:
    """格式化权限（单键或范围）"""
    if not perm.range_end:
        return raw_text(perm.key)
    return format_range(perm)


def read_permissions(perms: Iterable[Permission]) -> Iterator[Permission]:
    """筛选读权限"""
    return (p for p in perms if p.perm_type in _READ_TYPES)


def write_permissions(perms: Iterable[Permission]) -> Iterator[Permission]:
    """筛选写权限"""
    return (p for p in perms if p.perm_type in _WRITE_TYPES)
