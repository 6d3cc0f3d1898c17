"""
Table rows for member and endpoint listings.

Each builder returns ``(header, rows)``; the simple printer only uses the
rows, other output modes are free to lay the header out as they like.
"""

import math
from datetime import timedelta
from typing import List, Sequence, Tuple

from .types import EndpointHashKV, EndpointStatus, MemberListResponse

Table = Tuple[List[str], List[List[str]]]

MEMBER_LIST_HEADER = ["ID", "STATUS", "NAME", "PEER ADDRS", "CLIENT ADDRS", "IS LEARNER"]

ENDPOINT_STATUS_HEADER = [
    "ENDPOINT", "ID", "VERSION", "STORAGE VERSION", "DB SIZE", "IN USE",
    "PERCENTAGE NOT IN USE", "QUOTA", "IS LEADER", "IS LEARNER", "RAFT TERM",
    "RAFT INDEX", "RAFT APPLIED INDEX", "ERRORS", "DOWNGRADE TARGET VERSION",
    "DOWNGRADE ENABLED",
]

ENDPOINT_HASHKV_HEADER = ["ENDPOINT", "HASH", "HASH REVISION", "COMPACT REVISION"]

_SIZE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB"]


def go_bool(value: bool) -> str:
    """布尔值的输出形式"""
    return "true" if value else "false"


def human_bytes(size: int) -> str:
    """字节大小的可读形式，如 20 kB"""
    if size < 10:
        return f"{size} B"
    exp = min(int(math.floor(math.log(size) / math.log(1000))), len(_SIZE_UNITS) - 1)
    val = math.floor(size / 1000 ** exp * 10 + 0.5) / 10
    if val < 10:
        return f"{val:.1f} {_SIZE_UNITS[exp]}"
    return f"{val:.0f} {_SIZE_UNITS[exp]}"


def _fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10 ** precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(d: timedelta) -> str:
    """时长的可读形式，如 1.5ms 或 2m3s"""
    nanos = ((d.days * 86400 + d.seconds) * 10 ** 6 + d.microseconds) * 1000
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos == 0:
        return "0s"
    if nanos < 1000:
        return f"{sign}{nanos}ns"
    if nanos < 10 ** 6:
        return f"{sign}{_fraction(nanos, 3)}µs"
    if nanos < 10 ** 9:
        return f"{sign}{_fraction(nanos, 6)}ms"

    minutes, rest = divmod(nanos, 60 * 10 ** 9)
    text = _fraction(rest, 9) + "s"
    if minutes:
        hours, minutes = divmod(minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def build_member_list_table(resp: MemberListResponse) -> Table:
    """成员列表表格"""
    rows = []
    for m in resp.members:
        # a member that has not joined yet has no name
        status = "started" if m.name else "unstarted"
        rows.append([
            f"{m.id:x}",
            status,
            m.name,
            ",".join(m.peer_urls),
            ",".join(m.client_urls),
            go_bool(m.is_learner),
        ])
    return list(MEMBER_LIST_HEADER), rows


def build_endpoint_status_table(status_list: Sequence[EndpointStatus]) -> Table:
    """端点状态表格"""
    rows = []
    for status in status_list:
        resp = status.resp
        if resp.db_size:
            not_in_use = f"{100 - resp.db_size_in_use * 100 // resp.db_size}%"
        else:
            not_in_use = "0%"
        downgrade = resp.downgrade_info
        rows.append([
            status.ep,
            f"{resp.header.member_id:x}",
            resp.version,
            resp.storage_version,
            human_bytes(resp.db_size),
            human_bytes(resp.db_size_in_use),
            not_in_use,
            human_bytes(resp.db_size_quota),
            go_bool(resp.leader == resp.header.member_id),
            go_bool(resp.is_learner),
            str(resp.raft_term),
            str(resp.raft_index),
            str(resp.raft_applied_index),
            ", ".join(resp.errors),
            downgrade.target_version if downgrade else "",
            go_bool(downgrade.enabled if downgrade else False),
        ])
    return list(ENDPOINT_STATUS_HEADER), rows


def build_endpoint_hash_kv_table(hash_list: Sequence[EndpointHashKV]) -> Table:
    """端点哈希表格"""
    rows = [
        [h.ep, str(h.resp.hash), str(h.resp.hash_revision), str(h.resp.compact_revision)]
        for h in hash_list
    ]
    return list(ENDPOINT_HASHKV_HEADER), rows
