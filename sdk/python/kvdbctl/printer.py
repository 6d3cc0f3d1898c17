"""
KVDBCtl Printers

A printer turns one client response into the text a ``kvdbctl`` command
shows. Every output mode implements the full :class:`Printer` interface, so a
new response kind cannot be added without every mode learning to print it.
Only the ``simple`` mode lives here.
"""

import abc
import codecs
import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from .config import SIMPLE_FORMAT, FormatterConfig
from .encoding import kv_lines, raw_text
from .exceptions import UnsupportedOutputFormatError
from .keyrange import format_permission, read_permissions, write_permissions
from .table import (
    build_endpoint_hash_kv_table,
    build_endpoint_status_table,
    build_member_list_table,
    format_duration,
    go_bool,
)
from .types import (
    OPEN_ENDED,
    AlarmResponse,
    AuthRoleAddResponse,
    AuthRoleDeleteResponse,
    AuthRoleGetResponse,
    AuthRoleGrantPermissionResponse,
    AuthRoleListResponse,
    AuthRoleRevokePermissionResponse,
    AuthStatusResponse,
    AuthUserAddResponse,
    AuthUserChangePasswordResponse,
    AuthUserDeleteResponse,
    AuthUserGetResponse,
    AuthUserGrantRoleResponse,
    AuthUserListResponse,
    AuthUserRevokeRoleResponse,
    DeleteResponse,
    DowngradeResponse,
    EndpointHashKV,
    EndpointHealth,
    EndpointStatus,
    GetResponse,
    KeyValue,
    LeaseGrantResponse,
    LeaseKeepAliveResponse,
    LeaseLeasesResponse,
    LeaseRevokeResponse,
    LeaseTimeToLiveResponse,
    MemberAddResponse,
    MemberListResponse,
    MemberPromoteResponse,
    MemberRemoveResponse,
    MemberUpdateResponse,
    MoveLeaderResponse,
    PutResponse,
    ResponseOpKind,
    TxnResponse,
    WatchResponse,
)

logger = logging.getLogger(__name__)

ROOT_ROLE = "root"


def _is_utf8(stream) -> bool:
    encoding = getattr(stream, "encoding", None)
    # io.StringIO and similar sinks carry no encoding
    if not encoding:
        return True
    return codecs.lookup(encoding).name == "utf-8"


class Printer(abc.ABC):
    """输出器接口，每种响应一个方法"""

    @abc.abstractmethod
    def delete(self, resp: DeleteResponse) -> None: ...

    @abc.abstractmethod
    def get(self, resp: GetResponse) -> None: ...

    @abc.abstractmethod
    def put(self, resp: PutResponse) -> None: ...

    @abc.abstractmethod
    def txn(self, resp: TxnResponse) -> None: ...

    @abc.abstractmethod
    def watch(self, resp: WatchResponse) -> None: ...

    @abc.abstractmethod
    def grant(self, resp: LeaseGrantResponse) -> None: ...

    @abc.abstractmethod
    def revoke(self, lease_id: int, resp: LeaseRevokeResponse) -> None: ...

    @abc.abstractmethod
    def keep_alive(self, resp: LeaseKeepAliveResponse) -> None: ...

    @abc.abstractmethod
    def time_to_live(self, resp: LeaseTimeToLiveResponse, keys: bool) -> None: ...

    @abc.abstractmethod
    def leases(self, resp: LeaseLeasesResponse) -> None: ...

    @abc.abstractmethod
    def alarm(self, resp: AlarmResponse) -> None: ...

    @abc.abstractmethod
    def member_add(self, resp: MemberAddResponse) -> None: ...

    @abc.abstractmethod
    def member_remove(self, member_id: int, resp: MemberRemoveResponse) -> None: ...

    @abc.abstractmethod
    def member_update(self, member_id: int, resp: MemberUpdateResponse) -> None: ...

    @abc.abstractmethod
    def member_promote(self, member_id: int, resp: MemberPromoteResponse) -> None: ...

    @abc.abstractmethod
    def member_list(self, resp: MemberListResponse) -> None: ...

    @abc.abstractmethod
    def endpoint_health(self, health_list: Sequence[EndpointHealth]) -> None: ...

    @abc.abstractmethod
    def endpoint_status(self, status_list: Sequence[EndpointStatus]) -> None: ...

    @abc.abstractmethod
    def endpoint_hash_kv(self, hash_list: Sequence[EndpointHashKV]) -> None: ...

    @abc.abstractmethod
    def move_leader(self, leader: int, target: int, resp: MoveLeaderResponse) -> None: ...

    @abc.abstractmethod
    def downgrade_validate(self, resp: DowngradeResponse) -> None: ...

    @abc.abstractmethod
    def downgrade_enable(self, resp: DowngradeResponse) -> None: ...

    @abc.abstractmethod
    def downgrade_cancel(self, resp: DowngradeResponse) -> None: ...

    @abc.abstractmethod
    def role_add(self, role: str, resp: AuthRoleAddResponse) -> None: ...

    @abc.abstractmethod
    def role_get(self, role: str, resp: AuthRoleGetResponse) -> None: ...

    @abc.abstractmethod
    def role_delete(self, role: str, resp: AuthRoleDeleteResponse) -> None: ...

    @abc.abstractmethod
    def role_list(self, resp: AuthRoleListResponse) -> None: ...

    @abc.abstractmethod
    def role_grant_permission(self, role: str, resp: AuthRoleGrantPermissionResponse) -> None: ...

    @abc.abstractmethod
    def role_revoke_permission(self, role: str, key: bytes, end: bytes,
                               resp: AuthRoleRevokePermissionResponse) -> None: ...

    @abc.abstractmethod
    def user_add(self, name: str, resp: AuthUserAddResponse) -> None: ...

    @abc.abstractmethod
    def user_get(self, name: str, resp: AuthUserGetResponse) -> None: ...

    @abc.abstractmethod
    def user_list(self, resp: AuthUserListResponse) -> None: ...

    @abc.abstractmethod
    def user_change_password(self, resp: AuthUserChangePasswordResponse) -> None: ...

    @abc.abstractmethod
    def user_grant_role(self, user: str, role: str, resp: AuthUserGrantRoleResponse) -> None: ...

    @abc.abstractmethod
    def user_revoke_role(self, user: str, role: str, resp: AuthUserRevokeRoleResponse) -> None: ...

    @abc.abstractmethod
    def user_delete(self, name: str, resp: AuthUserDeleteResponse) -> None: ...

    @abc.abstractmethod
    def auth_status(self, resp: AuthStatusResponse) -> None: ...


class SimplePrinter(Printer):
    """纯文本输出器，kvdbctl 默认输出格式"""

    def __init__(self, config: FormatterConfig = FormatterConfig(),
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.config = config
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def _println(self, line: str = "", stream: Optional[TextIO] = None) -> None:
        stream = stream if stream is not None else self.out
        data = line + "\n"
        if _is_utf8(stream):
            try:
                stream.write(data)
                return
            except UnicodeEncodeError:
                # surrogate escapes left by raw_text for invalid UTF-8 bytes
                pass
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            # text-only sink, nothing to encode
            stream.write(data)
            return
        # inverse of raw_text: the stored key/value bytes reach the output as they are
        stream.flush()
        buffer.write(data.encode("utf-8", "surrogateescape"))

    def _print_kv(self, kv: KeyValue) -> None:
        for line in kv_lines(self.config, kv):
            self._println(line)

    def _print_rows(self, rows: List[List[str]]) -> None:
        for row in rows:
            self._println(", ".join(row))

    # KV

    def delete(self, resp: DeleteResponse) -> None:
        """打印删除数量及被删除的旧键值"""
        self._println(str(resp.deleted))
        for kv in resp.prev_kvs:
            self._print_kv(kv)

    def get(self, resp: GetResponse) -> None:
        """打印读取到的键值"""
        for kv in resp.kvs:
            self._print_kv(kv)

    def put(self, resp: PutResponse) -> None:
        """打印写入结果及旧键值"""
        self._println("OK")
        if resp.prev_kv is not None:
            self._print_kv(resp.prev_kv)

    def _txn_handlers(self) -> Dict[ResponseOpKind, Callable]:
        return {
            ResponseOpKind.DELETE_RANGE: lambda op: self.delete(op.response_delete_range),
            ResponseOpKind.PUT: lambda op: self.put(op.response_put),
            ResponseOpKind.RANGE: lambda op: self.get(op.response_range),
        }

    def txn(self, resp: TxnResponse) -> None:
        """打印事务结果及各子操作结果"""
        self._println("SUCCESS" if resp.succeeded else "FAILURE")

        handlers = self._txn_handlers()
        for op in resp.responses:
            self._println()
            handler = handlers.get(op.kind)
            if handler is None:
                logger.debug("unexpected transaction response: %r", op)
                self._println(f"unexpected response {op!r}")
                continue
            handler(op)

    def watch(self, resp: WatchResponse) -> None:
        """打印监听事件"""
        for ev in resp.events:
            self._println(ev.type.name)
            if ev.prev_kv is not None:
                self._print_kv(ev.prev_kv)
            self._print_kv(ev.kv)

    # Lease

    def grant(self, resp: LeaseGrantResponse) -> None:
        """打印租约授予结果"""
        self._println(f"lease {resp.id:016x} granted with TTL({resp.ttl}s)")

    def revoke(self, lease_id: int, resp: LeaseRevokeResponse) -> None:
        """打印租约撤销结果"""
        self._println(f"lease {lease_id:016x} revoked")

    def keep_alive(self, resp: LeaseKeepAliveResponse) -> None:
        """打印租约续约结果"""
        self._println(f"lease {resp.id:016x} keepalived with TTL({resp.ttl})")

    def time_to_live(self, resp: LeaseTimeToLiveResponse, keys: bool) -> None:
        """打印租约剩余时间"""
        if resp.expired:
            self._println(f"lease {resp.id:016x} already expired")
            return

        text = f"lease {resp.id:016x} granted with TTL({resp.granted_ttl}s), remaining({resp.ttl}s)"
        if keys:
            # attached keys are always shown as text, --hex does not apply
            attached = ", ".join(raw_text(k) for k in resp.keys)
            text += f", attached keys([{attached}])"
        self._println(text)

    def leases(self, resp: LeaseLeasesResponse) -> None:
        """打印租约列表"""
        self._println(f"found {len(resp.leases)} leases")
        for item in resp.leases:
            self._println(f"{item.id:016x}")

    # Maintenance and cluster

    def alarm(self, resp: AlarmResponse) -> None:
        """打印告警列表"""
        for alarm in resp.alarms:
            self._println(str(alarm))

    def member_add(self, resp: MemberAddResponse) -> None:
        """打印成员添加结果"""
        as_learner = " as learner " if resp.member.is_learner else " "
        self._println(f"Member {resp.member.id:16x} added{as_learner}to cluster {resp.header.cluster_id:16x}")

    def member_remove(self, member_id: int, resp: MemberRemoveResponse) -> None:
        """打印成员移除结果"""
        self._println(f"Member {member_id:16x} removed from cluster {resp.header.cluster_id:16x}")

    def member_update(self, member_id: int, resp: MemberUpdateResponse) -> None:
        """打印成员更新结果"""
        self._println(f"Member {member_id:16x} updated in cluster {resp.header.cluster_id:16x}")

    def member_promote(self, member_id: int, resp: MemberPromoteResponse) -> None:
        """打印成员提升结果"""
        self._println(f"Member {member_id:16x} promoted in cluster {resp.header.cluster_id:16x}")

    def member_list(self, resp: MemberListResponse) -> None:
        """打印成员列表"""
        _, rows = build_member_list_table(resp)
        self._print_rows(rows)

    def endpoint_health(self, health_list: Sequence[EndpointHealth]) -> None:
        """打印端点健康检查结果"""
        for h in health_list:
            if not h.error:
                self._println(f"{h.ep} is healthy: successfully committed proposal: "
                              f"took = {format_duration(h.took)}")
            else:
                self._println(f"{h.ep} is unhealthy: failed to commit proposal: {h.error}",
                              stream=self.err)

    def endpoint_status(self, status_list: Sequence[EndpointStatus]) -> None:
        """打印端点状态"""
        _, rows = build_endpoint_status_table(status_list)
        self._print_rows(rows)

    def endpoint_hash_kv(self, hash_list: Sequence[EndpointHashKV]) -> None:
        """打印端点哈希"""
        _, rows = build_endpoint_hash_kv_table(hash_list)
        self._print_rows(rows)

    def move_leader(self, leader: int, target: int, resp: MoveLeaderResponse) -> None:
        """打印领导者迁移结果"""
        self._println(f"Leadership transferred from {leader:x} to {target:x}")

    def downgrade_validate(self, resp: DowngradeResponse) -> None:
        """打印降级校验结果"""
        self._println(f"Downgrade validate success, cluster version {resp.version}")

    def downgrade_enable(self, resp: DowngradeResponse) -> None:
        """打印降级启用结果"""
        self._println(f"Downgrade enable success, cluster version {resp.version}")

    def downgrade_cancel(self, resp: DowngradeResponse) -> None:
        """打印降级取消结果"""
        self._println(f"Downgrade cancel success, cluster version {resp.version}")

    # Auth

    def role_add(self, role: str, resp: AuthRoleAddResponse) -> None:
        """打印角色创建结果"""
        self._println(f"Role {role} created")

    def role_get(self, role: str, resp: AuthRoleGetResponse) -> None:
        """打印角色权限"""
        self._println(f"Role {role}")
        if role == ROOT_ROLE and resp.perm is None:
            self._println("KV Read:")
            self._println("\t[, <open ended>")
            self._println("KV Write:")
            self._println("\t[, <open ended>")
            return

        perms = resp.perm or []
        self._println("KV Read:")
        for perm in read_permissions(perms):
            self._println("\t" + format_permission(perm))
        self._println("KV Write:")
        for perm in write_permissions(perms):
            self._println("\t" + format_permission(perm))

    def role_delete(self, role: str, resp: AuthRoleDeleteResponse) -> None:
        """打印角色删除结果"""
        self._println(f"Role {role} deleted")

    def role_list(self, resp: AuthRoleListResponse) -> None:
        """打印角色列表"""
        for role in resp.roles:
            self._println(role)

    def role_grant_permission(self, role: str, resp: AuthRoleGrantPermissionResponse) -> None:
        """打印角色授权结果"""
        self._println(f"Role {role} updated")

    def role_revoke_permission(self, role: str, key: bytes, end: bytes,
                               resp: AuthRoleRevokePermissionResponse) -> None:
        """打印角色权限撤销结果"""
        k = raw_text(key)
        if not end:
            self._println(f"Permission of key {k} is revoked from role {role}")
        elif end == OPEN_ENDED:
            self._println(f"Permission of range [{k}, <open ended> is revoked from role {role}")
        else:
            self._println(f"Permission of range [{k}, {raw_text(end)}) is revoked from role {role}")

    def user_add(self, name: str, resp: AuthUserAddResponse) -> None:
        """打印用户创建结果"""
        self._println(f"User {name} created")

    def user_get(self, name: str, resp: AuthUserGetResponse) -> None:
        """打印用户信息"""
        self._println(f"User: {name}")
        self._println("Roles:" + "".join(f" {role}" for role in resp.roles))

    def user_list(self, resp: AuthUserListResponse) -> None:
        """打印用户列表"""
        for user in resp.users:
            self._println(user)

    def user_change_password(self, resp: AuthUserChangePasswordResponse) -> None:
        """打印密码修改结果"""
        self._println("Password updated")

    def user_grant_role(self, user: str, role: str, resp: AuthUserGrantRoleResponse) -> None:
        """打印用户角色授予结果"""
        self._println(f"Role {role} is granted to user {user}")

    def user_revoke_role(self, user: str, role: str, resp: AuthUserRevokeRoleResponse) -> None:
        """打印用户角色撤销结果"""
        self._println(f"Role {role} is revoked from user {user}")

    def user_delete(self, name: str, resp: AuthUserDeleteResponse) -> None:
        """打印用户删除结果"""
        self._println(f"User {name} deleted")

    def auth_status(self, resp: AuthStatusResponse) -> None:
        """打印认证状态"""
        self._println(f"Authentication Status: {go_bool(resp.enabled)}")
        self._println(f"AuthRevision: {resp.auth_revision}")


_PRINTERS = {
    SIMPLE_FORMAT: SimplePrinter,
}


def new_printer(output_format: str = SIMPLE_FORMAT, is_hex: bool = False,
                value_only: bool = False, out: Optional[TextIO] = None,
                err: Optional[TextIO] = None) -> Printer:
    """按 --write-out 选择的格式创建输出器"""
    try:
        printer_cls = _PRINTERS[output_format]
    except KeyError:
        raise UnsupportedOutputFormatError(output_format) from None

    config = FormatterConfig(hex_encode=is_hex, value_only=value_only)
    logger.debug("using %s printer (hex=%s, value_only=%s)", output_format, is_hex, value_only)
    return printer_cls(config, out=out, err=err)
