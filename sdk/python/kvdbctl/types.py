"""
KVDBCtl response types

Plain data carriers for the responses the KVDB client hands to a printer.
Keys and values are raw bytes; nothing here assumes they are valid text.
"""

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, List, Optional


@dataclass(frozen=True)
class KeyValue:
    """键值对"""
    key: bytes
    value: bytes = b""
    create_revision: int = 0
    mod_revision: int = 0
    version: int = 0
    lease: int = 0


@dataclass
class ResponseHeader:
    """响应头"""
    cluster_id: int = 0
    member_id: int = 0
    revision: int = 0
    raft_term: int = 0


# KV

@dataclass
class GetResponse:
    """读取响应"""
    kvs: List[KeyValue] = field(default_factory=list)
    count: int = 0
    more: bool = False
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class PutResponse:
    """写入响应"""
    prev_kv: Optional[KeyValue] = None
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class DeleteResponse:
    """删除响应"""
    deleted: int = 0
    prev_kvs: List[KeyValue] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


class ResponseOpKind(enum.Enum):
    """事务子操作类型"""
    RANGE = "range"
    PUT = "put"
    DELETE_RANGE = "delete_range"
    UNKNOWN = "unknown"


@dataclass
class ResponseOp:
    """事务子操作结果"""
    # exactly one payload is expected; anything else reports UNKNOWN
    response_range: Optional[GetResponse] = None
    response_put: Optional[PutResponse] = None
    response_delete_range: Optional[DeleteResponse] = None
    unknown: Any = None

    @property
    def kind(self) -> ResponseOpKind:
        if self.response_delete_range is not None:
            return ResponseOpKind.DELETE_RANGE
        if self.response_put is not None:
            return ResponseOpKind.PUT
        if self.response_range is not None:
            return ResponseOpKind.RANGE
        return ResponseOpKind.UNKNOWN

    @classmethod
    def of(cls, response: Any) -> "ResponseOp":
        """按响应类型包装为子操作结果"""
        if isinstance(response, DeleteResponse):
            return cls(response_delete_range=response)
        if isinstance(response, PutResponse):
            return cls(response_put=response)
        if isinstance(response, GetResponse):
            return cls(response_range=response)
        return cls(unknown=response)


@dataclass
class TxnResponse:
    """事务响应"""
    succeeded: bool = False
    responses: List[ResponseOp] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


# Watch

class EventType(enum.Enum):
    """事件类型"""
    PUT = 0
    DELETE = 1


@dataclass
class Event:
    """监听事件"""
    type: EventType
    kv: KeyValue
    prev_kv: Optional[KeyValue] = None


@dataclass
class WatchResponse:
    """监听响应"""
    events: List[Event] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


# Lease

@dataclass
class LeaseGrantResponse:
    """租约授予响应"""
    id: int
    ttl: int
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class LeaseRevokeResponse:
    """租约撤销响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class LeaseKeepAliveResponse:
    """租约续约响应"""
    id: int
    ttl: int
    header: ResponseHeader = field(default_factory=ResponseHeader)


# remaining TTL reported for a lease that no longer exists
LEASE_EXPIRED_TTL = -1


@dataclass
class LeaseTimeToLiveResponse:
    """租约剩余时间响应"""
    id: int
    ttl: int
    granted_ttl: int
    keys: List[bytes] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)

    @property
    def expired(self) -> bool:
        return self.granted_ttl == 0 and self.ttl == LEASE_EXPIRED_TTL


@dataclass
class LeaseStatus:
    """租约"""
    id: int


@dataclass
class LeaseLeasesResponse:
    """租约列表响应"""
    leases: List[LeaseStatus] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


# Maintenance

class AlarmType(enum.Enum):
    """告警类型"""
    NONE = 0
    NOSPACE = 1
    CORRUPT = 2


@dataclass
class AlarmMember:
    """成员告警"""
    member_id: int
    alarm: AlarmType

    def __str__(self):
        # zero-valued fields are left out, as in the compact protobuf text form
        text = ""
        if self.member_id:
            text += f"memberID:{self.member_id} "
        if self.alarm is not AlarmType.NONE:
            text += f"alarm:{self.alarm.name} "
        return text


@dataclass
class AlarmResponse:
    """告警响应"""
    alarms: List[AlarmMember] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class DowngradeInfo:
    """降级信息"""
    target_version: str = ""
    enabled: bool = False


@dataclass
class StatusResponse:
    """状态响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)
    version: str = ""
    storage_version: str = ""
    db_size: int = 0
    db_size_in_use: int = 0
    db_size_quota: int = 0
    leader: int = 0
    is_learner: bool = False
    raft_index: int = 0
    raft_term: int = 0
    raft_applied_index: int = 0
    errors: List[str] = field(default_factory=list)
    downgrade_info: Optional[DowngradeInfo] = None


@dataclass
class HashKVResponse:
    """哈希响应"""
    hash: int = 0
    compact_revision: int = 0
    hash_revision: int = 0
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class MoveLeaderResponse:
    """领导者迁移响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class DowngradeResponse:
    """降级响应"""
    version: str = ""
    header: ResponseHeader = field(default_factory=ResponseHeader)


# Cluster

@dataclass
class Member:
    """集群成员"""
    id: int
    name: str = ""
    peer_urls: List[str] = field(default_factory=list)
    client_urls: List[str] = field(default_factory=list)
    is_learner: bool = False


@dataclass
class MemberAddResponse:
    """成员添加响应"""
    member: Member
    members: List[Member] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class MemberRemoveResponse:
    """成员移除响应"""
    members: List[Member] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class MemberUpdateResponse:
    """成员更新响应"""
    members: List[Member] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class MemberPromoteResponse:
    """成员提升响应"""
    members: List[Member] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class MemberListResponse:
    """成员列表响应"""
    members: List[Member] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


# Endpoint checks, gathered by the CLI across several endpoints

@dataclass
class EndpointHealth:
    """端点健康状态"""
    ep: str
    health: bool
    took: timedelta = field(default_factory=timedelta)
    error: str = ""


@dataclass
class EndpointStatus:
    """端点状态"""
    ep: str
    resp: StatusResponse


@dataclass
class EndpointHashKV:
    """端点哈希"""
    ep: str
    resp: HashKVResponse


# Auth

class PermissionType(enum.Enum):
    """权限类型"""
    READ = 0
    WRITE = 1
    READWRITE = 2


# range_end marking a permission without an upper bound
OPEN_ENDED = b"\x00"


@dataclass(frozen=True)
class Permission:
    """权限"""
    key: bytes
    range_end: bytes = b""
    perm_type: PermissionType = PermissionType.READ


@dataclass
class AuthRoleAddResponse:
    """角色创建响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthRoleGetResponse:
    """角色查询响应"""
    # None means the server sent no permission list at all
    perm: Optional[List[Permission]] = None
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthRoleListResponse:
    """角色列表响应"""
    roles: List[str] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthRoleDeleteResponse:
    """角色删除响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthRoleGrantPermissionResponse:
    """角色授权响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthRoleRevokePermissionResponse:
    """角色撤销权限响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserAddResponse:
    """用户创建响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserGetResponse:
    """用户查询响应"""
    roles: List[str] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserChangePasswordResponse:
    """修改密码响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserGrantRoleResponse:
    """用户授予角色响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserRevokeRoleResponse:
    """用户撤销角色响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserDeleteResponse:
    """用户删除响应"""
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthUserListResponse:
    """用户列表响应"""
    users: List[str] = field(default_factory=list)
    header: ResponseHeader = field(default_factory=ResponseHeader)


@dataclass
class AuthStatusResponse:
    """认证状态响应"""
    enabled: bool = False
    auth_revision: int = 0
    header: ResponseHeader = field(default_factory=ResponseHeader)
