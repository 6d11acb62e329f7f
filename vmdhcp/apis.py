"""Resource types of the network.harvesterhci.io/v1alpha1 API group."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

API_GROUP = "network.harvesterhci.io"
API_VERSION = f"{API_GROUP}/v1alpha1"


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _put_if(data: dict, key: str, value: Any) -> None:
    """Store ``value`` under ``key`` unless it is empty (JSON omitempty)."""
    if value is None or value == "" or value == [] or value == {}:
        return
    data[key] = value


@dataclass
class GenericCondition:
    """A status condition carried by a resource."""

    type: str
    status: str = ""
    last_update_time: str = ""
    last_transition_time: str = ""
    reason: str = ""
    message: str = ""

    def _to_dict(self) -> dict:
        data = {"type": self.type, "status": self.status}
        _put_if(data, "lastUpdateTime", self.last_update_time)
        _put_if(data, "lastTransitionTime", self.last_transition_time)
        _put_if(data, "reason", self.reason)
        _put_if(data, "message", self.message)
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> GenericCondition:
        return cls(
            type=data.get("type", ""),
            status=data.get("status", ""),
            last_update_time=data.get("lastUpdateTime", ""),
            last_transition_time=data.get("lastTransitionTime", ""),
            reason=data.get("reason", ""),
            message=data.get("message", ""),
        )


class ConditionType(str, Enum):
    """Condition types used by IPPool and VirtualMachineNetworkConfig."""

    REGISTERED = "Registered"
    CACHE_READY = "CacheReady"
    AGENT_READY = "AgentReady"
    STOPPED = "Stopped"
    ALLOCATED = "Allocated"
    DISABLED = "Disabled"
    IN_SYNCED = "InSynced"

    def _find(self, obj: Any) -> Optional[GenericCondition]:
        return next(
            (c for c in obj.status.conditions if c.type == self.value), None
        )

    def get_status(self, obj: Any) -> str:
        """Return the condition's status on ``obj``, or "" when it is absent."""
        cond = self._find(obj)
        return cond.status if cond is not None else ""

    def is_true(self, obj: Any) -> bool:
        """Whether the condition on ``obj`` has status "True"."""
        return self.get_status(obj) == "True"

    def set_status(self, obj: Any, status: str) -> None:
        """Set the condition's status on ``obj``, adding the condition if missing."""
        cond = self._find(obj)
        if cond is None:
            cond = GenericCondition(type=self.value)
            obj.status.conditions.append(cond)
        now = _now()
        if cond.status != status:
            cond.last_transition_time = now
        cond.status = status
        cond.last_update_time = now


class NetworkConfigState(str, Enum):
    """Allocation state of a single network configuration."""

    ALLOCATED = "Allocated"
    PENDING = "Pending"
    STALE = "Stale"


@dataclass
class ObjectMeta:
    """Identifying metadata of a resource."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    creation_timestamp: Optional[str] = None

    def _to_dict(self) -> dict:
        data: dict = {}
        _put_if(data, "name", self.name)
        _put_if(data, "namespace", self.namespace)
        _put_if(data, "uid", self.uid)
        _put_if(data, "labels", dict(self.labels))
        _put_if(data, "annotations", dict(self.annotations))
        _put_if(data, "creationTimestamp", self.creation_timestamp)
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> ObjectMeta:
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            uid=data.get("uid", ""),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
            creation_timestamp=data.get("creationTimestamp"),
        )


@dataclass
class Pool:
    """The address range handed out by an IPPool."""

    start: str = ""
    end: str = ""
    exclude: list[str] = field(default_factory=list)

    def _to_dict(self) -> dict:
        data = {"start": self.start, "end": self.end}
        _put_if(data, "exclude", list(self.exclude))
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> Pool:
        return cls(
            start=data.get("start", ""),
            end=data.get("end", ""),
            exclude=list(data.get("exclude") or []),
        )


@dataclass
class IPv4Config:
    """IPv4 settings served to clients of a pool."""

    cidr: str = ""
    server_ip: str = ""
    pool: Pool = field(default_factory=Pool)
    router: str = ""
    dns: list[str] = field(default_factory=list)
    domain_name: Optional[str] = None
    domain_search: list[str] = field(default_factory=list)
    ntp: list[str] = field(default_factory=list)
    lease_time: Optional[int] = None

    def _to_dict(self) -> dict:
        data = {
            "cidr": self.cidr,
            "serverIP": self.server_ip,
            "pool": self.pool._to_dict(),
        }
        _put_if(data, "router", self.router)
        _put_if(data, "dns", list(self.dns))
        if self.domain_name is not None:
            data["domainName"] = self.domain_name
        _put_if(data, "domainSearch", list(self.domain_search))
        _put_if(data, "ntp", list(self.ntp))
        if self.lease_time is not None:
            data["leaseTime"] = self.lease_time
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> IPv4Config:
        return cls(
            cidr=data.get("cidr", ""),
            server_ip=data.get("serverIP", ""),
            pool=Pool._from_dict(data.get("pool") or {}),
            router=data.get("router", ""),
            dns=list(data.get("dns") or []),
            domain_name=data.get("domainName"),
            domain_search=list(data.get("domainSearch") or []),
            ntp=list(data.get("ntp") or []),
            lease_time=data.get("leaseTime"),
        )


@dataclass
class IPPoolSpec:
    """Desired state of an IPPool."""

    network_name: str = ""
    ipv4_config: IPv4Config = field(default_factory=IPv4Config)
    paused: Optional[bool] = None

    def _to_dict(self) -> dict:
        data = {
            "ipv4Config": self.ipv4_config._to_dict(),
            "networkName": self.network_name,
        }
        if self.paused is not None:
            data["paused"] = self.paused
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> IPPoolSpec:
        return cls(
            network_name=data.get("networkName", ""),
            ipv4_config=IPv4Config._from_dict(data.get("ipv4Config") or {}),
            paused=data.get("paused"),
        )


@dataclass
class IPv4Status:
    """Allocation bookkeeping of a pool: IP address to MAC address."""

    allocated: dict[str, str] = field(default_factory=dict)
    used: int = 0
    available: int = 0

    def _to_dict(self) -> dict:
        data: dict = {}
        _put_if(data, "allocated", dict(self.allocated))
        data["used"] = self.used
        data["available"] = self.available
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> IPv4Status:
        return cls(
            allocated=dict(data.get("allocated") or {}),
            used=int(data.get("used", 0)),
            available=int(data.get("available", 0)),
        )


@dataclass
class PodReference:
    """Reference to the agent pod that serves a pool."""

    namespace: str = ""
    name: str = ""
    image: str = ""
    uid: str = ""

    def _to_dict(self) -> dict:
        data: dict = {}
        _put_if(data, "namespace", self.namespace)
        _put_if(data, "name", self.name)
        _put_if(data, "image", self.image)
        _put_if(data, "uid", self.uid)
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> PodReference:
        return cls(
            namespace=data.get("namespace", ""),
            name=data.get("name", ""),
            image=data.get("image", ""),
            uid=data.get("uid", ""),
        )


@dataclass
class IPPoolStatus:
    """Observed state of an IPPool."""

    last_update: Optional[str] = None
    ipv4: Optional[IPv4Status] = None
    agent_pod_ref: Optional[PodReference] = None
    conditions: list[GenericCondition] = field(default_factory=list)

    def _to_dict(self) -> dict:
        data: dict = {"lastUpdate": self.last_update}
        if self.ipv4 is not None:
            data["ipv4"] = self.ipv4._to_dict()
        if self.agent_pod_ref is not None:
            data["agentPodRef"] = self.agent_pod_ref._to_dict()
        _put_if(data, "conditions", [c._to_dict() for c in self.conditions])
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> IPPoolStatus:
        ipv4 = data.get("ipv4")
        pod_ref = data.get("agentPodRef")
        return cls(
            last_update=data.get("lastUpdate"),
            ipv4=IPv4Status._from_dict(ipv4) if ipv4 is not None else None,
            agent_pod_ref=PodReference._from_dict(pod_ref) if pod_ref is not None else None,
            conditions=[GenericCondition._from_dict(c) for c in data.get("conditions") or []],
        )


@dataclass
class IPPool:
    """An address pool served by a DHCP agent on one network."""

    KIND = "IPPool"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: IPPoolSpec = field(default_factory=IPPoolSpec)
    status: IPPoolStatus = field(default_factory=IPPoolStatus)

    def to_dict(self) -> dict:
        """Serialize to the resource's JSON-compatible form."""
        return {
            "apiVersion": API_VERSION,
            "kind": self.KIND,
            "metadata": self.metadata._to_dict(),
            "spec": self.spec._to_dict(),
            "status": self.status._to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> IPPool:
        """Build an IPPool from its JSON-compatible form."""
        return cls(
            metadata=ObjectMeta._from_dict(data.get("metadata") or {}),
            spec=IPPoolSpec._from_dict(data.get("spec") or {}),
            status=IPPoolStatus._from_dict(data.get("status") or {}),
        )


@dataclass
class NetworkConfig:
    """A requested address for one interface of a virtual machine."""

    network_name: str = ""
    mac_address: str = ""
    ip_address: Optional[str] = None

    def _to_dict(self) -> dict:
        data = {"networkName": self.network_name, "macAddress": self.mac_address}
        if self.ip_address is not None:
            data["ipAddress"] = self.ip_address
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> NetworkConfig:
        return cls(
            network_name=data.get("networkName", ""),
            mac_address=data.get("macAddress", ""),
            ip_address=data.get("ipAddress"),
        )


@dataclass
class VirtualMachineNetworkConfigSpec:
    """Desired network configuration of a virtual machine."""

    vm_name: str = ""
    network_configs: list[NetworkConfig] = field(default_factory=list)
    paused: Optional[bool] = None

    def _to_dict(self) -> dict:
        data: dict = {"vmName": self.vm_name}
        _put_if(data, "networkConfigs", [n._to_dict() for n in self.network_configs])
        if self.paused is not None:
            data["paused"] = self.paused
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> VirtualMachineNetworkConfigSpec:
        return cls(
            vm_name=data.get("vmName", ""),
            network_configs=[NetworkConfig._from_dict(n) for n in data.get("networkConfigs") or []],
            paused=data.get("paused"),
        )


@dataclass
class NetworkConfigStatus:
    """Observed allocation for one interface of a virtual machine."""

    allocated_ip_address: str = ""
    mac_address: str = ""
    network_name: str = ""
    state: Optional[NetworkConfigState] = None

    def _to_dict(self) -> dict:
        data: dict = {}
        _put_if(data, "allocatedIPAddress", self.allocated_ip_address)
        _put_if(data, "macAddress", self.mac_address)
        _put_if(data, "networkName", self.network_name)
        if self.state is not None:
            data["state"] = self.state.value
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> NetworkConfigStatus:
        state = data.get("state")
        return cls(
            allocated_ip_address=data.get("allocatedIPAddress", ""),
            mac_address=data.get("macAddress", ""),
            network_name=data.get("networkName", ""),
            state=NetworkConfigState(state) if state else None,
        )


@dataclass
class VirtualMachineNetworkConfigStatus:
    """Observed network configuration of a virtual machine."""

    network_configs: list[NetworkConfigStatus] = field(default_factory=list)
    conditions: list[GenericCondition] = field(default_factory=list)

    def _to_dict(self) -> dict:
        data: dict = {}
        _put_if(data, "networkConfigs", [n._to_dict() for n in self.network_configs])
        _put_if(data, "conditions", [c._to_dict() for c in self.conditions])
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> VirtualMachineNetworkConfigStatus:
        return cls(
            network_configs=[
                NetworkConfigStatus._from_dict(n) for n in data.get("networkConfigs") or []
            ],
            conditions=[GenericCondition._from_dict(c) for c in data.get("conditions") or []],
        )


@dataclass
class VirtualMachineNetworkConfig:
    """The DHCP network configuration requested for a virtual machine."""

    KIND = "VirtualMachineNetworkConfig"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VirtualMachineNetworkConfigSpec = field(default_factory=VirtualMachineNetworkConfigSpec)
    status: VirtualMachineNetworkConfigStatus = field(
        default_factory=VirtualMachineNetworkConfigStatus
    )

    def to_dict(self) -> dict:
        """Serialize to the resource's JSON-compatible form."""
        return {
            "apiVersion": API_VERSION,
            "kind": self.KIND,
            "metadata": self.metadata._to_dict(),
            "spec": self.spec._to_dict(),
            "status": self.status._to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> VirtualMachineNetworkConfig:
        """Build a VirtualMachineNetworkConfig from its JSON-compatible form."""
        return cls(
            metadata=ObjectMeta._from_dict(data.get("metadata") or {}),
            spec=VirtualMachineNetworkConfigSpec._from_dict(data.get("spec") or {}),
            status=VirtualMachineNetworkConfigStatus._from_dict(data.get("status") or {}),
        )