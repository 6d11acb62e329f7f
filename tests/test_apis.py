import json

import pytest

from vmdhcp.apis import (
    ConditionType,
    GenericCondition,
    IPPool,
    IPPoolSpec,
    IPPoolStatus,
    IPv4Config,
    IPv4Status,
    NetworkConfig,
    NetworkConfigState,
    NetworkConfigStatus,
    ObjectMeta,
    PodReference,
    Pool,
    VirtualMachineNetworkConfig,
    VirtualMachineNetworkConfigSpec,
    VirtualMachineNetworkConfigStatus,
)


def _full_pool():
    return IPPool(
        metadata=ObjectMeta(name="net-1", namespace="default", labels={"a": "b"}),
        spec=IPPoolSpec(
            network_name="default/net-1",
            ipv4_config=IPv4Config(
                cidr="192.0.2.0/24",
                server_ip="192.0.2.2",
                pool=Pool(start="192.0.2.10", end="192.0.2.20", exclude=["192.0.2.15"]),
                router="192.0.2.1",
                dns=["192.0.2.53"],
                domain_name="example.com",
                domain_search=["example.com"],
                ntp=["192.0.2.123"],
                lease_time=300,
            ),
            paused=False,
        ),
        status=IPPoolStatus(
            last_update="2024-01-01T00:00:00Z",
            ipv4=IPv4Status(allocated={"192.0.2.10": "00:00:5e:00:53:01"}, used=1, available=9),
            agent_pod_ref=PodReference(namespace="ns", name="agent", image="img:v1", uid="u1"),
            conditions=[GenericCondition(type="CacheReady", status="True")],
        ),
    )


def test_ippool_round_trip():
    pool = _full_pool()
    assert IPPool.from_dict(pool.to_dict()) == pool


def test_ippool_round_trip_through_json():
    pool = _full_pool()
    assert IPPool.from_dict(json.loads(json.dumps(pool.to_dict()))) == pool


def test_ippool_dict_uses_api_field_names():
    data = _full_pool().to_dict()
    assert data["apiVersion"] == "network.harvesterhci.io/v1alpha1"
    assert data["kind"] == "IPPool"
    assert data["spec"]["networkName"] == "default/net-1"
    assert data["spec"]["ipv4Config"]["serverIP"] == "192.0.2.2"
    assert data["spec"]["ipv4Config"]["pool"]["exclude"] == ["192.0.2.15"]
    assert data["status"]["ipv4"]["allocated"] == {"192.0.2.10": "00:00:5e:00:53:01"}


def test_ippool_optional_fields_are_omitted():
    data = IPPool().to_dict()
    ipv4 = data["spec"]["ipv4Config"]
    assert set(ipv4) == {"cidr", "serverIP", "pool"}
    assert set(data["spec"]) == {"ipv4Config", "networkName"}
    assert "ipv4" not in data["status"]
    assert "conditions" not in data["status"]


def test_ipv4_status_keeps_counters_when_zero():
    pool = IPPool(status=IPPoolStatus(ipv4=IPv4Status()))
    assert pool.to_dict()["status"]["ipv4"] == {"used": 0, "available": 0}


def test_ippool_from_sparse_dict():
    pool = IPPool.from_dict({"spec": {"networkName": "default/net-1"}})
    assert pool.spec.network_name == "default/net-1"
    assert pool.status.ipv4 is None
    assert pool.spec.ipv4_config.lease_time is None


def test_condition_absent_is_empty_and_not_true():
    pool = IPPool()
    assert ConditionType.CACHE_READY.get_status(pool) == ""
    assert not ConditionType.CACHE_READY.is_true(pool)


def test_condition_set_status_adds_and_updates():
    pool = IPPool()
    ConditionType.CACHE_READY.set_status(pool, "True")
    assert ConditionType.CACHE_READY.is_true(pool)
    assert len(pool.status.conditions) == 1
    ConditionType.CACHE_READY.set_status(pool, "False")
    assert ConditionType.CACHE_READY.get_status(pool) == "False"
    assert not ConditionType.CACHE_READY.is_true(pool)
    assert len(pool.status.conditions) == 1


def test_conditions_are_independent():
    pool = IPPool()
    ConditionType.REGISTERED.set_status(pool, "True")
    assert ConditionType.REGISTERED.is_true(pool)
    assert not ConditionType.AGENT_READY.is_true(pool)


def test_condition_from_dict_is_read():
    pool = IPPool.from_dict(
        {"status": {"conditions": [{"type": "AgentReady", "status": "True"}]}}
    )
    assert ConditionType.AGENT_READY.is_true(pool)


def test_condition_on_vmnetcfg():
    cfg = VirtualMachineNetworkConfig()
    ConditionType.ALLOCATED.set_status(cfg, "True")
    assert ConditionType.ALLOCATED.is_true(cfg)
    assert cfg.to_dict()["status"]["conditions"][0]["type"] == "Allocated"


def _full_vmnetcfg():
    return VirtualMachineNetworkConfig(
        metadata=ObjectMeta(name="vm-1", namespace="default"),
        spec=VirtualMachineNetworkConfigSpec(
            vm_name="vm-1",
            network_configs=[
                NetworkConfig(
                    network_name="default/net-1",
                    mac_address="00:00:5e:00:53:01",
                    ip_address="192.0.2.10",
                ),
                NetworkConfig(network_name="default/net-2", mac_address="00:00:5e:00:53:02"),
            ],
            paused=True,
        ),
        status=VirtualMachineNetworkConfigStatus(
            network_configs=[
                NetworkConfigStatus(
                    allocated_ip_address="192.0.2.10",
                    mac_address="00:00:5e:00:53:01",
                    network_name="default/net-1",
                    state=NetworkConfigState.ALLOCATED,
                )
            ],
        ),
    )


def test_vmnetcfg_round_trip():
    cfg = _full_vmnetcfg()
    assert VirtualMachineNetworkConfig.from_dict(cfg.to_dict()) == cfg


def test_vmnetcfg_dict_shape():
    data = _full_vmnetcfg().to_dict()
    assert data["kind"] == "VirtualMachineNetworkConfig"
    assert data["spec"]["vmName"] == "vm-1"
    assert "ipAddress" not in data["spec"]["networkConfigs"][1]
    assert data["status"]["networkConfigs"][0]["state"] == "Allocated"


@pytest.mark.parametrize(
    "value, state",
    [
        ("Allocated", NetworkConfigState.ALLOCATED),
        ("Pending", NetworkConfigState.PENDING),
        ("Stale", NetworkConfigState.STALE),
    ],
)
def test_network_config_state_values(value, state):
    cfg = VirtualMachineNetworkConfig.from_dict(
        {"status": {"networkConfigs": [{"state": value}]}}
    )
    assert cfg.status.network_configs[0].state is state


def test_unknown_state_raises():
    with pytest.raises(ValueError):
        VirtualMachineNetworkConfig.from_dict({"status": {"networkConfigs": [{"state": "Bogus"}]}})