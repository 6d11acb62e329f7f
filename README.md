# vmdhcp

Building blocks for a controller that hands out DHCP leases to virtual
machines from declared IP pools.

The package provides:

- `vmdhcp.apis` – data models for `IPPool` and
  `VirtualMachineNetworkConfig` objects, their specs and statuses, the
  condition helpers on `ConditionType`, and the `NetworkConfigState`
  values `Allocated`, `Pending` and `Stale`. Objects convert to and from
  plain dictionaries with `to_dict()` / `from_dict()`.
- `vmdhcp.cache` – a thread-safe `CacheAllocator` that keeps, per network,
  a set of MAC addresses and the IP address each one is bound to, and a
  fluent `CacheAllocatorBuilder` for setting one up.
- `vmdhcp.config` – option types for the controller (`ControllerOptions`),
  the agent (`AgentOptions`) and the webhook (`WebhookOptions`), the
  `Image` reference type, `NamespacedName`, and `parse_image_name_and_tag`.
- `vmdhcp.cli` – builds those option objects from command-line arguments
  and environment variables.

The package has no runtime dependencies and supports Python 3.10 and later.

## MAC-to-IP cache

```python
from vmdhcp.cache import CacheAllocatorBuilder, NetworkNotFoundError

cache = (
    CacheAllocatorBuilder()
    .mac_set("default/net-48")
    .add("default/net-48", "02:00:00:00:00:01", "192.168.48.10")
    .build()
)

cache.has_mac("default/net-48", "02:00:00:00:00:01")        # True
cache.get_ip_by_mac("default/net-48", "02:00:00:00:00:01")  # "192.168.48.10"
cache.list_all("default/net-48")  # {"02:00:00:00:00:01": "192.168.48.10"}

try:
    cache.add_mac("default/unknown", "02:00:00:00:00:02", "192.168.48.11")
except NetworkNotFoundError as exc:
    print(exc)  # network default/unknown does not exist
```

Every method that takes a network name raises `NetworkNotFoundError` when
that network has no MAC set, except `new_mac_set` (which creates or
replaces one) and `delete_mac_set` (which ignores missing networks).
Looking up a MAC address that is not in an existing network raises
`MACNotFoundError`; `delete_mac` on such an address does nothing. An IP
address that cannot be parsed is stored and reported as `"<nil>"`.
The builder's `add` silently skips networks that have no MAC set.

## Agent image references

```python
from vmdhcp.config import parse_image_name_and_tag, ImageParseError

image = parse_image_name_and_tag("registry.example.com:5000/team/agent:v0.3.3")
image.repository   # "registry.example.com:5000/team/agent"
image.tag          # "v0.3.3"
str(image)         # "registry.example.com:5000/team/agent:v0.3.3"

parse_image_name_and_tag("team/agent").tag  # "latest"

try:
    parse_image_name_and_tag("team/agent:")
except ImageParseError as exc:
    print(exc)  # invalid image name: colon without tag
```

A colon that belongs to a registry port is not mistaken for a tag, and a
reference with more than two colons is rejected with `ImageParseError`.

## Pool references

```python
from vmdhcp.config import NamespacedName

ref = NamespacedName.parse("default/net-48")
ref.namespace, ref.name   # ("default", "net-48")
str(ref)                  # "default/net-48"
```

The reference is split at its last `/`; without one, the whole text is
the name and the namespace is empty.

## IP pool objects

```python
from vmdhcp.apis import IPPool, ConditionType

pool = IPPool.from_dict({
    "metadata": {"namespace": "default", "name": "net-48"},
    "spec": {
        "networkName": "default/net-48",
        "ipv4Config": {
            "cidr": "192.168.48.0/24",
            "serverIP": "192.168.48.2",
            "router": "192.168.48.1",
            "pool": {"start": "192.168.48.10", "end": "192.168.48.200"},
        },
    },
})

ConditionType.CACHE_READY.is_true(pool)   # False until the condition is set
ConditionType.CACHE_READY.set_status(pool, "True")
ConditionType.CACHE_READY.is_true(pool)   # True
ConditionType.CACHE_READY.get_status(pool)  # "True"

pool.to_dict()  # back to the dictionary form, using the same field names
```

`set_status` adds the condition when it is missing, stamps its update
time, and changes its transition time only when the status changes.
Empty optional fields are left out of `to_dict()` output.
`VirtualMachineNetworkConfig` works the same way.

## Options from arguments and environment

```python
from vmdhcp.cli import build_controller_options, build_agent_options

controller, controller_flags = build_controller_options(
    ["--namespace", "harvester-system", "--image", "team/agent:v0.3.3"],
    {},
)

agent, agent_flags = build_agent_options(
    ["--ippool-ref", "default/net-48", "--dry-run"],
    {},
)
agent.ippool_ref.name   # "net-48"
agent.nic               # "eth1"
```

Each `build_*_options(argv, environ)` function returns the component's
options together with run settings: `name`, `debug`, `trace`,
`enable_cache_dump_api`, `no_leader_election` and a derived `log_level`
(`"trace"`, `"debug"` or `"info"`). When `argv` or `environ` is omitted,
`sys.argv[1:]` and `os.environ` are used.

Flags fall back to environment variables (`AGENT_NAMESPACE`,
`AGENT_IMAGE`, `AGENT_SERVICE_ACCOUNT_NAME`, `IPPOOL_REF`, `KUBECONFIG`,
`KUBECONTEXT`, `NAMESPACE`, and the `*_NAME`, `*_DEBUG` and `*_TRACE`
variables with the prefixes `VM_DHCP_CONTROLLER`, `VM_DHCP_AGENT` and
`VM_DHCP_WEBHOOK`). Boolean flags may be given bare or with a value, as
in `--dry-run false`. The agent listens on `eth1` unless told otherwise,
and the webhook defaults to HTTPS port 8443, five worker threads and the
service CIDR `10.53.0.0/16`. `env_bool` reads a boolean environment
variable, accepting the usual true/false spellings and falling back to
the given default when the variable is unset or not a boolean.

## What this package does not do

It has no DHCP server, no Kubernetes client, watch loop or leader
election, no admission webhook server and no HTTP API. It installs no
commands: the `vmdhcp.cli` functions only turn arguments into option
objects for code that runs those components.

## Running the tests

Install the `test` extra and run `pytest` from the project root.