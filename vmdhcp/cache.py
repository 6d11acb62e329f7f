"""Thread-safe per-network cache of MAC address to IP address mappings."""

from __future__ import annotations

import ipaddress
import threading
from typing import Optional, Union

_IP = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
_INVALID_IP = "<nil>"


class NetworkNotFoundError(LookupError):
    """Raised when a network has no MAC set in the cache."""

    def __init__(self, name: str) -> None:
        super().__init__(f"network {name} does not exist")
        self.name = name


class MACNotFoundError(LookupError):
    """Raised when a MAC address is not recorded for a network."""

    def __init__(self, name: str, mac_address: str) -> None:
        super().__init__(f"mac {mac_address} not found in network {name}")
        self.name = name
        self.mac_address = mac_address


def _parse_ip(text: str) -> Optional[_IP]:
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _format_ip(ip: Optional[_IP]) -> str:
    if ip is None:
        return _INVALID_IP
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return str(ip.ipv4_mapped)
    return str(ip)


class CacheAllocator:
    """Records which IP address each MAC address holds, per network."""

    def __init__(self) -> None:
        self._cache: dict[str, dict[str, Optional[_IP]]] = {}
        self._lock = threading.RLock()

    def _macs(self, name: str) -> dict[str, Optional[_IP]]:
        try:
            return self._cache[name]
        except KeyError:
            raise NetworkNotFoundError(name) from None

    def new_mac_set(self, name: str) -> None:
        """Create an empty MAC set for a network, replacing any existing one."""
        with self._lock:
            self._cache[name] = {}

    def delete_mac_set(self, name: str) -> None:
        """Drop a network's MAC set; missing networks are ignored."""
        with self._lock:
            self._cache.pop(name, None)

    def add_mac(self, name: str, mac_address: str, ip_address: str) -> None:
        """Record ``mac_address`` as holding ``ip_address`` in a network."""
        with self._lock:
            self._macs(name)[mac_address] = _parse_ip(ip_address)

    def delete_mac(self, name: str, mac_address: str) -> None:
        """Forget a MAC address in a network; an unknown MAC is ignored."""
        with self._lock:
            self._macs(name).pop(mac_address, None)

    def has_mac(self, name: str, mac_address: str) -> bool:
        """Whether a MAC address is recorded in a network."""
        with self._lock:
            return mac_address in self._macs(name)

    def get_ip_by_mac(self, name: str, mac_address: str) -> str:
        """Return the IP address recorded for a MAC address."""
        with self._lock:
            macs = self._macs(name)
            if mac_address not in macs:
                raise MACNotFoundError(name, mac_address)
            return _format_ip(macs[mac_address])

    def list_all(self, name: str) -> dict[str, str]:
        """Return a copy of a network's MAC to IP mapping."""
        with self._lock:
            return {mac: _format_ip(ip) for mac, ip in self._macs(name).items()}


class CacheAllocatorBuilder:
    """Fluent builder for a populated CacheAllocator."""

    def __init__(self) -> None:
        self._allocator = CacheAllocator()

    def mac_set(self, name: str) -> CacheAllocatorBuilder:
        self._allocator.new_mac_set(name)
        return self

    def add(self, name: str, mac_address: str, ip_address: str) -> CacheAllocatorBuilder:
        try:
            self._allocator.add_mac(name, mac_address, ip_address)
        except NetworkNotFoundError:
            pass
        return self

    def build(self) -> CacheAllocator:
        return self._allocator