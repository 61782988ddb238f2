from __future__ import annotations

import ipaddress
import logging
import socket
from dataclasses import dataclass
from typing import Any, Optional

import psutil

logger = logging.getLogger(__name__)

FALLBACK_HOST = "localhost"


@dataclass(frozen=True, slots=True)
class NetworkInterface:
    name: str
    address: str
    netmask: Optional[str]
    mac: Optional[str]
    internal: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "internal": self.internal,
            "netmask": self.netmask,
        }


def list_ipv4_interfaces() -> list[NetworkInterface]:
    interfaces: list[NetworkInterface] = []
    for name, addrs in psutil.net_if_addrs().items():
        mac = next((a.address for a in addrs if a.family == psutil.AF_LINK), None)
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            interfaces.append(
                NetworkInterface(
                    name=name,
                    address=addr.address,
                    netmask=addr.netmask,
                    mac=mac,
                    internal=ipaddress.ip_address(addr.address).is_loopback,
                )
            )
    return interfaces


def interface_priority(address: str, name: str) -> int:
    # private LAN ranges first, then by interface kind
    if address.startswith("192.168."):
        return 100
    if address.startswith("10."):
        return 90
    if address.startswith("172."):
        return 80

    lowered = name.lower()
    if "wifi" in lowered or "wireless" in lowered:
        return 70
    if "ethernet" in lowered or "eth" in lowered:
        return 60
    return 50


def detect_local_ip(interfaces: Optional[list[NetworkInterface]] = None) -> str:
    """Best LAN address other devices can reach us on, or "localhost" when there is none."""
    if interfaces is None:
        interfaces = list_ipv4_interfaces()
    candidates = [i for i in interfaces if not i.internal]
    if not candidates:
        return FALLBACK_HOST
    best = max(candidates, key=lambda i: interface_priority(i.address, i.name))
    return best.address


def network_status() -> dict[str, Any]:
    try:
        all_interfaces = psutil.net_if_addrs()
        has_network = any(not i.internal for i in list_ipv4_interfaces())
    except Exception as e:
        logger.warning("Network detection failed: %s", e)
        return {"hasNetwork": False, "error": str(e), "status": "Network detection failed"}

    return {
        "hasNetwork": has_network,
        "interfaceCount": len(all_interfaces),
        "status": "Connected" if has_network else "No network detected",
    }


def interfaces_by_name(interfaces: Optional[list[NetworkInterface]] = None) -> list[dict[str, Any]]:
    if interfaces is None:
        interfaces = list_ipv4_interfaces()
    grouped: dict[str, list[dict[str, Any]]] = {}
    for iface in interfaces:
        grouped.setdefault(iface.name, []).append(iface.to_dict())
    return [{"name": name, "addresses": addresses} for name, addresses in grouped.items()]


def log_network_info(port: int, interfaces: Optional[list[NetworkInterface]] = None) -> None:
    if interfaces is None:
        interfaces = list_ipv4_interfaces()
    external = [i for i in interfaces if not i.internal]
    if not external:
        logger.warning("No external network interfaces found, only local access is available")
        return
    for iface in external:
        logger.info("Interface %s: %s (%s) -> http://%s:%s", iface.name, iface.address, iface.mac or "no mac", iface.address, port)
