# normalizer.py
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from device import HostIdentity, ScanReport, UNKNOWN_VENDOR

logger = logging.getLogger(__name__)

VendorLookup = Callable[[str], Optional[str]]

def _as_list(value: Any) -> List:
    """A single mapping counts as a one-element list, anything else that isn't a list as empty."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return []

def _first_address(addresses: Iterable[Dict], addrtype: str) -> Optional[Dict]:
    for address in addresses:
        addr = address.get("addr")
        if address.get("addrtype") == addrtype and isinstance(addr, str) and addr:
            return address
    return None

def _resolve_vendor(address: Dict, vendor_lookup: Optional[VendorLookup]) -> str:
    vendor = address.get("vendor")
    if isinstance(vendor, str) and vendor:
        return vendor
    if vendor_lookup:
        try:
            vendor = vendor_lookup(address["addr"])
        except Exception as e:  # pylint: disable=broad-except
            logger.debug(f"Vendor lookup failed for {address['addr']}: {e}")
            vendor = None
    return vendor if isinstance(vendor, str) and vendor else UNKNOWN_VENDOR

def normalize_host(host: Any, primary_type: str = "ipv4", secondary_type: str = "mac",
                   vendor_lookup: Optional[VendorLookup] = None) -> Optional[HostIdentity]:
    """Builds the identity of one host entry, or None if the host is down or unidentifiable."""
    if not isinstance(host, dict) or host.get("status") != "up":
        return None

    addresses = [a for a in _as_list(host.get("addresses")) if isinstance(a, dict)]
    primary = _first_address(addresses, primary_type)
    if primary is None:
        logger.debug(f"Skipping host without a {primary_type} address: {addresses}")
        return None

    secondary = _first_address(addresses, secondary_type)
    if secondary is None:
        return HostIdentity(primary["addr"])
    return HostIdentity(primary["addr"], secondary["addr"], _resolve_vendor(secondary, vendor_lookup))

def normalize(raw_report: Any, primary_type: str = "ipv4", secondary_type: str = "mac",
              vendor_lookup: Optional[VendorLookup] = None) -> ScanReport:
    """Turns a raw scan report into the set of identities of the hosts that are up.

    Args:
        raw_report: Mapping with a 'hosts' list; each host has a 'status' and a
            list of 'addresses' ({'addr', 'addrtype', 'vendor'}).
        primary_type: Address type that identifies a host. Hosts without one are dropped.
        secondary_type: Optional address type folded into the identity.
        vendor_lookup: Called with the secondary address when the report carries no vendor.

    Returns:
        A frozenset of HostIdentity. Malformed input yields an empty set, never an error.
    """
    if not isinstance(raw_report, dict):
        return frozenset()

    identities = set()
    for host in _as_list(raw_report.get("hosts")):
        identity = normalize_host(host, primary_type, secondary_type, vendor_lookup)
        if identity is not None:
            identities.add(identity)
    return frozenset(identities)
