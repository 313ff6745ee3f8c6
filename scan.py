# scan.py
import sys

from mac_vendor_lookup import MacLookup

from network_scanner import load_settings, make_vendor_lookup
from normalizer import normalize
from scanners import get_scanner
from errors import ScanError

def main():
    """Simple script to run one scan and display the hosts that are up."""

    config = load_settings()
    general = config.general
    scanner = get_scanner(config)  # Use the factory
    try:
        raw_report = scanner.scan()
    except ScanError as e:
        print(f"Scan failed: {e}", file=sys.stderr)
        sys.exit(1)

    vendor_lookup = make_vendor_lookup(MacLookup()) if general.get("resolve_vendors", False) else None
    hosts = normalize(raw_report, general.get("primary_addrtype", "ipv4"),
                      general.get("secondary_addrtype", "mac"), vendor_lookup)
    for host in sorted(hosts, key=str):
        print(host)

if __name__ == "__main__":
    main()
