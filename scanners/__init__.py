# scanners/__init__.py
from .base import BaseScanner
from .local import LocalNmapScanner
from .ssh import RemoteNmapScanner  # Import all concrete implementations

def get_scanner(config) -> BaseScanner:
    """Scanner factory: returns an instance of the configured scanner class."""

    general = config.general
    scanner_type = general.get("scanner_type", "local")

    if scanner_type == "local":
        local = config.get("local") or {}
        return LocalNmapScanner(
            general.scan_target,
            general.xml_file,
            nmap_cmd=local.get("nmap_cmd"),
            scan_timeout=local.get("scan_timeout", 240),
        )
    elif scanner_type == "ssh":
        ssh = config.ssh
        return RemoteNmapScanner(
            general.scan_target,
            ssh.get("remote_xml_file", general.xml_file),
            host=ssh.host,
            user=ssh.user,
            nmap_cmd=ssh.get("nmap_cmd"),
            ssh_timeout=ssh.get("ssh_timeout", 10),
            scan_timeout=ssh.get("scan_timeout", 240),
        )
    else:
        raise ValueError(f"Unsupported scanner type: {scanner_type}")
