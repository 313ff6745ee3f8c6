# data.py
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict

from errors import ScanOutputError

logger = logging.getLogger(__name__)

def parse_scan_report(xml_data: str) -> Dict:
    """Parses nmap XML (-oX) output into the raw report consumed by the normalizer.

    Args:
        xml_data (str): The XML document.

    Returns:
        Dict: {'hosts': [{'status': str | None, 'addresses': [dict, ...]}, ...]}.

    Raises:
        ScanOutputError: if the document is not well-formed or not an nmap report.
    """
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as err:
        raise ScanOutputError(f"XML parsing error: {err}") from err

    if root.tag != "nmaprun":
        raise ScanOutputError(f"Unexpected root element <{root.tag}>, expected <nmaprun>")

    hosts = []
    for host_elem in root.findall("host"):
        status_elem = host_elem.find("status")
        hosts.append({
            "status": status_elem.get("state") if status_elem is not None else None,
            "addresses": [dict(addr_elem.attrib) for addr_elem in host_elem.findall("address")],
        })
    logger.debug("Found %d host(s) in nmap output", len(hosts))
    return {"hosts": hosts}

def load_scan_report(xml_file: Path) -> Dict:
    """Reads and parses the nmap XML report at xml_file.

    Raises:
        ScanOutputError: if the file is absent, unreadable or unparseable.
    """
    try:
        with Path(xml_file).open("r", encoding="utf-8") as file:
            xml_data = file.read()
    except (OSError, UnicodeDecodeError) as err:
        raise ScanOutputError(f"Cannot read scan report {xml_file}: {err}") from err
    return parse_scan_report(xml_data)
