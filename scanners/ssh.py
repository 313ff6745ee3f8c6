# scanners/ssh.py
import logging
import shlex
import socket
from typing import Dict, List, Optional

import paramiko

from data import parse_scan_report
from errors import ScanInvocationError, ScanOutputError
from utils import SSHClient
from .base import BaseScanner

logger = logging.getLogger(__name__)

class RemoteNmapScanner(BaseScanner):
    """Implementation of BaseScanner running nmap on a host inside the segment, over SSH."""

    def __init__(self, target: str, xml_file: str, host: str, user: str,
                 nmap_cmd: Optional[List[str]] = None, ssh_timeout: int = 10,
                 scan_timeout: float = 240):
        super().__init__(target, xml_file)
        self.host = host
        self.user = user
        self.nmap_cmd = list(nmap_cmd or ["nmap"])
        self.ssh_timeout = ssh_timeout
        self.scan_timeout = scan_timeout

    def scan(self) -> Dict:
        command = shlex.join(self.build_command(self.nmap_cmd))
        logger.info(f"Scanning {self.target} from {self.user}@{self.host}...")
        ssh_client = SSHClient(hostname=self.host, username=self.user, timeout=self.ssh_timeout)
        try:
            ssh_client.connect()
            exit_status, _, error = ssh_client.execute_command(command, timeout=self.scan_timeout)
            if exit_status != 0:
                raise ScanInvocationError(f"Remote nmap exited with {exit_status}: {error}")
            try:
                xml_data = ssh_client.read_file(self.xml_file)
            except (OSError, UnicodeDecodeError) as e:
                raise ScanOutputError(f"Cannot read {self.host}:{self.xml_file}: {e}") from e
        except (paramiko.SSHException, socket.timeout, OSError, EOFError) as e:
            raise ScanInvocationError(f"SSH to {self.host} failed: {e}") from e
        finally:
            ssh_client.close()
        return parse_scan_report(xml_data)
