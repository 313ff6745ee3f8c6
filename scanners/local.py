# scanners/local.py
import logging
import subprocess
from typing import Dict, List, Optional

from data import load_scan_report
from errors import ScanInvocationError
from .base import BaseScanner

logger = logging.getLogger(__name__)

class LocalNmapScanner(BaseScanner):
    """Implementation of BaseScanner running nmap on this machine."""

    def __init__(self, target: str, xml_file: str, nmap_cmd: Optional[List[str]] = None,
                 scan_timeout: float = 240):
        super().__init__(target, xml_file)
        self.nmap_cmd = list(nmap_cmd or ["nmap"])
        self.scan_timeout = scan_timeout

    def scan(self) -> Dict:
        cmd = self.build_command(self.nmap_cmd)
        logger.info(f"Scanning {self.target}...")
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, capture_output=True, timeout=self.scan_timeout)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise ScanInvocationError(f"nmap exited with {e.returncode}: {stderr}") from e
        except subprocess.TimeoutExpired as e:
            raise ScanInvocationError(f"nmap did not finish within {self.scan_timeout}s") from e
        except OSError as e:
            raise ScanInvocationError(f"Could not start {cmd[0]}: {e}") from e
        return load_scan_report(self.xml_file)
