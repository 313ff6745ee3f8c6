# scanners/base.py
from abc import ABC, abstractmethod
from typing import Dict, List

class BaseScanner(ABC):
    """Abstract base class for discovering the hosts on a network segment."""

    def __init__(self, target: str, xml_file: str):
        self.target = target
        self.xml_file = xml_file

    def build_command(self, nmap_cmd: List[str]) -> List[str]:
        """Ping scan without DNS resolution, XML report written to xml_file."""
        return [*nmap_cmd, "-sn", "-n", "-oX", self.xml_file, self.target]

    @abstractmethod
    def scan(self) -> Dict:
        """Runs one scan of the target.

        Returns:
            The raw report: {'hosts': [{'status': ..., 'addresses': [...]}, ...]}.

        Raises:
            ScanInvocationError: if the scanner could not be run.
            ScanOutputError: if its report could not be read.
        """
        pass
