# device.py
from dataclasses import dataclass
from typing import FrozenSet, Optional

NO_SECONDARY_MARKER = "No MAC"
UNKNOWN_VENDOR = "Unknown"

@dataclass(frozen=True)
class HostIdentity:
    primary: str  # e.g. the IPv4 address
    secondary: Optional[str] = None  # e.g. the hardware address
    vendor: Optional[str] = None  # only meaningful together with secondary

    def __post_init__(self):
        # Equal display strings must mean equal identities.
        vendor = None if self.secondary is None else (self.vendor or UNKNOWN_VENDOR)
        object.__setattr__(self, "vendor", vendor)

    def __str__(self) -> str:
        if self.secondary is None:
            return f"{self.primary} ({NO_SECONDARY_MARKER})"
        return f"{self.primary} ({self.secondary} - {self.vendor})"

ScanReport = FrozenSet[HostIdentity]
EMPTY_REPORT: ScanReport = frozenset()
