# presence.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from device import HostIdentity, ScanReport
from errors import NotificationDeliveryError
from notifier import BaseNotifier

logger = logging.getLogger(__name__)

NEW_DEVICES_TITLE = "Network: New Devices"
DEVICES_LEFT_TITLE = "Network: Devices Left"

@dataclass(frozen=True)
class ChangeSet:
    arrivals: Tuple[HostIdentity, ...]
    departures: Tuple[HostIdentity, ...]
    is_first_cycle: bool

    @property
    def has_changes(self) -> bool:
        return bool(self.arrivals or self.departures)

@dataclass(frozen=True)
class Notification:
    title: str
    body: str

@dataclass
class ChangeReport:
    log_lines: List[str] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)

def _ordered(hosts) -> Tuple[HostIdentity, ...]:
    return tuple(sorted(hosts, key=str))

def diff(previous: ScanReport, current: ScanReport) -> ChangeSet:
    """Compares two observations. The first cycle is the one with nothing observed before it."""
    return ChangeSet(
        arrivals=_ordered(host for host in current if host not in previous),
        departures=_ordered(host for host in previous if host not in current),
        is_first_cycle=not previous,
    )

def build_report(change_set: ChangeSet, current_count: int) -> ChangeReport:
    """Decides what to log and what to notify for one cycle.

    Logging always happens. Notifications are withheld on the first cycle, where
    every host already on the network shows up as an arrival, and otherwise
    batched into at most one notification per direction.
    """
    report = ChangeReport()

    if change_set.has_changes:
        report.log_lines.extend(f"New device: {host}" for host in change_set.arrivals)
        report.log_lines.extend(f"Device left: {host}" for host in change_set.departures)
    else:
        report.log_lines.append(f"No changes. {current_count} hosts active.")

    if change_set.is_first_cycle:
        return report

    if change_set.arrivals:
        hosts = "\n".join(str(host) for host in change_set.arrivals)
        report.notifications.append(Notification(
            NEW_DEVICES_TITLE, f"Found {len(change_set.arrivals)} new device(s):\n{hosts}"))
    if change_set.departures:
        hosts = "\n".join(str(host) for host in change_set.departures)
        report.notifications.append(Notification(
            DEVICES_LEFT_TITLE, f"{len(change_set.departures)} device(s) left:\n{hosts}"))
    return report

def publish(report: ChangeReport, notifier: Optional[BaseNotifier]) -> int:
    """Logs the report and delivers its notifications. Returns how many were delivered."""
    for line in report.log_lines:
        logger.info(line)

    delivered = 0
    for notification in report.notifications:
        if notifier is None:
            logger.debug(f"Notifications disabled, dropping: {notification.title}")
            continue
        try:
            notifier.send(notification.title, notification.body)
            delivered += 1
        except NotificationDeliveryError as e:
            logger.error(f"Failed to send notification '{notification.title}': {e}")
    return delivered
