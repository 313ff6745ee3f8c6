# network_scanner.py
import argparse
import logging
import signal
import threading
from typing import Callable, Optional

from dynaconf import Dynaconf
from mac_vendor_lookup import MacLookup

from device import EMPTY_REPORT, ScanReport
from errors import ScanError
from normalizer import VendorLookup, normalize
from notifier import BaseNotifier, DesktopNotifier
from presence import build_report, diff, publish
from scanners import BaseScanner, get_scanner
from utils import format_mac

SETTINGS_FILE = 'config/settings.toml'

COMMIT_EMPTY = "commit_empty"
RETAIN = "retain"

logger = logging.getLogger(__name__)

def load_settings(settings_file: str = SETTINGS_FILE) -> Dynaconf:
    """Loads settings from settings_file, overridable by NETWATCH_* environment variables."""
    return Dynaconf(
        envvar_prefix="NETWATCH",
        settings_files=[settings_file],
    )

def make_vendor_lookup(mac_lookup: MacLookup) -> VendorLookup:
    """Wraps a MacLookup into a normalizer vendor lookup that returns None on a miss."""
    def lookup(mac: str) -> Optional[str]:
        try:
            return mac_lookup.lookup(format_mac(mac))
        except Exception as e:  # pylint: disable=broad-except
            logger.debug(f"Could not determine vendor for MAC {mac}: {e}")
            return None
    return lookup

def get_notifier(config: Dynaconf) -> Optional[BaseNotifier]:
    """Returns the configured notifier, or None when notifications are disabled."""
    notify = config.get("notify") or {}
    if not notify.get("enabled", True):
        return None
    return DesktopNotifier(
        command=notify.get("command", "notify-send"),
        expire_ms=notify.get("expire_ms", 5000),
        timeout=notify.get("timeout", 10),
    )

def run_cycle(previous: ScanReport, scanner: BaseScanner, notifier: Optional[BaseNotifier],
              primary_type: str = "ipv4", secondary_type: str = "mac",
              vendor_lookup: Optional[VendorLookup] = None,
              on_scan_failure: str = COMMIT_EMPTY,
              stop_event: Optional[threading.Event] = None) -> ScanReport:
    """Runs one scan-normalize-diff-report pass.

    Args:
        previous: Hosts observed by the last completed cycle.
        scanner: Produces the raw report.
        notifier: Receives change notifications; None disables them.
        on_scan_failure: COMMIT_EMPTY treats a failed scan as an empty network,
            so every known host is reported as departed. RETAIN skips the
            diff and keeps `previous`.
        stop_event: Once set, a failed scan is taken as interrupted by the
            shutdown and `previous` is kept whatever on_scan_failure says.

    Returns:
        The state for the next cycle.
    """
    try:
        raw_report = scanner.scan()
    except ScanError as e:
        if stop_event is not None and stop_event.is_set():
            logger.info(f"Scan interrupted by shutdown: {e}")
            return previous
        logger.error(f"Scan failed: {e}")
        if on_scan_failure == RETAIN:
            logger.warning(f"Keeping the previous {len(previous)} hosts until the next successful scan.")
            return previous
        raw_report = {}

    current = normalize(raw_report, primary_type, secondary_type, vendor_lookup)
    change_set = diff(previous, current)
    publish(build_report(change_set, len(current)), notifier)
    return current

def run_monitor(scanner: BaseScanner, notifier: Optional[BaseNotifier], interval: float,
                stop_event: Optional[threading.Event] = None,
                cycle: Callable[..., ScanReport] = run_cycle, **cycle_kwargs) -> ScanReport:
    """Runs cycles until stop_event is set. Returns the last committed state.

    The first cycle starts immediately to establish the baseline. The wait for
    the next one starts only after a cycle has finished, so cycles never overlap.
    """
    stop_event = stop_event or threading.Event()
    state = EMPTY_REPORT

    while not stop_event.is_set():
        try:
            state = cycle(state, scanner, notifier, stop_event=stop_event, **cycle_kwargs)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error during scan cycle; keeping previous state.")
        logger.info(f"Scan complete. Next scan in {interval:g} seconds.")
        stop_event.wait(interval)

    logger.info("Network monitor stopped.")
    return state

def install_signal_handlers(stop_event: threading.Event) -> None:
    """Stops the monitor loop on SIGINT/SIGTERM once the running cycle completes."""
    def handle(signum, _frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down.")
        stop_event.set()

    signal.signal(signal.SIGINT, handle)
    signal.signal(signal.SIGTERM, handle)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Network presence monitor")
    parser.add_argument("--settings", default=SETTINGS_FILE, help="Path to the settings file")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument("--update-mac-db", action="store_true", help="Force update of the MAC vendor database")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    config = load_settings(args.settings)
    general = config.general

    if args.update_mac_db:
        # Update the database if requested.
        MacLookup().update_vendors()

    vendor_lookup = make_vendor_lookup(MacLookup()) if general.get("resolve_vendors", False) else None
    cycle_kwargs = dict(
        primary_type=general.get("primary_addrtype", "ipv4"),
        secondary_type=general.get("secondary_addrtype", "mac"),
        vendor_lookup=vendor_lookup,
        on_scan_failure=general.get("on_scan_failure", COMMIT_EMPTY),
    )
    if cycle_kwargs["on_scan_failure"] not in (COMMIT_EMPTY, RETAIN):
        raise ValueError(f"Unsupported on_scan_failure policy: {cycle_kwargs['on_scan_failure']}")
    scanner = get_scanner(config)
    notifier = get_notifier(config)

    if args.once:
        run_cycle(EMPTY_REPORT, scanner, notifier, **cycle_kwargs)
        return

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    logger.info("Starting network monitor. Running initial scan...")
    run_monitor(scanner, notifier, general.get("scan_interval", 300), stop_event, **cycle_kwargs)

if __name__ == "__main__":
    main()
