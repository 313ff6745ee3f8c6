# errors.py

class ScanError(Exception):
    """A scan cycle produced no usable report."""

class ScanInvocationError(ScanError):
    """The scanner failed to start, timed out or exited non-zero."""

class ScanOutputError(ScanError):
    """The scanner's report is missing, unreadable or structurally invalid."""

class NotificationDeliveryError(Exception):
    """The notification could not be handed to the desktop."""
