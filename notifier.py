# notifier.py
import logging
import subprocess
from abc import ABC, abstractmethod

from errors import NotificationDeliveryError

logger = logging.getLogger(__name__)

class BaseNotifier(ABC):
    """Abstract base class for fire-and-forget notification delivery."""

    @abstractmethod
    def send(self, title: str, body: str) -> None:
        """Shows a notification. Body may contain line breaks.

        Raises:
            NotificationDeliveryError: if the notification could not be delivered.
        """
        pass

class DesktopNotifier(BaseNotifier):
    """Implementation of BaseNotifier using notify-send."""

    def __init__(self, command: str = "notify-send", expire_ms: int = 5000, timeout: int = 10):
        self.command = command
        self.expire_ms = expire_ms
        self.timeout = timeout

    def send(self, title: str, body: str) -> None:
        # Arguments are passed as a list, so quotes and newlines in the body need no escaping.
        cmd = [self.command, "-t", str(self.expire_ms), title, body]
        try:
            subprocess.run(cmd, check=True, capture_output=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise NotificationDeliveryError(f"Command '{self.command}' not found") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise NotificationDeliveryError(f"{self.command} exited with {e.returncode}: {stderr}") from e
        except (subprocess.TimeoutExpired, OSError) as e:
            raise NotificationDeliveryError(str(e)) from e
        logger.debug(f"Sent notification: {title}")
