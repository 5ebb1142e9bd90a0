"""Fire-and-forget delivery of formatted metrics."""

import logging
import time
from typing import Optional, Protocol

from ..config import BackendConfig
from .models import DeliveryStatus
from .sender import DeliveryError, ZabbixSender

logger = logging.getLogger(__name__)


class Sender(Protocol):
    """Anything that can take a zabbix_sender payload."""

    def send(self, text: str) -> object:
        ...


class DeliveryInvoker:
    """Hands formatted text to a sender without letting failures escape.

    Failures are recorded as ``status.last_exception`` and logged; they are
    never retried and never raised to the flush caller.
    """

    def __init__(
        self,
        config: BackendConfig,
        status: DeliveryStatus,
        sender: Optional[Sender] = None,
    ):
        """Initialize the invoker.

        Args:
            config: Backend configuration
            status: Status record updated on failure
            sender: Optional sender replacing the zabbix_sender process
        """
        self.config = config
        self.status = status
        if sender is None and config.delivery_enabled:
            sender = ZabbixSender(config.sender_command(), on_failure=self.record_failure)
        self.sender = sender

    @property
    def enabled(self) -> bool:
        return self.config.delivery_enabled and self.sender is not None

    def deliver(self, text: str) -> None:
        """Send ``text`` to Zabbix; a no-op when no Zabbix host is configured."""
        if not self.enabled:
            return

        if self.config.debug:
            logger.debug(f"Sending to Zabbix:\n{text}")

        try:
            self.sender.send(text)
        except (DeliveryError, OSError) as e:
            self.record_failure(e)
        except Exception as e:
            # Delivery problems must never reach the flush caller
            logger.exception("Unexpected error from Zabbix sender")
            self.record_failure(e)

    def record_failure(self, error: Exception) -> None:
        """Record a failed delivery; also used as the detached sender callback."""
        self.status.last_exception = int(round(time.time()))
        self.status.failures += 1
        if self.config.debug:
            logger.debug(f"Zabbix delivery failed: {error}")
        else:
            logger.warning(f"Zabbix delivery failed: {error}")

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for detached deliveries started by the default sender."""
        if isinstance(self.sender, ZabbixSender):
            self.sender.join(timeout)
