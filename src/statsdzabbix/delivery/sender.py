"""External zabbix_sender process wrapper."""

import logging
import subprocess
import threading
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when metrics could not be handed to zabbix_sender."""
    pass


class ZabbixSender:
    """Pipes formatted item lines into a detached ``zabbix_sender`` process.

    ``send`` only spawns the process. Feeding the payload, draining stderr and
    waiting for the exit code happen on a daemon thread, so the caller never
    blocks on the external process. Failures seen on that thread are reported
    through ``on_failure``.
    """

    def __init__(
        self,
        command: List[str],
        on_failure: Optional[Callable[[Exception], None]] = None,
    ):
        """Initialize the sender.

        Args:
            command: Full zabbix_sender command line
            on_failure: Called with a DeliveryError when a detached delivery fails
        """
        self.command = command
        self.on_failure = on_failure
        self._workers: List[threading.Thread] = []

    def send(self, text: str) -> threading.Thread:
        """Start delivering ``text`` and return the detached worker thread.

        Raises:
            DeliveryError: If the process cannot be spawned
        """
        try:
            process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise DeliveryError(f"Could not start {self.command[0]}: {e}") from e

        worker = threading.Thread(
            target=self._feed_and_wait,
            args=(process, text),
            name="zabbix-sender",
            daemon=True,
        )
        worker.start()
        self._workers = [w for w in self._workers if w.is_alive()]
        self._workers.append(worker)
        return worker

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight deliveries; only needed by short-lived processes."""
        for worker in list(self._workers):
            worker.join(timeout)

    def _feed_and_wait(self, process: subprocess.Popen, text: str) -> None:
        try:
            # Feed stdin and drain stderr together
            _, stderr = process.communicate(text)
        except (OSError, ValueError) as e:
            process.kill()
            process.wait()
            self._report(DeliveryError(f"Writing to {self.command[0]} failed: {e}"))
            return

        returncode = process.returncode
        if returncode != 0:
            self._report(DeliveryError(
                f"{self.command[0]} exited with status {returncode}: {(stderr or '').strip()}"
            ))
        else:
            logger.debug(f"{self.command[0]} completed successfully")

    def _report(self, error: DeliveryError) -> None:
        if self.on_failure is not None:
            self.on_failure(error)
        else:
            logger.warning(str(error))
