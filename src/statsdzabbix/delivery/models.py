"""Data models for delivery bookkeeping."""

from dataclasses import dataclass


@dataclass
class DeliveryStatus:
    """Backend status reported through the statsd status hook.

    Lives for the whole process; overlapping deliveries may race on
    ``last_exception`` and the last writer wins.
    """

    last_flush: int
    last_exception: int
    failures: int = 0

    def as_dict(self) -> dict:
        return {
            "last_flush": self.last_flush,
            "last_exception": self.last_exception,
        }
