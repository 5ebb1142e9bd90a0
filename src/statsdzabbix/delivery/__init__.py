"""Metrics delivery to Zabbix."""

from .invoker import DeliveryInvoker, Sender
from .models import DeliveryStatus
from .sender import DeliveryError, ZabbixSender

__all__ = ["DeliveryInvoker", "DeliveryStatus", "DeliveryError", "Sender", "ZabbixSender"]
