"""Backend orchestration module."""

from .backend import BACKEND_NAME, ZabbixBackend

__all__ = ["BACKEND_NAME", "ZabbixBackend"]
