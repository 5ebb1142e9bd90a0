"""Mapping of flat statsd metric keys onto Zabbix hosts and item keys."""

import logging
from typing import Optional

from .models import AllowList, RoutedKey

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "."
LOGSTASH_NAMESPACE = "logstash"


class KeyRouter:
    """Routes metric keys to (host, item key) pairs, applying the allow-list."""

    def __init__(self, allow_list: Optional[AllowList] = None):
        """Initialize the router.

        Args:
            allow_list: Optional allow-list. When None, every key is routed.
        """
        self.allow_list = allow_list

    def is_allowed(self, key: str) -> bool:
        """Check a key against the allow-list (everything passes without one)."""
        if self.allow_list is None:
            return True
        return self.allow_list.allows(key)

    def route(self, key: str) -> Optional[RoutedKey]:
        """Split a metric key into its Zabbix host and item key.

        Two addressing schemes are supported:

        - ``logstash.<host>.<item>``: exactly three segments under the logstash
          namespace. Logstash cannot put dots into these segments, so
          underscores in host and item are turned back into dots.
        - ``<host>.<item...>``: the first segment is the host and the rest of
          the key is the item key, dots included.

        Keys that leave the host or the item key empty (``".load"``, ``"web01"``)
        are dropped, since Zabbix rejects items without a host or key.

        Args:
            key: Flat metric key as reported by statsd

        Returns:
            RoutedKey, or None if the key is filtered out or malformed
        """
        if not self.is_allowed(key):
            return None

        segments = key.split(KEY_SEPARATOR)

        if len(segments) == 3 and segments[0] == LOGSTASH_NAMESPACE:
            host = segments[1].replace("_", KEY_SEPARATOR)
            item_key = segments[2].replace("_", KEY_SEPARATOR)
        else:
            host = segments[0]
            item_key = key[len(host) + 1:]

        if not host or not item_key:
            logger.debug(f"Dropping malformed metric key {key!r}")
            return None

        return RoutedKey(host=host, item_key=item_key)
