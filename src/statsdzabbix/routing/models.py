"""Data models for metric key routing."""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class RoutedKey:
    """A metric key split into the Zabbix (host, item key) addressing scheme."""

    host: str
    item_key: str


@dataclass(frozen=True)
class LiteralEntry:
    """Allow-list entry that matches one metric key exactly."""

    value: str

    def matches(self, key: str) -> bool:
        return key == self.value


@dataclass(frozen=True)
class PatternEntry:
    """Allow-list entry that matches metric keys against a regular expression."""

    pattern: "re.Pattern[str]"

    def matches(self, key: str) -> bool:
        # Unanchored, like String.prototype.match on the statsd side
        return self.pattern.search(key) is not None


AllowListEntry = Union[LiteralEntry, PatternEntry]


@dataclass(frozen=True)
class AllowList:
    """Ordered set of entries deciding which metric keys reach Zabbix.

    Entries are evaluated in insertion order and the first match wins. A key
    that matches no entry is dropped from the flush entirely.
    """

    entries: Tuple[AllowListEntry, ...]

    def allows(self, key: str) -> bool:
        return any(entry.matches(key) for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def from_config(cls, items: Optional[Iterable[Any]]) -> Optional["AllowList"]:
        """Build an allow-list from configuration values.

        Args:
            items: Iterable of allow-list items. Supported forms:
                - plain string: exact-match literal ('myhost.some.item')
                - slash-wrapped string: regular expression ('/^statsd/',
                  optionally with i, m or s flags: '/^statsd/i')
                - mapping with a 'pattern' key: regular expression
                - compiled ``re.Pattern``

        Returns:
            An AllowList, or None when no allow-list is configured
        """
        if items is None:
            return None

        return cls(entries=tuple(parse_allow_list_entry(item) for item in items))


SLASH_PATTERN = re.compile(r"^/(.*)/([a-z]*)$", re.DOTALL)

# Flags accepted after a slash-wrapped pattern ("/^statsd/i")
PATTERN_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


def compile_slash_pattern(item: str) -> Optional["re.Pattern[str]"]:
    """Compile a ``/pattern/flags`` string, or return None for other strings.

    Raises:
        ValueError: On flags that have no Python equivalent
    """
    match = SLASH_PATTERN.match(item)
    if match is None:
        return None

    source, flag_chars = match.groups()
    flags = 0
    for char in flag_chars:
        if char not in PATTERN_FLAGS:
            raise ValueError(f"Unsupported pattern flag {char!r} in {item!r}")
        flags |= PATTERN_FLAGS[char]
    return re.compile(source, flags)


def parse_allow_list_entry(item: Any) -> AllowListEntry:
    """Convert a single configuration value into an allow-list entry."""
    if isinstance(item, re.Pattern):
        return PatternEntry(item)

    if isinstance(item, dict):
        if "pattern" not in item:
            raise ValueError(f"Allow-list mapping entry needs a 'pattern' key: {item!r}")
        return PatternEntry(re.compile(item["pattern"]))

    if isinstance(item, str):
        pattern = compile_slash_pattern(item)
        if pattern is not None:
            return PatternEntry(pattern)
        return LiteralEntry(item)

    raise ValueError(f"Unsupported allow-list entry: {item!r}")
