"""Exception types raised by the docsync core."""

from __future__ import annotations


class WellFormednessFailure(Exception):
    """Raised when a document is too broken to yield a trustworthy tree.

    The parser catches this at the top level and reports "no tree" instead of
    returning a partial structure.
    """


class NestingTooDeep(WellFormednessFailure):
    def __init__(self, max_depth: int, offset: int) -> None:
        super().__init__(f"nesting deeper than {max_depth} levels at offset {offset}")
        self.max_depth = max_depth
        self.offset = offset


class UnknownItemError(KeyError):
    """Raised by reverse lookups for ids that are not part of the tree."""


class ConfigError(ValueError):
    """Raised when a YAML configuration file cannot be validated."""


__all__ = ["ConfigError", "NestingTooDeep", "UnknownItemError", "WellFormednessFailure"]
