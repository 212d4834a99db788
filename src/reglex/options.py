"""Lexer properties: the two folding switches and their string interface.

Hosts talk to the lexer through string keys and string values, the way
editor property files do::

    option_set = build_option_set()
    opts = RegistryOptions()
    option_set.property_set(opts, "fold", "1")
    option_set.property_get("fold")      # "1"
    option_set.property_set(opts, "tab.size", "4")  # False: not a property

Config files map onto the same keys via options_from_dict().
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from reglex.errors import ConfigError

logger = logging.getLogger(__name__)


class PropertyType(IntEnum):
    BOOLEAN = 0


@dataclass(slots=True)
class RegistryOptions:
    """Current option values for one lexer instance."""

    fold: bool = False
    fold_compact: bool = False


@dataclass(frozen=True, slots=True)
class _Property:
    name: str
    attr: str
    type: PropertyType
    description: str


_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(value: str) -> int:
    """Parse a leading integer the way C atoi does: junk after it is ignored, no digits is 0."""
    m = _ATOI.match(value)
    return int(m.group(1)) if m else 0


class OptionSet:
    """Named, typed, described properties backed by RegistryOptions fields."""

    def __init__(self) -> None:
        self._properties: dict[str, _Property] = {}
        self._values: dict[str, str] = {}

    def define_property(
        self, name: str, attr: str, description: str = "", type: PropertyType = PropertyType.BOOLEAN
    ) -> None:
        self._properties[name] = _Property(name, attr, type, description)
        self._values[name] = ""

    def property_names(self) -> str:
        """Newline-separated property names in definition order."""
        return "\n".join(self._properties)

    def property_type(self, name: str) -> PropertyType | None:
        prop = self._properties.get(name)
        return prop.type if prop is not None else None

    def describe_property(self, name: str) -> str | None:
        prop = self._properties.get(name)
        return prop.description if prop is not None else None

    def property_set(self, options: RegistryOptions, name: str, value: str | bool) -> bool:
        """Set a property from its string form. Returns False for an unknown name."""
        prop = self._properties.get(name)
        if prop is None:
            logger.debug("ignoring unknown property %r", name)
            return False
        if isinstance(value, bool):
            value = "1" if value else "0"
        setattr(options, prop.attr, _atoi(value) != 0)
        self._values[name] = value
        return True

    def property_get(self, name: str) -> str | None:
        """Last string set for name ("" if never set), None for an unknown name."""
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._properties


def build_option_set() -> OptionSet:
    opts = OptionSet()
    opts.define_property(
        "fold.compact",
        "fold_compact",
        "Set to 1 to give blank lines the level of the block that follows them.",
    )
    opts.define_property(
        "fold",
        "fold",
        "Set to 1 to fold registry key blocks.",
    )
    return opts


def options_from_dict(config: Mapping[str, Any], source: str = "<config>") -> RegistryOptions:
    """Build RegistryOptions from a [properties] table of a config file.

    Keys are property names (``fold``, ``fold.compact``). Values may be
    booleans, integers or strings; anything else is rejected.
    """
    options = RegistryOptions()
    option_set = build_option_set()
    for key, value in config.items():
        if key not in option_set:
            raise ConfigError(f"unknown property '{key}'", source)
        if isinstance(value, (bool, str)):
            option_set.property_set(options, key, value)
        elif isinstance(value, int):
            option_set.property_set(options, key, str(value))
        else:
            raise ConfigError(
                f"property '{key}' expects a boolean, got {type(value).__name__}", source
            )
    return options
