"""Rule configuration.

Options use the rule-option shape accepted by JavaScript linters::

    []                                        # defaults
    ["functions"]                             # only parens around function literals
    ["all"]
    ["all", {"conditionalAssign": False, "nestedBinaryExpressions": False}]

Setting either flag to ``False`` enables the matching exception.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from typing_extensions import TypeAlias

logger = logging.getLogger("parenlint.config")

Options: TypeAlias = Optional[Sequence[Any]]

OPTION_KEYS = {
    'conditionalAssign': 'allow_conditional_assign_parens',
    'nestedBinaryExpressions': 'allow_nested_binary_parens',
}


class ConfigError(ValueError):
    """Malformed rule options"""
    pass


class Scope(Enum):
    ALL = 'all'
    FUNCTIONS = 'functions'


@dataclass(frozen=True)
class Config:
    scope: Scope = Scope.ALL
    allow_conditional_assign_parens: bool = False
    allow_nested_binary_parens: bool = False

    @property
    def all_nodes(self) -> bool:
        return self.scope is Scope.ALL

    @property
    def except_cond_assign(self) -> bool:
        return self.all_nodes and self.allow_conditional_assign_parens

    @property
    def nested_binary(self) -> bool:
        return self.all_nodes and self.allow_nested_binary_parens


DEFAULT_CONFIG = Config()


def _parse_exceptions(raw: Any) -> Mapping[str, bool]:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Expected an options object after \"all\", got {type(raw).__name__}")

    unknown = sorted(set(raw) - set(OPTION_KEYS))
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(map(str, unknown))}")

    flags = {}
    for key, value in raw.items():
        if not isinstance(value, bool):
            raise ConfigError(f"Option {key!r} must be a boolean, got {value!r}")
        # false means "allow the parens"
        flags[OPTION_KEYS[key]] = not value
    return flags


def parse_options(options: Options = None) -> Config:
    """Validate rule options and build the ``Config`` for one analysis run."""
    if options is None:
        return DEFAULT_CONFIG

    if isinstance(options, (str, bytes)) or not isinstance(options, Sequence):
        raise ConfigError(f"Options must be a list, got {type(options).__name__}")

    if len(options) == 0:
        return DEFAULT_CONFIG

    try:
        scope = Scope(options[0])
    except ValueError:
        raise ConfigError(f"Unknown scope {options[0]!r}, expected \"all\" or \"functions\"") from None

    if scope is Scope.FUNCTIONS:
        if len(options) > 1:
            raise ConfigError("The \"functions\" scope takes no further options")
        config = Config(scope=scope)
    else:
        if len(options) > 2:
            raise ConfigError(f"Expected at most 2 options, got {len(options)}")
        flags = _parse_exceptions(options[1]) if len(options) == 2 else {}
        config = Config(scope=scope, **flags)

    logger.debug("resolved config %s", config)
    return config
