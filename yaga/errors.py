"""Exceptions raised by Yaga."""

from yaga.locale import translate


class YagaError(Exception):
    """Base class for user-facing Yaga errors."""


class RuleNotFoundError(YagaError):
    """Requested rule identity is not a registered rule."""

    def __init__(self, rule_class: str, message: str = "") -> None:
        super().__init__(message or translate("Yaga.Error.Rule404"))
        self.rule_class = rule_class


class ConfigError(YagaError):
    """Configuration file could not be read."""
