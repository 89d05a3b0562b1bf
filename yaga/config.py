"""YAML-backed configuration with dotted-name lookup.

Values can be written either as flat dotted keys or as nested mappings::

    Yaga.Rules.CacheExpire: 3600
    Yaga:
      Reactions:
        Enabled: true
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from yaga.errors import ConfigError

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path.home() / ".yaga" / "config.yaml"


class Config:
    """Read-only view over configuration values."""

    def __init__(self, values: Optional[dict[str, Any]] = None) -> None:
        self._values = dict(values or {})

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from a YAML file. A missing file is empty config."""
        path = path or _DEFAULT_CONFIG_PATH
        if not path.exists():
            logger.debug("No config file at %s", path)
            return cls()

        try:
            with open(path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            msg = f"YAML parse error in {path}"
            if hasattr(exc, "problem_mark") and exc.problem_mark is not None:
                mark = exc.problem_mark
                msg += f" at line {mark.line + 1}, column {mark.column + 1}"
            raise ConfigError(msg) from exc

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}"
            )
        return cls(raw)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a value by dotted name, e.g. ``Yaga.Rules.CacheExpire``."""
        if name in self._values:
            return self._values[name]

        node: Any = self._values
        for part in name.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)
