"""Rule registry: discovery, cached catalog, and the interactive subset.

The catalog maps rule identities (class names) to display names, sorted
by display name. It is cached cache-aside under a fixed key and rebuilt
only on a miss. The interactive subset is derived from the catalog and
cached under its own key with the same expiry, so the two entries can
drift apart until the subset's own entry expires.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Callable, Iterable, Optional

from yaga.cache import CacheStore
from yaga.config import Config
from yaga.errors import ConfigError, RuleNotFoundError
from yaga.models import RuleDescriptor
from yaga.rules import get_registered_rules, implements_rule, load_rule_modules

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "Yaga.Badges.Rules"
INTERACTION_CACHE_KEY = "Yaga.Badges.InteractionRules"
CACHE_EXPIRE_CONFIG_KEY = "Yaga.Rules.CacheExpire"
PLUGIN_DIRS_CONFIG_KEY = "Yaga.Rules.PluginDirs"
DEFAULT_CACHE_EXPIRE = 86400

AFTER_GET_RULES = "AfterGetRules"

# Receives the draft identity -> name mapping, returns the mapping to keep
CatalogTransform = Callable[[dict[str, str]], dict[str, str]]


def encode_rules(rules: dict[str, str]) -> str:
    """Encode a rule mapping for the cache. Empty encodes as ``false``."""
    if not rules:
        return json.dumps(False)
    return json.dumps(rules)


def decode_rules(encoded: str) -> dict[str, str]:
    """Decode a cached rule mapping. The ``false`` sentinel decodes to ``{}``."""
    data = json.loads(encoded)
    if data is False:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Cached rule set has unexpected type {type(data).__name__}")
    return {str(k): str(v) for k, v in data.items()}


class RuleRegistry:
    """Builds and caches the catalog of installed rules."""

    def __init__(
        self,
        cache: CacheStore,
        config: Optional[Config] = None,
        plugin_dirs: Optional[Iterable[Path]] = None,
    ) -> None:
        self.cache = cache
        self.config = config or Config()
        if plugin_dirs is None:
            configured = self.config.get(PLUGIN_DIRS_CONFIG_KEY, [])
            if isinstance(configured, str):
                configured = [configured]
            plugin_dirs = [Path(p).expanduser() for p in configured]
        self.plugin_dirs = list(plugin_dirs)
        self._transforms: list[CatalogTransform] = []

    @property
    def cache_expire(self) -> int:
        """Seconds a rebuilt rule set stays cached."""
        value = self.config.get(CACHE_EXPIRE_CONFIG_KEY, DEFAULT_CACHE_EXPIRE)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(
                f"{CACHE_EXPIRE_CONFIG_KEY} must be a number of seconds, got {value!r}"
            ) from None

    def add_transform(self, transform: CatalogTransform) -> None:
        """Register an AfterGetRules transform. Transforms run in order added."""
        self._transforms.append(transform)

    def load_rule_definitions(self) -> None:
        """Import built-in and plugin rule modules. Safe to call repeatedly."""
        load_rule_modules(self.plugin_dirs)

    def rule_classes(self) -> dict[str, type]:
        """Registered classes that implement the Rule protocol."""
        return {
            identity: cls
            for identity, cls in get_registered_rules().items()
            if implements_rule(cls)
        }

    def get_rule_class(self, identity: str) -> Optional[type]:
        return self.rule_classes().get(identity)

    def describe(self, identity: str) -> Optional[RuleDescriptor]:
        """Instantiate a rule and snapshot it, or None if not registered."""
        cls = self.get_rule_class(identity)
        if cls is None:
            return None
        rule = cls()
        return RuleDescriptor(
            identity=identity,
            name=rule.name(),
            description=rule.description(),
            interactive=bool(rule.interacts()),
            form=rule.form(),
        )

    def get_catalog(self) -> dict[str, str]:
        """Return identity -> display name for all rules, sorted by name.

        Rule modules are always loaded first, even when the cached catalog
        ends up being used.
        """
        self.load_rule_definitions()

        encoded = self.cache.get(CATALOG_CACHE_KEY)
        if encoded is not None:
            logger.debug("Rule catalog cache hit")
            return decode_rules(encoded)

        logger.info("Rule catalog cache miss, rebuilding")
        draft: dict[str, str] = {}
        for identity, cls in self.rule_classes().items():
            # A rule that fails to construct aborts the rebuild; nothing is cached
            rule = cls()
            draft[identity] = rule.name()

        for transform in self._transforms:
            draft = transform(draft)
            logger.debug("%s transform %r applied", AFTER_GET_RULES, transform)

        catalog = dict(sorted(draft.items(), key=lambda item: item[1]))

        encoded = encode_rules(catalog)
        self.cache.store(CATALOG_CACHE_KEY, encoded, expiry=self.cache_expire)
        logger.info("Cached %d rules for %ss", len(catalog), self.cache_expire)
        return decode_rules(encoded)


class InteractionFilter:
    """The subset of the catalog whose rules are triggered by another user.

    The result is memoized on the instance for its whole lifetime, so a
    filter should live as long as a stale subset is acceptable.
    """

    def __init__(self, registry: RuleRegistry, cache: Optional[CacheStore] = None) -> None:
        self.registry = registry
        self.cache = cache if cache is not None else registry.cache
        self._memo: Optional[dict[str, str]] = None
        self._lock = threading.Lock()

    def get_interactive(self) -> dict[str, str]:
        """Return identity -> display name for interactive rules."""
        if self._memo is None:
            with self._lock:
                if self._memo is None:
                    self._memo = self._load()
        return dict(self._memo)

    def _load(self) -> dict[str, str]:
        encoded = self.cache.get(INTERACTION_CACHE_KEY)
        if encoded is not None:
            logger.debug("Interaction rules cache hit")
            return decode_rules(encoded)

        logger.info("Interaction rules cache miss, rebuilding")
        catalog = self.registry.get_catalog()
        classes = self.registry.rule_classes()

        interactive: dict[str, str] = {}
        for identity, name in catalog.items():
            cls = classes.get(identity)
            if cls is None:
                raise RuleNotFoundError(identity, f"Rule {identity!r} is no longer registered")
            if cls().interacts():
                interactive[identity] = name

        encoded = encode_rules(interactive)
        self.cache.store(INTERACTION_CACHE_KEY, encoded, expiry=self.registry.cache_expire)
        return decode_rules(encoded)
