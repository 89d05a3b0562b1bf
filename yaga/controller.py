"""Rules controller: the public surface for rule lists and criteria forms."""

import logging
from pathlib import Path
from typing import Optional

from yaga.cache import CacheStore, FileCache
from yaga.config import Config
from yaga.errors import RuleNotFoundError
from yaga.models import CriteriaFormPayload
from yaga.registry import InteractionFilter, RuleRegistry

logger = logging.getLogger(__name__)

CACHE_DIR_CONFIG_KEY = "Yaga.Cache.Dir"


class RulesController:
    """Serves the rule catalog, the interactive subset, and criteria forms."""

    def __init__(
        self,
        registry: RuleRegistry,
        interaction_filter: Optional[InteractionFilter] = None,
    ) -> None:
        self.registry = registry
        self.interaction_filter = interaction_filter or InteractionFilter(registry)

    def get_rules(self) -> dict[str, str]:
        """All available rules, class name -> display name."""
        return self.registry.get_catalog()

    def get_interaction_rules(self) -> dict[str, str]:
        """Rules a member can trigger for another member."""
        return self.interaction_filter.get_interactive()

    def get_criteria_form(self, rule_class: str) -> CriteriaFormPayload:
        """Build the criteria form payload for one rule.

        Raises:
            RuleNotFoundError: If ``rule_class`` is not a registered rule.
        """
        self.registry.load_rule_definitions()
        descriptor = self.registry.describe(rule_class)
        if descriptor is None:
            logger.info("Criteria form requested for unknown rule %r", rule_class)
            raise RuleNotFoundError(rule_class)

        return CriteriaFormPayload(
            criteria_form=descriptor.form,
            rule_class=rule_class,
            name=descriptor.name,
            description=descriptor.description,
        )


def build_controller(
    config: Optional[Config] = None,
    cache: Optional[CacheStore] = None,
) -> RulesController:
    """Wire a controller from configuration, defaulting to the file cache."""
    config = config or Config()
    if cache is None:
        cache_dir = config.get(CACHE_DIR_CONFIG_KEY)
        cache = FileCache(Path(cache_dir).expanduser() if cache_dir else None)
    return RulesController(RuleRegistry(cache, config))
