"""JSON output formatter -- valid JSON suitable for piping to jq."""

from __future__ import annotations

import json

from yaga.models import CriteriaFormPayload, ProfileFeed


class JsonFormatter:
    """Format Yaga results as pretty-printed JSON."""

    def format_rules(self, rules: dict[str, str], title: str = "Rules") -> str:
        """Format a rule catalog as JSON, keeping catalog order."""
        data = {
            "type": "rules",
            "title": title,
            "count": len(rules),
            "rules": [{"rule_class": k, "name": v} for k, v in rules.items()],
        }
        return json.dumps(data, indent=2)

    def format_criteria_form(self, payload: CriteriaFormPayload) -> str:
        data = {
            "type": "criteria_form",
            **payload.model_dump(mode="json"),
        }
        return json.dumps(data, indent=2)

    def format_feed(self, feed: ProfileFeed) -> str:
        data = {
            "type": "profile_feed",
            "item_count": len(feed.items),
            **feed.model_dump(mode="json"),
        }
        return json.dumps(data, indent=2)
