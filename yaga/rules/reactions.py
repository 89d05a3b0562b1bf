"""Rules triggered by other members reacting to content.

Both rules here are interactive: the reacting member's action is what
earns the badge for the content author.
"""

from yaga.models import AwardEvent, CriteriaForm, FieldType, FormField
from yaga.rules.base import register_rule

_REACTION_HOOK = "reactionModel_afterReaction"


def parse_thresholds(value) -> dict[str, int]:
    """Parse per-reaction thresholds.

    Accepts the form's text value (``"Like=3, Awesome=1"``) or an
    already decoded mapping. Empty and zero thresholds are dropped.
    """
    if not value:
        return {}
    if isinstance(value, str):
        pairs = {}
        for part in value.split(","):
            if not part.strip():
                continue
            name, sep, count = part.partition("=")
            if not sep:
                raise ValueError(f"Expected Reaction=count, got {part.strip()!r}")
            pairs[name.strip()] = count.strip()
        value = pairs
    return {name: int(count) for name, count in value.items() if count and int(count)}


@register_rule
class ReactionCount:
    """Total reactions of the selected types received across all content."""

    def name(self) -> str:
        return "Reaction Count Total"

    def description(self) -> str:
        return (
            "This rule checks a user's total reaction count of the selected "
            "types against the target. It will return true once the user has "
            "received at least that many reactions."
        )

    def interacts(self) -> bool:
        return True

    def form(self) -> CriteriaForm:
        return CriteriaForm(
            fields=[
                FormField(name="Target", label="Total reactions", type=FieldType.NUMBER, default=10),
                FormField(
                    name="ReactionNames",
                    label="Reaction types (any)",
                    type=FieldType.CHECKBOX_LIST,
                ),
            ]
        )

    def award(self, event: AwardEvent, criteria) -> bool:
        wanted = criteria.get("ReactionNames") or list(event.user.reactions_received)
        total = sum(event.user.reactions_received.get(name, 0) for name in wanted)
        return total >= int(criteria["Target"])

    def hooks(self) -> list[str]:
        return [_REACTION_HOOK]


@register_rule
class PostReactions:
    """A single post reaching per-reaction thresholds."""

    def name(self) -> str:
        return "Post Reactions"

    def description(self) -> str:
        return (
            "This rule checks a post's reaction counts. Every reaction with a "
            "threshold must reach it for the badge to be awarded."
        )

    def interacts(self) -> bool:
        return True

    def form(self) -> CriteriaForm:
        return CriteriaForm(
            fields=[
                FormField(
                    name="Thresholds",
                    label="Minimum count per reaction",
                    type=FieldType.TEXT,
                    default="Like=5",
                )
            ],
            note="Enter Reaction=count pairs separated by commas. Reactions left out are ignored.",
        )

    def award(self, event: AwardEvent, criteria) -> bool:
        thresholds = parse_thresholds(criteria.get("Thresholds"))
        if not thresholds:
            return False
        return all(
            event.post_reactions.get(name, 0) >= target
            for name, target in thresholds.items()
        )

    def hooks(self) -> list[str]:
        return [_REACTION_HOOK]
