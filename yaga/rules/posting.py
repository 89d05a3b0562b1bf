"""Rules based on how much a member posts."""

from yaga.models import AwardEvent, CriteriaForm, FieldType, FormField
from yaga.rules.base import COMPARISON_OPTIONS, compare, register_rule

_SAVE_HOOKS = ["commentModel_afterSaveComment", "discussionModel_afterSaveDiscussion"]


def _count_form(label: str) -> CriteriaForm:
    return CriteriaForm(
        fields=[
            FormField(
                name="Comparison",
                label=label,
                type=FieldType.SELECT,
                options=COMPARISON_OPTIONS,
                default="gte",
            ),
            FormField(name="Target", label="Count", type=FieldType.NUMBER, default=1),
        ]
    )


@register_rule
class PostCount:
    """Total discussions plus comments compared against a target."""

    def name(self) -> str:
        return "Post Count"

    def description(self) -> str:
        return (
            "This rule checks a user's total discussion and comment count "
            "against the criteria. It will award a badge if it meets the criteria."
        )

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return _count_form("Total posts")

    def award(self, event: AwardEvent, criteria) -> bool:
        return compare(event.user.count_posts, criteria["Comparison"], int(criteria["Target"]))

    def hooks(self) -> list[str]:
        return list(_SAVE_HOOKS)


@register_rule
class CommentCount:
    def name(self) -> str:
        return "Comment Count"

    def description(self) -> str:
        return (
            "This rule checks a user's total comment count against the criteria. "
            "If the user has more comments than the criteria, this will return true."
        )

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return _count_form("Total comments")

    def award(self, event: AwardEvent, criteria) -> bool:
        return compare(event.user.count_comments, criteria["Comparison"], int(criteria["Target"]))

    def hooks(self) -> list[str]:
        return ["commentModel_afterSaveComment"]


@register_rule
class DiscussionCount:
    def name(self) -> str:
        return "Discussion Count"

    def description(self) -> str:
        return "This rule checks a user's total discussion count against the criteria."

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return _count_form("Total discussions")

    def award(self, event: AwardEvent, criteria) -> bool:
        return compare(
            event.user.count_discussions, criteria["Comparison"], int(criteria["Target"])
        )

    def hooks(self) -> list[str]:
        return ["discussionModel_afterSaveDiscussion"]


@register_rule
class DiscussionBodyLength:
    """Awards when a newly saved discussion body reaches a minimum length."""

    def name(self) -> str:
        return "Discussion Body Length"

    def description(self) -> str:
        return (
            "This rule checks the length of a discussion body and awards a badge "
            "if it is at least the target length."
        )

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return CriteriaForm(
            fields=[
                FormField(
                    name="Length",
                    label="Minimum characters",
                    type=FieldType.NUMBER,
                    default=1000,
                )
            ]
        )

    def award(self, event: AwardEvent, criteria) -> bool:
        if event.body is None:
            return False
        return len(event.body) >= int(criteria["Length"])

    def hooks(self) -> list[str]:
        return ["discussionModel_afterSaveDiscussion"]
