"""Rules about members engaging with each other."""

from yaga.models import AwardEvent, CriteriaForm, FieldType, FormField
from yaga.rules.base import PERIOD_OPTIONS, duration, register_rule


@register_rule
class HasMentioned:
    def name(self) -> str:
        return "Mention"

    def description(self) -> str:
        return "This rule awards a badge when a user mentions another user in a post."

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return CriteriaForm(note="This rule has no criteria.")

    def award(self, event: AwardEvent, criteria) -> bool:
        return any(m and m != event.user.name for m in event.mentions)

    def hooks(self) -> list[str]:
        return ["commentModel_beforeNotification", "discussionModel_beforeNotification"]


@register_rule
class NewbieComment:
    """Commenting on a discussion started by a recently joined member.

    ``counterpart`` on the event is the discussion author.
    """

    def name(self) -> str:
        return "Comment on New User's Discussion"

    def description(self) -> str:
        return (
            "This rule awards a badge when a user comments on the first "
            "discussion of a user who joined within the given time."
        )

    def interacts(self) -> bool:
        return True

    def form(self) -> CriteriaForm:
        return CriteriaForm(
            fields=[
                FormField(name="Duration", label="Joined within", type=FieldType.NUMBER, default=1),
                FormField(
                    name="Period",
                    label="Period",
                    type=FieldType.SELECT,
                    options=PERIOD_OPTIONS,
                    default="week",
                ),
            ]
        )

    def award(self, event: AwardEvent, criteria) -> bool:
        newbie = event.counterpart
        if newbie is None or newbie.user_id == event.user.user_id:
            return False
        if newbie.count_discussions > 1:
            return False
        age = event.occurred_at - newbie.date_inserted
        return age <= duration(int(criteria["Duration"]), criteria["Period"])

    def hooks(self) -> list[str]:
        return ["commentModel_afterSaveComment"]
