"""Rules based on a member's account and profile."""

from yaga.models import AwardEvent, CriteriaForm, FieldType, FormField
from yaga.rules.base import PERIOD_OPTIONS, duration, register_rule


@register_rule
class LengthOfService:
    """Member has been registered for at least Duration x Period."""

    def name(self) -> str:
        return "Length of Service"

    def description(self) -> str:
        return (
            "This rule checks a user's join date against the current date. "
            "It will return true if the account is older than the specified "
            "number of days, weeks, months or years."
        )

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return CriteriaForm(
            fields=[
                FormField(name="Duration", label="Time served", type=FieldType.NUMBER, default=1),
                FormField(
                    name="Period",
                    label="Period",
                    type=FieldType.SELECT,
                    options=PERIOD_OPTIONS,
                    default="year",
                ),
            ]
        )

    def award(self, event: AwardEvent, criteria) -> bool:
        served = event.occurred_at - event.user.date_inserted
        return served >= duration(int(criteria["Duration"]), criteria["Period"])

    def hooks(self) -> list[str]:
        return ["base_afterSignIn"]


@register_rule
class PhotoExists:
    def name(self) -> str:
        return "User has Avatar"

    def description(self) -> str:
        return "This rule returns true if the user has uploaded a profile photo."

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return CriteriaForm(note="This rule has no criteria.")

    def award(self, event: AwardEvent, criteria) -> bool:
        return bool(event.user.photo)

    def hooks(self) -> list[str]:
        return ["base_afterSignIn"]


@register_rule
class CakeDayPost:
    """Posting on the anniversary of joining."""

    def name(self) -> str:
        return "Cake Day Post"

    def description(self) -> str:
        return "This rule awards a badge when a user posts on the anniversary of their registration."

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return CriteriaForm(note="This rule has no criteria.")

    def award(self, event: AwardEvent, criteria) -> bool:
        joined = event.user.date_inserted
        now = event.occurred_at
        return (
            now.year > joined.year
            and now.month == joined.month
            and now.day == joined.day
        )

    def hooks(self) -> list[str]:
        return ["commentModel_afterSaveComment", "discussionModel_afterSaveDiscussion"]
