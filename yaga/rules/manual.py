"""Manual award rule -- badges granted only by moderators."""

from yaga.models import AwardEvent, CriteriaForm
from yaga.rules.base import register_rule


@register_rule
class ManualAward:
    def name(self) -> str:
        return "Manual"

    def description(self) -> str:
        return "This rule will never be awarded automatically. Use it for badges you want to hand out manually."

    def interacts(self) -> bool:
        return False

    def form(self) -> CriteriaForm:
        return CriteriaForm(note="This badge can only be awarded manually.")

    def award(self, event: AwardEvent, criteria) -> bool:
        return False

    def hooks(self) -> list[str]:
        return []
