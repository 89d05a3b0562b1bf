"""Domain models for Yaga rules.

Pydantic models for rule descriptors, criteria forms, award events,
and the profile reactions feed.
"""

import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


# --- Enums ---


class FieldType(str, Enum):
    """Input types a criteria form field can request."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"
    CHECKBOX_LIST = "checkbox_list"


class Comparison(str, Enum):
    """Comparison operators used by count-based criteria."""

    GT = "gt"  # more than
    LT = "lt"  # less than
    GTE = "gte"  # at least


class Period(str, Enum):
    """Time units for duration-based criteria."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# --- Criteria Forms ---


class FormField(BaseModel):
    """One input of a rule's criteria form."""

    name: str
    label: str
    type: FieldType = FieldType.TEXT
    options: dict[str, str] = Field(default_factory=dict)
    default: Optional[Any] = None


class CriteriaForm(BaseModel):
    """Form definition a rule exposes for configuring its award criteria."""

    fields: list[FormField] = Field(default_factory=list)
    note: Optional[str] = None


class CriteriaFormPayload(BaseModel):
    """Data returned by the criteria form endpoint."""

    criteria_form: CriteriaForm
    rule_class: str
    name: str
    description: str


class RuleDescriptor(BaseModel):
    """Snapshot of a discovered rule."""

    model_config = {"frozen": True}

    identity: str
    name: str
    description: str
    interactive: bool
    form: CriteriaForm


# --- Award Evaluation ---


def _assume_utc(value: datetime.datetime) -> datetime.datetime:
    # Naive timestamps from the host are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


class Member(BaseModel):
    """A forum member as seen by the rules."""

    user_id: int
    name: str
    photo: Optional[str] = None
    date_inserted: datetime.datetime
    count_comments: int = Field(default=0, ge=0)
    count_discussions: int = Field(default=0, ge=0)
    # Reactions received, keyed by reaction name
    reactions_received: dict[str, int] = Field(default_factory=dict)

    @field_validator("date_inserted")
    @classmethod
    def date_inserted_utc(cls, v: datetime.datetime) -> datetime.datetime:
        return _assume_utc(v)

    @property
    def count_posts(self) -> int:
        return self.count_comments + self.count_discussions


class AwardEvent(BaseModel):
    """An interaction or activity that may trigger a badge award.

    ``user`` is the member being considered for the badge. ``counterpart``
    is the other member involved when one user acts on another (the one
    reacting, or the author of the discussion being commented on).
    """

    hook: str
    user: Member
    counterpart: Optional[Member] = None
    body: Optional[str] = None
    mentions: list[str] = Field(default_factory=list)
    # Reactions on the post that triggered the event, keyed by reaction name
    post_reactions: dict[str, int] = Field(default_factory=dict)
    occurred_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    @field_validator("occurred_at")
    @classmethod
    def occurred_at_utc(cls, v: datetime.datetime) -> datetime.datetime:
        return _assume_utc(v)


# --- Profile Reactions Feed ---


class ContentAuthor(BaseModel):
    """Author block attached to a piece of content."""

    user_id: int = Field(alias="UserID")
    name: str = Field(alias="Name")
    photo: Optional[str] = Field(default=None, alias="Photo")

    model_config = {"populate_by_name": True}


class ContentRecord(BaseModel):
    """Raw content row as returned by the host for the profile feed."""

    item_type: str = Field(alias="ItemType")
    content_id: int = Field(alias="ContentID")
    name: str = Field(alias="Name")
    content_url: str = Field(alias="ContentURL")
    author: Optional[ContentAuthor] = Field(default=None, alias="Author")
    date_inserted: datetime.datetime = Field(alias="DateInserted")
    source: Optional[str] = Field(default=None, alias="Source")
    body: str = Field(default="", alias="Body")
    format: str = Field(default="Text", alias="Format")
    reactions: dict[str, int] = Field(default_factory=dict, alias="Reactions")

    model_config = {"populate_by_name": True}

    @field_validator("item_type", mode="before")
    @classmethod
    def lowercase_item_type(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ReactionSummary(BaseModel):
    """Count of one reaction type on a piece of content."""

    name: str
    count: int = Field(ge=0)


class FeedItem(BaseModel):
    """A single rendered entry of the profile reactions feed."""

    dom_id: str
    item_type: str
    content_id: int
    name: str
    url: str
    author: Optional[ContentAuthor] = None
    date_inserted: datetime.datetime
    source_label: Optional[str] = None
    body: str = ""
    reactions: list[ReactionSummary] = Field(default_factory=list)


class ProfileFeed(BaseModel):
    """View model for a member's profile reactions feed."""

    items: list[FeedItem] = Field(default_factory=list)
    user_photo_first: bool = True
    show_reactions: bool = False
