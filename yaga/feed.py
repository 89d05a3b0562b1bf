"""Profile reactions feed: turns raw content rows into a view model."""

import logging
import re
from typing import Iterable, Protocol, Union

from yaga.config import Config
from yaga.locale import translate
from yaga.models import ContentRecord, FeedItem, ProfileFeed, ReactionSummary

logger = logging.getLogger(__name__)

REACTIONS_ENABLED_CONFIG_KEY = "Yaga.Reactions.Enabled"
USER_PHOTO_FIRST_CONFIG_KEY = "Vanilla.Comment.UserPhotoFirst"
VIEW_REACTIONS_PERMISSION = "Yaga.Reactions.View"

_TAG_PATTERN = re.compile(r"<[^>]+>")


class Session(Protocol):
    """The current viewer's permissions."""

    def check_permission(self, permission: str) -> bool: ...


class StaticSession:
    """Session holding a fixed set of permissions."""

    def __init__(self, permissions: Iterable[str] = ()) -> None:
        self.permissions = set(permissions)

    def check_permission(self, permission: str) -> bool:
        return permission in self.permissions


def reactions_visible(config: Config, session: Session) -> bool:
    """Reactions show only when enabled and the viewer may see them."""
    return bool(config.get(REACTIONS_ENABLED_CONFIG_KEY, False)) and session.check_permission(
        VIEW_REACTIONS_PERMISSION
    )


def format_body(body: str, fmt: str) -> str:
    """Reduce a post body to plain text for display."""
    if fmt.lower() == "html":
        return _TAG_PATTERN.sub("", body).strip()
    return body.strip()


def source_label(source: str) -> str:
    """Translate a post source into a "via ..." label."""
    return translate("via %s") % translate(f"{source} Source", source)


def build_feed(
    contents: Iterable[Union[ContentRecord, dict]],
    config: Config,
    session: Session,
) -> ProfileFeed:
    """Build the profile reactions feed for a list of content rows."""
    show_reactions = reactions_visible(config, session)
    items: list[FeedItem] = []

    for raw in contents:
        record = raw if isinstance(raw, ContentRecord) else ContentRecord.model_validate(raw)
        reactions = []
        if show_reactions:
            reactions = [
                ReactionSummary(name=name, count=count)
                for name, count in record.reactions.items()
                if count > 0
            ]
        items.append(
            FeedItem(
                dom_id=f"{record.item_type}_{record.content_id}",
                item_type=record.item_type,
                content_id=record.content_id,
                name=record.name,
                url=record.content_url,
                author=record.author,
                date_inserted=record.date_inserted,
                source_label=source_label(record.source) if record.source else None,
                body=format_body(record.body, record.format),
                reactions=reactions,
            )
        )

    logger.debug("Built profile feed with %d items", len(items))
    return ProfileFeed(
        items=items,
        user_photo_first=bool(config.get(USER_PHOTO_FIRST_CONFIG_KEY, True)),
        show_reactions=show_reactions,
    )
