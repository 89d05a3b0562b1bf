"""Output formatters for Yaga.

Provides a Formatter protocol and three implementations:
- RichFormatter: colored Rich tables and panels
- PlainFormatter: plain text without ANSI escapes
- JsonFormatter: valid JSON for piping to jq
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from yaga.models import CriteriaFormPayload, ProfileFeed


class Formatter(Protocol):
    """Protocol for formatting Yaga results."""

    def format_rules(self, rules: dict[str, str], title: str = "Rules") -> str:
        """Format a rule catalog (class name -> display name)."""
        ...

    def format_criteria_form(self, payload: CriteriaFormPayload) -> str:
        """Format a rule's criteria form."""
        ...

    def format_feed(self, feed: ProfileFeed) -> str:
        """Format a profile reactions feed."""
        ...


def get_formatter(name: str = "rich") -> Formatter:
    """Get a formatter by name.

    Args:
        name: One of "rich", "plain", "json".

    Returns:
        A Formatter instance.

    Raises:
        ValueError: If the name is not recognized.
    """
    if name == "rich":
        from yaga.output.rich_formatter import RichFormatter

        return RichFormatter()
    elif name == "plain":
        from yaga.output.plain_formatter import PlainFormatter

        return PlainFormatter()
    elif name == "json":
        from yaga.output.json_formatter import JsonFormatter

        return JsonFormatter()
    else:
        raise ValueError(f"Unknown formatter: {name!r}. Use 'rich', 'plain', or 'json'.")
