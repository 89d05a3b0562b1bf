"""Plain text output formatter -- no ANSI escapes."""

from __future__ import annotations

from yaga.models import CriteriaFormPayload, FeedItem, ProfileFeed


def _header(title: str) -> str:
    """Create a plain text section header."""
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}\n"


def _subheader(title: str) -> str:
    """Create a plain text sub-header."""
    return f"\n--- {title} ---\n"


def _author_line(item: FeedItem, photo_first: bool) -> str:
    if item.author is None:
        return "  Author:  (unknown)"
    photo = f"[{item.author.photo}]" if item.author.photo else "[no photo]"
    parts = [photo, item.author.name] if photo_first else [item.author.name, photo]
    return "  Author:  " + " ".join(parts)


class PlainFormatter:
    """Format Yaga results as plain text without ANSI escapes."""

    def format_rules(self, rules: dict[str, str], title: str = "Rules") -> str:
        """Format a rule catalog as a two-column table."""
        lines: list[str] = [_header(title)]
        if not rules:
            lines.append("  No rules available.")
            return "\n".join(lines)

        lines.append(f"  {'Rule Class':<28} Name")
        lines.append(f"  {'-' * 28} {'-' * 30}")
        for rule_class, name in rules.items():
            lines.append(f"  {rule_class:<28} {name}")
        lines.append("")
        lines.append(f"  {len(rules)} rule(s)")
        return "\n".join(lines)

    def format_criteria_form(self, payload: CriteriaFormPayload) -> str:
        """Format a criteria form as a field listing."""
        lines: list[str] = [_header(f"{payload.name} ({payload.rule_class})")]
        lines.append(f"  {payload.description}")

        form = payload.criteria_form
        lines.append(_subheader("Criteria"))
        if not form.fields:
            lines.append("  (no fields)")
        for field in form.fields:
            line = f"  {field.name:<16} {field.label} [{field.type.value}]"
            if field.default is not None:
                line += f" default={field.default}"
            lines.append(line)
            for value, label in field.options.items():
                lines.append(f"  {'':<16}   {value}: {label}")
        if form.note:
            lines.append("")
            lines.append(f"  Note: {form.note}")
        return "\n".join(lines)

    def format_feed(self, feed: ProfileFeed) -> str:
        """Format the profile reactions feed as a compact list."""
        lines: list[str] = [_header("Reactions")]
        if not feed.items:
            lines.append("  No content.")
            return "\n".join(lines)

        for item in feed.items:
            lines.append(_subheader(f"{item.name} ({item.dom_id})"))
            lines.append(f"  Link:    {item.url}")
            lines.append(_author_line(item, feed.user_photo_first))
            date_line = f"  Date:    {item.date_inserted:%Y-%m-%d %H:%M}"
            if item.source_label:
                date_line += f"  {item.source_label}"
            lines.append(date_line)
            if item.body:
                lines.append("")
                for body_line in item.body.splitlines():
                    lines.append(f"    {body_line}")
            if feed.show_reactions and item.reactions:
                summary = ", ".join(f"{r.name} x{r.count}" for r in item.reactions)
                lines.append(f"  Reactions: {summary}")
        return "\n".join(lines)
