"""Rich-based output formatter with colored tables and panels."""

from __future__ import annotations

from io import StringIO

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from yaga.models import CriteriaFormPayload, FeedItem, ProfileFeed


def _render(renderable) -> str:
    """Render a Rich object to a string."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=120)
    console.print(renderable)
    return buf.getvalue()


def _author_text(item: FeedItem, photo_first: bool) -> Text:
    text = Text()
    if item.author is None:
        text.append("unknown author", style="dim")
        return text
    photo = Text("● " if item.author.photo else "○ ", style="cyan")
    name = Text(item.author.name, style="bold")
    if photo_first:
        text.append_text(photo)
        text.append_text(name)
    else:
        text.append_text(name)
        text.append(" ")
        text.append_text(photo)
    return text


class RichFormatter:
    """Format Yaga results using Rich tables and panels."""

    def format_rules(self, rules: dict[str, str], title: str = "Rules") -> str:
        """Format a rule catalog as a table."""
        if not rules:
            return _render(Panel("No rules available.", title=title, border_style="yellow"))

        table = Table(title=title, show_lines=False)
        table.add_column("Rule Class", style="cyan")
        table.add_column("Name", style="bold")
        for rule_class, name in rules.items():
            table.add_row(rule_class, name)
        table.caption = f"{len(rules)} rule(s)"
        return _render(table)

    def format_criteria_form(self, payload: CriteriaFormPayload) -> str:
        """Format a criteria form as a panel with a field table."""
        form = payload.criteria_form
        parts: list = [Text(payload.description)]

        if form.fields:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Field", style="cyan")
            table.add_column("Label")
            table.add_column("Type", style="magenta")
            table.add_column("Default")
            table.add_column("Options", style="dim")
            for field in form.fields:
                options = ", ".join(f"{k}={v}" for k, v in field.options.items())
                default = "" if field.default is None else str(field.default)
                table.add_row(field.name, field.label, field.type.value, default, options)
            parts.append(table)
        if form.note:
            parts.append(Text(form.note, style="italic yellow"))

        return _render(
            Panel(
                Group(*parts),
                title=f"{payload.name} [dim]({payload.rule_class})[/dim]",
                border_style="blue",
            )
        )

    def format_feed(self, feed: ProfileFeed) -> str:
        """Format the profile reactions feed as one panel per item."""
        if not feed.items:
            return _render(Panel("No content.", title="Reactions", border_style="yellow"))

        out: list[str] = []
        for item in feed.items:
            header = _author_text(item, feed.user_photo_first)
            header.append(f"  {item.date_inserted:%Y-%m-%d %H:%M}", style="dim")
            if item.source_label:
                header.append(f"  {item.source_label}", style="dim")

            parts: list = [header, Text(item.url, style="underline blue")]
            if item.body:
                parts.append(Text(item.body))
            if feed.show_reactions and item.reactions:
                reactions = Text()
                for r in item.reactions:
                    reactions.append(f"{r.name} ", style="green")
                    reactions.append(f"{r.count}  ", style="bold")
                parts.append(reactions)

            out.append(
                _render(Panel(Group(*parts), title=item.name, subtitle=item.dom_id))
            )
        return "".join(out)
