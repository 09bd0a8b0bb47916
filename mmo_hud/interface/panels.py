"""
MMO HUD terminal rendering.

Draws a HudView as rich panels: one row per party member, one per enemy.
Bars use block glyphs; temporary points are drawn after the current value.
"""
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..state.schema import Bar, Effect, HudView, NormalizedEntry

USE_UNICODE = True  # Set False for basic terminals

BAR_WIDTH = 20

THEME_COLORS = {
    "rpg-t-hp": "green3",
    "rpg-t-mp": "steel_blue",
}


def _glyphs() -> tuple[str, str, str]:
    if USE_UNICODE:
        return "█", "▓", "░"
    return "#", "+", "-"


def render_bar(bar: Bar, width: int = BAR_WIDTH) -> Text:
    """
    Bar as filled/bonus/empty cells, followed by value/max.

    Colors: the bar's theme while above half, then yellow, then red.
    """
    full, bonus, empty = _glyphs()
    filled = int(bar.percent / 100 * width)
    extra = int((bar.bonus_percent or 0) / 100 * width)
    extra = min(extra, width - filled)

    if bar.percent > 50:
        color = THEME_COLORS.get(bar.theme or "", "white")
    elif bar.percent > 25:
        color = "dark_goldenrod"
    else:
        color = "dark_red"

    text = Text()
    text.append(full * filled, style=color)
    text.append(bonus * extra, style="cyan")
    text.append(empty * (width - filled - extra), style="grey35")

    label = f" {_format_number(bar.value)}/{_format_number(bar.max)}"
    if bar.temp:
        label += f" (+{_format_number(bar.temp)})"
    text.append(label, style="grey85")
    return text


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_effects(effects: list[Effect]) -> Text:
    """Effect names colored by kind: buffs green, debuffs red, markers dim."""
    text = Text()
    for i, effect in enumerate(effects):
        if i:
            text.append(" · ", style="dim")
        if effect.is_buff:
            style = "green"
        elif effect.is_debuff:
            style = "red"
        else:
            style = "dim"
        text.append(effect.name, style=style)
    return text


def _entry_name(entry: NormalizedEntry) -> Text:
    name = Text()
    if entry.is_current_turn:
        name.append("▶ " if USE_UNICODE else "> ", style="bold yellow")
    name.append(entry.name, style="bold cyan")
    if entry.level is not None:
        name.append(f" Lv {entry.level}", style="dim")
    return name


def render_party_panel(view: HudView) -> Panel:
    """Party rows with primary/secondary bars and, if shown, effects."""
    title = "[bold]PARTY[/bold]"
    if view.party_size:
        title += f" [dim]{view.party_size}[/dim]"

    if not view.party:
        return Panel(
            Text("No party members", style="dim"),
            title=title,
            title_align="left",
            border_style="blue",
            padding=(0, 1),
        )

    table = Table.grid(padding=(0, 2))
    table.add_column(justify="left", min_width=16)
    table.add_column(justify="left")

    for member in view.party:
        bars = [Text(f"{member.primary.name:<10}").append_text(render_bar(member.primary))]
        if member.secondary is not None:
            bars.append(Text(f"{member.secondary.name:<10}").append_text(render_bar(member.secondary)))
        if member.show_effects:
            bars.append(render_effects(member.effects))
        table.add_row(_entry_name(member), Group(*bars))

    return Panel(
        table,
        title=title,
        title_align="left",
        border_style="blue",
        padding=(0, 1),
    )


def render_enemy_panel(view: HudView) -> Panel | None:
    """Enemy rows, or None when nothing is targeted."""
    if not view.enemies:
        return None

    table = Table.grid(padding=(0, 2))
    table.add_column(justify="left", min_width=16)
    table.add_column(justify="left")

    for enemy in view.enemies:
        rows = [render_bar(enemy.primary)]
        if enemy.effects:
            rows.append(render_effects(enemy.effects))
        table.add_row(_entry_name(enemy), Group(*rows))

    return Panel(
        table,
        title="[bold]ENEMIES[/bold]",
        title_align="left",
        border_style="dark_red",
        padding=(0, 1),
    )


def render_hud(view: HudView) -> Group:
    """Both panels stacked."""
    panels = [render_party_panel(view)]
    enemies = render_enemy_panel(view)
    if enemies is not None:
        panels.append(enemies)
    return Group(*panels)
