"""
Rich terminal rendering for the Memory game.

Works from ``MemoryGame.get_public_state()`` only, so face-down cards
never leak their symbol.
"""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box


# Colour tokens in the symbol table name a hue; map each to a rich style.
_HUE_STYLES = {
    "rose": "bright_red",
    "amber": "orange1",
    "yellow": "yellow",
    "purple": "magenta",
    "sky": "bright_cyan",
    "emerald": "green",
}

_ICON_GLYPHS = {
    "heart": "♥",
    "star": "★",
    "sun": "☀",
    "moon": "☾",
    "cloud": "☁",
    "flower": "✿",
}

GRID_COLUMNS = 4


def _symbol_style(color: str) -> str:
    parts = color.split("-")
    hue = parts[1] if len(parts) > 1 else color
    return _HUE_STYLES.get(hue, "white")


def _card_cell(card: Dict[str, Any]) -> Text:
    label = Text(f"{card['index']:>2} ", style="dim")
    symbol = card.get("symbol")
    if symbol is None:
        label.append("  ?  ", style="bold white on grey23")
        return label

    glyph = _ICON_GLYPHS.get(symbol["icon"], symbol["icon"][:1].upper())
    style = _symbol_style(symbol["color"])
    if card["is_matched"]:
        label.append(f"  {glyph}  ", style=f"bold {style} on grey11")
    else:
        label.append(f"  {glyph}  ", style=f"bold {style} reverse")
    return label


def render_board(public_state: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Print the card grid and the match counter."""
    if console is None:
        console = Console()

    grid = Table(box=box.ROUNDED, show_header=False, pad_edge=True)
    for _ in range(GRID_COLUMNS):
        grid.add_column(justify="center", width=9)

    cards = public_state["cards"]
    for start in range(0, len(cards), GRID_COLUMNS):
        row = [_card_cell(c) for c in cards[start:start + GRID_COLUMNS]]
        row.extend("" for _ in range(GRID_COLUMNS - len(row)))
        grid.add_row(*row)

    status = (
        f"Pairs found: [bold]{public_state['match_count']}[/]"
        f"/{public_state['total_pairs']}"
    )
    if public_state["is_resolving"]:
        status += "  [dim italic]checking...[/]"

    console.print(grid)
    console.print(status)


def render_result(score: int, total_pairs: int, console: Optional[Console] = None) -> None:
    """Print the end-of-game panel."""
    if console is None:
        console = Console()

    console.print(Panel(
        Text.assemble(
            ("All pairs found!", "bold bright_green"),
            "\n\n",
            (f"{total_pairs} pairs", "cyan"),
            ("  •  ", "dim"),
            (f"Score: {score}", "bold cyan"),
        ),
        title="[bold bright_cyan]  MEMORY  [/]",
        border_style="cyan",
        expand=False,
        padding=(0, 2),
    ))


def render_snapshot(snapshot, console: Optional[Console] = None) -> None:
    """Print a persisted snapshot as a table, symbols included."""
    if console is None:
        console = Console()

    table = Table(
        box=box.ROUNDED,
        header_style="bold dim",
        title=(
            f"[bold]Saved game[/]  {snapshot.phase.value}  •  "
            f"{snapshot.match_count} matched"
            + ("  •  resolving" if snapshot.is_resolving else "")
        ),
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Card", justify="right", width=5)
    table.add_column("Symbol", width=10)
    table.add_column("State", width=10)

    for index, card in enumerate(snapshot.cards):
        symbol = card.symbol
        state = "matched" if card.is_matched else "flipped" if card.is_flipped else "[dim]down[/]"
        table.add_row(
            str(index),
            str(card.id),
            f"[{_symbol_style(symbol.color)}]{symbol.icon}[/]",
            state,
        )

    console.print(table)
