from typing import Sequence

from rich.console import Console
from rich.panel import Panel


_CONSOLE = Console()
_PANEL_BORDER = "yellow"


def _decorate_title(title: str) -> str:
    core = str(title or "").strip()
    if not core:
        core = "Menu"
    return f"[bold yellow]{core}[/bold yellow]"


def prompt_line(message: str = "Choice: ") -> str:
    """Read one line from the operator. End of input reads as an empty line."""

    try:
        return _CONSOLE.input(f"[bold yellow]{message}[/bold yellow]")
    except EOFError:
        return ""


def prompt_continue(message: str = "(Press enter to continue)") -> None:
    prompt_line(message)


def render_panel(title: str, lines: Sequence[str], *, border_style: str = _PANEL_BORDER, subtitle: str = "") -> None:
    rows = [str(line) for line in lines if str(line).strip()]
    _CONSOLE.print(
        Panel.fit(
            "\n".join(rows) if rows else "...",
            title=_decorate_title(title),
            subtitle=f"[dim]{subtitle}[/dim]" if subtitle else None,
            subtitle_align="left",
            border_style=border_style,
        )
    )


def numbered_menu(
    title: str,
    options: Sequence[str],
    footer_hint: str | None = None,
    prompt: str = "Choice: ",
) -> str:
    """Render a 1-based numbered menu and return the raw entry.

    Validation is left to the caller so invalid entries can be replaced
    instead of re-prompted.
    """

    if not options:
        raise ValueError("numbered_menu requires at least one option")

    lines = [f"{idx}) {option}" for idx, option in enumerate(options, start=1)]
    if footer_hint:
        lines.append("")
        lines.append(f"[dim]{footer_hint}[/dim]")
    render_panel(title, lines)
    return prompt_line(prompt)
