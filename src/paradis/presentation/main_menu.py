import time

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from paradis.application.services.menu_rules import parse_menu_choice
from paradis.application.services.session_service import SessionService
from paradis.domain.models.affiliation import Affiliation
from paradis.presentation.game_loop import run_battle_loop
from paradis.presentation.menu_controls import numbered_menu, prompt_line


_CONSOLE = Console()
_SPLASH_BORDER = "yellow"
_BRIEFING_BORDER = "cyan"
_SUMMARY_BORDER = "green"
_EXIT_BORDER = "magenta"


def _ornate_title(title: str) -> str:
    return f"[bold yellow]{title}[/bold yellow]"


def _pause(session_service: SessionService) -> None:
    if session_service.pacing_seconds > 0:
        time.sleep(session_service.pacing_seconds)


def welcome_player() -> bool:
    _CONSOLE.print(
        Panel.fit(
            "Welcome to Paradis! Join the missions in defeating the titans!",
            border_style=_SPLASH_BORDER,
            title=_ornate_title("Paradis"),
        )
    )
    raw = numbered_menu("Press", ["Join Mission"], footer_hint="OTHER NUMBER KEY -> Quit")
    return parse_menu_choice(raw) == 1


def ask_player_name() -> str:
    return prompt_line("Enter your name: ")


def ask_player_affiliation(session_service: SessionService) -> Affiliation:
    choices = session_service.affiliation_choices()
    raw = numbered_menu("Choose a squad", [str(choice) for choice in choices])
    resolution = session_service.resolve_affiliation(raw)
    if resolution.substituted:
        _CONSOLE.print("[bold red]CHOICE INVALID.[/bold red]\nYou were randomly assigned by the officer.")
    return resolution.value


def choose_mission_location(session_service: SessionService) -> str:
    raw = numbered_menu("Choose location", session_service.location_names())
    resolution = session_service.resolve_location_name(raw)
    if resolution.substituted:
        _CONSOLE.print("[bold red]CHOICE INVALID.[/bold red]\nYour squad captain decided to make the choice.")
    return resolution.value


def _show_briefing(session_service: SessionService, state) -> None:
    briefing = session_service.briefing(state)
    _CONSOLE.print(f"\nPlayer: {escape(briefing.player_name)}")
    _CONSOLE.print(f"Regiment/Squad: {briefing.affiliation_line}")
    for line in briefing.narrative_lines:
        _pause(session_service)
        _CONSOLE.print(escape(line))
    _pause(session_service)
    body = [f"Location: {escape(briefing.location_name)}"]
    if briefing.location_description:
        body.append(f"[dim]{escape(briefing.location_description)}[/dim]")
    body.append(f"Mission: Defeat the {escape(briefing.enemy_name)}!")
    _CONSOLE.print(
        Panel.fit(
            "\n".join(body),
            title=_ornate_title("Mission Briefing"),
            border_style=_BRIEFING_BORDER,
        )
    )


def _show_summary(session_service: SessionService) -> None:
    battle_log = session_service.battle_log
    if battle_log is None:
        return
    lines = battle_log.summary_lines()
    if not lines:
        return
    _CONSOLE.print(
        Panel.fit(
            "\n".join(escape(line) for line in lines),
            title=_ornate_title("After-Action Report"),
            border_style=_SUMMARY_BORDER,
        )
    )


def main_menu(session_service: SessionService) -> None:
    if welcome_player():
        player_name = ask_player_name()
        affiliation = ask_player_affiliation(session_service)
        location_name = choose_mission_location(session_service)

        state = session_service.start_session(player_name, affiliation, location_name)
        _show_briefing(session_service, state)
        run_battle_loop(session_service, state)
        _show_summary(session_service)

    _CONSOLE.print(Panel.fit("[bold magenta]Closing game...[/bold magenta]", border_style=_EXIT_BORDER))
