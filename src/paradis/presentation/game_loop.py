from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from paradis.application.dtos import BattleStatsView, TurnResult
from paradis.application.services.battle_service import BattleAction, BattleOutcome, BattleState
from paradis.application.services.menu_rules import parse_menu_choice
from paradis.application.services.session_service import SessionService
from paradis.presentation.menu_controls import numbered_menu, prompt_continue


_CONSOLE = Console()
_BORDER_STATS = "yellow"
_BORDER_WIN = "green"
_BORDER_LOSS = "red"
_BORDER_NEUTRAL = "magenta"

_OUTCOME_BORDERS = {
    BattleOutcome.PLAYER_WINS.value: _BORDER_WIN,
    BattleOutcome.ENEMY_WINS.value: _BORDER_LOSS,
    BattleOutcome.MUTUAL_DEFEAT.value: _BORDER_LOSS,
}


def _render_stats(stats: BattleStatsView) -> None:
    table = Table.grid(padding=(0, 1))
    table.add_column(style="bold yellow", justify="right")
    table.add_column(style="white")
    table.add_row("Player", escape(stats.player.name))
    table.add_row("HP", str(stats.player.hp))
    table.add_row("", "")
    table.add_row("Enemy", escape(stats.enemy.name))
    table.add_row("HP", str(stats.enemy.hp))
    _CONSOLE.print(
        Panel.fit(
            table,
            title="[bold yellow]Player & Enemy Stats[/bold yellow]",
            subtitle=f"[dim]{escape(stats.location_name)} · turn {stats.turn}[/dim]",
            subtitle_align="left",
            border_style=_BORDER_STATS,
        )
    )


def _render_beats(result: TurnResult) -> None:
    for beat in result.beats:
        for line in beat:
            _CONSOLE.print(escape(line))
        prompt_continue()


def _render_outcome(result: TurnResult) -> None:
    if not result.outcome_message:
        return
    border = _OUTCOME_BORDERS.get(result.outcome or "", _BORDER_NEUTRAL)
    _CONSOLE.print(Panel.fit(escape(result.outcome_message), border_style=border))


def choose_action(state: BattleState) -> BattleAction:
    raw = numbered_menu(
        "What would you do?",
        ["FIGHT!", f"ASK HELP ({state.help_left} left)", "TRY ESCAPE from enemy"],
        footer_hint="Other number keys -> QUIT",
        prompt="Choose Action: ",
    )
    return BattleAction.from_choice(parse_menu_choice(raw))


def choose_comrade(session_service: SessionService) -> str:
    raw = numbered_menu("Choose comrade", session_service.comrade_names())
    resolution = session_service.resolve_comrade_name(raw)
    if resolution.substituted:
        _CONSOLE.print("[bold red]CHOICE INVALID.[/bold red]\nBut a random comrade came near you.")
    return resolution.value


def run_battle_loop(session_service: SessionService, state: BattleState) -> BattleOutcome:
    battle = session_service.battle_service

    _render_stats(battle.stats_view(state))
    prompt_continue()

    while not state.is_over:
        action = choose_action(state)
        if action is BattleAction.ASK_HELP and state.help_left > 0:
            result = battle.ask_help(state, choose_comrade(session_service))
        else:
            result = battle.take_turn(state, action)

        _render_beats(result)
        if result.show_stats:
            _render_stats(battle.stats_view(state))
        _render_outcome(result)

    return state.outcome
