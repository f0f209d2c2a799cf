"""TUI for the gear enhancement simulator using Textual."""
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    RichLog,
    Rule,
    Static,
)
from rich.text import Text

from .auto_enhance import AutoEnhancer
from .config import (
    DEFAULT_BATCH_ATTEMPTS,
    ENHANCE_COST,
    MAX_LEVEL,
    MIN_LEVEL,
    SimConfig,
)
from .engine import EnhancementEngine
from .exceptions import EnhanceSimError
from .market_config import monetary_equivalent
from .models import SECONDARY_CURRENCIES, AttemptOutcome
from .session import EnhancementSession
from .utils import clamp_attempts, clamp_level, format_percent, parse_int


class EnhanceScreen(Screen):
    """Main screen: controls, statistics and the attempt log."""

    CSS = """
    EnhanceScreen {
        layout: vertical;
    }

    #level-caption {
        height: 3;
        padding: 0 1;
        background: $surface;
        border-bottom: solid $primary;
    }

    .caption-field {
        width: 24;
    }

    .control-row {
        height: 3;
        padding: 0 1;
    }

    .control-label {
        width: 20;
        content-align: left middle;
    }

    .control-input {
        width: 12;
    }

    #body {
        height: 1fr;
    }

    .stats-column {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }

    .section-header {
        text-style: bold;
        color: $primary;
    }

    #log-container {
        height: 1fr;
        border: solid $primary;
        margin: 0 1;
    }
    """

    AUTO_FOCUS = "#enhance-button"

    BINDINGS = [
        Binding("e", "enhance", "Enhance"),
        Binding("a", "toggle_auto", "Auto"),
        Binding("r", "reset", "Reset"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, config: SimConfig):
        super().__init__()
        self.config = config
        engine = EnhancementEngine(seed=config.seed, tiered_costs=config.tiered_costs)
        self.session = EnhancementSession(engine=engine, target_level=config.target_level)
        self.session.set_level(config.start_level)
        self.auto: Optional[AutoEnhancer] = None

    def compose(self) -> ComposeResult:
        yield Header()

        with Horizontal(id="level-caption"):
            yield Static("", id="current-display", classes="caption-field")
            yield Static("", id="target-display", classes="caption-field")
            yield Static(f"Cost: {ENHANCE_COST:,} Gold", classes="caption-field")

        with Horizontal(classes="control-row"):
            yield Label("Target Level:", classes="control-label")
            yield Input(
                value=str(self.session.target_level),
                id="target-input",
                classes="control-input",
                type="integer",
            )
            yield Button("Enhance", id="enhance-button", variant="primary")
            yield Button("Auto-Enhance", id="auto-button", variant="success")
            yield Button("Reset", id="reset-button", variant="error")

        with Horizontal(classes="control-row"):
            yield Label("Set Current Level:", classes="control-label")
            yield Input(value=str(MIN_LEVEL), id="level-input", classes="control-input", type="integer")
            yield Button("Set", id="set-level-button")
            yield Label("Total Attempts:", classes="control-label")
            yield Input(
                value=str(self.config.batch_attempts or DEFAULT_BATCH_ATTEMPTS),
                id="attempts-input",
                classes="control-input",
                type="integer",
            )
            yield Button("Run", id="run-button", variant="warning")

        yield Rule()

        with Horizontal(id="body"):
            with Vertical(classes="stats-column"):
                yield Static("Statistics", classes="section-header")
                yield Static("", id="stats-panel")
            with Vertical(classes="stats-column"):
                yield Static("Level Hits", classes="section-header")
                yield Static("", id="hits-panel")

        yield RichLog(id="log-container", highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self._refresh()

    # -- rendering -----------------------------------------------------

    def _refresh(self) -> None:
        session = self.session
        busy = session.is_busy

        self.query_one("#current-display", Static).update(f"Current Level: +{session.current_level}")
        self.query_one("#target-display", Static).update(f"Target Level: +{session.target_level}")

        self.query_one("#enhance-button", Button).disabled = busy or session.at_max_level
        auto_button = self.query_one("#auto-button", Button)
        auto_button.label = "Stop Auto-Enhance" if busy else "Auto-Enhance"
        auto_button.variant = "error" if busy else "success"
        auto_button.disabled = not busy and session.target_reached
        for widget_id in ("#reset-button", "#set-level-button", "#run-button",
                          "#target-input", "#level-input", "#attempts-input"):
            self.query_one(widget_id).disabled = busy

        self.query_one("#stats-panel", Static).update(self._build_stats_text())
        self.query_one("#hits-panel", Static).update(self._build_hits_text())

    def _build_stats_text(self) -> Text:
        session = self.session
        stats = session.stats
        text = Text()
        text.append(f"Total Attempts:   {stats.total_attempts:,}\n")
        text.append(f"Total Gold Spent: {stats.total_gold_spent:,}\n")
        for currency in SECONDARY_CURRENCIES:
            label = currency.value.replace("_", " ").title() + ":"
            text.append(f"{label:<18}{stats.material(currency):,}\n")
        text.append(f"Success Rate:     {format_percent(stats.success_rate)}\n", style="green")
        text.append(f"Damage Rate:      {format_percent(stats.damage_rate)}\n", style="red")
        text.append(f"PHP Cost:         {monetary_equivalent(stats):,.2f} PHP\n")
        text.append(
            f"Chance to reach +{session.target_level} from +{session.current_level}: "
            f"{format_percent(session.reach_chance, 6)}",
            style="bold magenta",
        )
        return text

    def _build_hits_text(self) -> str:
        hits = self.session.stats.level_hits
        cells = [f"+{level:<2}: {hits.get(level, 0):>5}" for level in range(MIN_LEVEL, MAX_LEVEL + 1)]
        rows = ["   ".join(cells[i:i + 3]) for i in range(0, len(cells), 3)]
        return "\n".join(rows)

    def _format_attempt(self, number: int, outcome: AttemptOutcome) -> str:
        result = "[green]Success[/green]" if outcome.success else "[red]Failed[/red]"
        damage = "[red]Yes[/red]" if outcome.damage_occurred else "[green]No[/green]"
        return f"#{number:<5} +{outcome.start_level} -> +{outcome.new_level}  {result}  Damage: {damage}"

    def _log_attempt(self, outcome: AttemptOutcome) -> None:
        log = self.query_one("#log-container", RichLog)
        log.write(self._format_attempt(len(self.session.attempt_log), outcome))

    # -- actions -------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "target-input" and not self.session.is_busy:
            self.session.set_target(clamp_level(parse_int(event.value, MIN_LEVEL)))
            self._refresh()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "enhance-button":
            self.action_enhance()
        elif button_id == "auto-button":
            self.action_toggle_auto()
        elif button_id == "reset-button":
            self.action_reset()
        elif button_id == "set-level-button":
            self._set_level()
        elif button_id == "run-button":
            self._run_batch()

    def action_enhance(self) -> None:
        try:
            outcome = self.session.enhance()
        except EnhanceSimError as e:
            self.notify(e.message, severity="warning")
            return
        if outcome is not None:
            self._log_attempt(outcome)
        self._refresh()

    def action_toggle_auto(self) -> None:
        if self.auto is not None and self.auto.is_active:
            self.auto.stop()
            self._refresh()
            return

        self.auto = AutoEnhancer(
            self.session,
            interval=self.config.auto_interval,
            on_attempt=self._on_auto_attempt,
            on_finish=self._on_auto_finish,
        )
        try:
            self.auto.start()
        except EnhanceSimError as e:
            self.notify(e.message, title="Auto-Enhance", severity="warning")
            return
        self._refresh()

    def _on_auto_attempt(self, outcome: AttemptOutcome) -> None:
        if self.is_mounted:
            self._log_attempt(outcome)
            self._refresh()

    def _on_auto_finish(self) -> None:
        if self.is_mounted:
            self._refresh()

    def _set_level(self) -> None:
        value = parse_int(self.query_one("#level-input", Input).value, MIN_LEVEL)
        try:
            self.session.set_level(value)
        except EnhanceSimError as e:
            self.notify(e.message, severity="warning")
            return
        self._refresh()

    def _run_batch(self) -> None:
        value = parse_int(self.query_one("#attempts-input", Input).value, 1)
        try:
            outcomes = self.session.run_batch(clamp_attempts(value))
        except EnhanceSimError as e:
            self.notify(e.message, severity="warning")
            return
        # Log only the tail of very long batches
        first = max(0, len(outcomes) - 500)
        total = len(self.session.attempt_log)
        log = self.query_one("#log-container", RichLog)
        if first:
            log.write(f"[dim]... {first:,} earlier attempts not shown[/dim]")
        for index, outcome in enumerate(outcomes[first:], start=total - len(outcomes) + first + 1):
            log.write(self._format_attempt(index, outcome))
        self._refresh()

    def action_reset(self) -> None:
        try:
            self.session.reset()
        except EnhanceSimError as e:
            self.notify(e.message, severity="warning")
            return
        self.query_one("#log-container", RichLog).clear()
        self._refresh()

    def action_quit(self) -> None:
        if self.auto is not None:
            self.auto.stop()
        self.app.exit()


class EnhanceSimApp(App):
    """Main TUI application."""

    TITLE = "Enhancement Simulator"
    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, config: Optional[SimConfig] = None):
        super().__init__()
        self.config = config or SimConfig()

    def on_mount(self) -> None:
        self.push_screen(EnhanceScreen(self.config))


def main():
    """Entry point for the TUI."""
    app = EnhanceSimApp()
    app.run()


if __name__ == "__main__":
    main()
