"""Main Textual application for browsing a parsed report."""

from dataclasses import dataclass
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.widgets import Header, Footer, Static, Input, ListView, ListItem, Label
from textual.timer import Timer
from textual import events
from rich.text import Text

from ..models import Report, Scenario, StepStatus


STATUS_COLORS = {
    StepStatus.PASSED: "green",
    StepStatus.FAILED: "red",
    StepStatus.SKIPPED: "yellow",
    StepStatus.PENDING: "dim yellow",
    StepStatus.UNDEFINED: "magenta",
}

STATUS_ICONS = {
    StepStatus.PASSED: "+",
    StepStatus.FAILED: "x",
    StepStatus.SKIPPED: "-",
    StepStatus.PENDING: "~",
    StepStatus.UNDEFINED: "?",
}


@dataclass
class ScenarioRow:
    """Scenario together with the feature it belongs to."""
    feature_name: str
    scenario: Scenario

    @property
    def key(self) -> str:
        return f"{self.feature_name}::{self.scenario.id or self.scenario.name}"


def build_rows(report: Report) -> list[ScenarioRow]:
    return [
        ScenarioRow(feature_name=feature.name or "", scenario=scenario)
        for feature in report.features
        for scenario in feature.scenarios
    ]


class ScenarioListItem(ListItem):
    """Single scenario in the list."""

    def __init__(self, row: ScenarioRow):
        super().__init__()
        self.row = row

    def compose(self) -> ComposeResult:
        yield Label(self._build_label())

    def _build_label(self) -> Text:
        status = self.row.scenario.status
        color = STATUS_COLORS.get(status, "white")
        status_icon = STATUS_ICONS.get(status, "?")

        text = Text()
        text.append(f"[{status_icon}] ", style=color)
        text.append(f"{self.row.scenario.name or self.row.scenario.id} ", style="bold")
        text.append(self.row.feature_name, style="dim")
        return text


class ScenarioDetailPanel(VerticalScroll):
    """Panel showing a scenario and its steps."""

    can_focus = True

    BINDINGS = [
        Binding("j", "scroll_down", "Scroll Down", show=False),
        Binding("k", "scroll_up", "Scroll Up", show=False),
        Binding("home", "scroll_home", "Top", show=False),
        Binding("end", "scroll_end", "Bottom", show=False),
    ]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.current_row: Optional[ScenarioRow] = None

    def compose(self) -> ComposeResult:
        yield Static("Select a scenario to view steps", id="detail-content")

    def show_scenario(self, row: ScenarioRow):
        self.current_row = row
        self.query_one("#detail-content", Static).update(self._build_detail_content(row))
        self.scroll_home(animate=False)

    def action_scroll_down(self) -> None:
        self.scroll_down(animate=False)

    def action_scroll_up(self) -> None:
        self.scroll_up(animate=False)

    def action_scroll_home(self) -> None:
        self.scroll_home(animate=False)

    def action_scroll_end(self) -> None:
        self.scroll_end(animate=False)

    def _build_detail_content(self, row: ScenarioRow) -> Text:
        """Build rich Text content for scenario details."""
        s = row.scenario
        text = Text()

        text.append(s.name or "(unnamed scenario)", style="bold cyan")
        text.append("\n\n")

        for label, value in (
            ("Feature", row.feature_name),
            ("ID", s.id),
            ("Tag", s.tag),
            ("File", s.file),
        ):
            if value:
                text.append(f"{label}: ", style="cyan")
                text.append(value)
                text.append("\n")

        text.append("Status: ", style="cyan")
        if s.status:
            text.append(s.status.value, style=STATUS_COLORS.get(s.status, "white"))
        text.append("\n")

        text.append("\n")
        text.append(f"Steps ({len(s.steps)}):\n", style="yellow bold")
        for step in s.steps:
            color = STATUS_COLORS.get(step.status, "white")
            text.append(f"  [{STATUS_ICONS.get(step.status, '?')}] ", style=color)
            text.append(step.name or "(unnamed step)")
            if step.file:
                text.append(f"  {step.file}", style="dim")
            text.append("\n")

        return text


class ReportViewerApp(App):
    """Interactive viewer for a parsed Cucumber report."""

    CSS = """
    Screen {
        background: $surface;
    }

    #main-container {
        height: 100%;
    }

    #left-panel {
        width: 45%;
        min-width: 30;
        border-right: solid $primary;
    }

    #search-input {
        margin: 1;
        width: 100%;
    }

    #status-line {
        padding: 0 1;
        background: $surface-darken-1;
        color: $text-muted;
        height: 1;
    }

    #scenario-list {
        height: 1fr;
        scrollbar-gutter: stable;
    }

    #scenario-list:focus {
        border: tall $accent;
    }

    #detail-panel {
        width: 55%;
        padding: 1 2;
    }

    #detail-panel:focus {
        border: tall $success;
    }

    ScenarioListItem {
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("/", "focus_search", "Search"),
        Binding("a", "show_all", "All"),
        Binding("p", "show_passed", "Passed"),
        Binding("f", "show_failed", "Failed"),
        Binding("tab", "switch_focus", "Switch", show=False),
    ]

    def __init__(self, report: Report, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.report = report
        self.all_rows = build_rows(report)
        self.filtered_rows = self.all_rows.copy()
        self.current_filter = "all"
        self.search_query = ""
        self._search_timer: Optional[Timer] = None
        self._status_counts = self._compute_status_counts()

    def _compute_status_counts(self) -> dict:
        counts = {"total": len(self.all_rows), "failed": 0, "passed": 0}
        for row in self.all_rows:
            if row.scenario.status == StepStatus.FAILED:
                counts["failed"] += 1
            elif row.scenario.status == StepStatus.PASSED:
                counts["passed"] += 1
        return counts

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Horizontal(
                Vertical(
                    Input(placeholder="Search (scenario, feature or tag)...", id="search-input"),
                    Static(self._get_status_line(), id="status-line"),
                    ListView(id="scenario-list"),
                    id="left-panel",
                ),
                ScenarioDetailPanel(id="detail-panel"),
                id="main-container",
            ),
        )
        yield Footer()

    def on_mount(self):
        self.title = self.report.report_file_name or "Cucumber report"
        if self.report.duration:
            self.sub_title = f"Finished in {self.report.duration}"
        self._populate_list()
        self.query_one("#scenario-list", ListView).focus()

    def _populate_list(self):
        list_view = self.query_one("#scenario-list", ListView)
        list_view.clear()
        for row in self.filtered_rows:
            list_view.append(ScenarioListItem(row))

    def _get_status_line(self) -> str:
        shown = len(self.filtered_rows)
        total = self._status_counts["total"]
        failed = self._status_counts["failed"]
        passed = self._status_counts["passed"]

        parts = [f"{shown}/{total}"]
        if failed:
            parts.append(f"F:{failed}")
        if passed:
            parts.append(f"P:{passed}")
        parts.append(f"[{self.current_filter}]")

        return " " + " | ".join(parts)

    def filter_rows(self) -> list[ScenarioRow]:
        """Rows matching the current status filter and search query."""
        rows = self.all_rows

        if self.current_filter == "failed":
            rows = [r for r in rows if r.scenario.status == StepStatus.FAILED]
        elif self.current_filter == "passed":
            rows = [r for r in rows if r.scenario.status == StepStatus.PASSED]

        if self.search_query:
            query = self.search_query.lower()
            rows = [r for r in rows
                    if query in (r.scenario.name or "").lower()
                    or query in r.feature_name.lower()
                    or query in (r.scenario.tag or "").lower()]

        return rows

    def _apply_filters(self):
        self.filtered_rows = self.filter_rows()
        self._populate_list()
        self.query_one("#status-line", Static).update(self._get_status_line())

    def on_key(self, event: events.Key) -> None:
        search_input = self.query_one("#search-input", Input)
        scenario_list = self.query_one("#scenario-list", ListView)

        if search_input.has_focus:
            if event.key in ("down", "enter"):
                scenario_list.focus()
                event.prevent_default()
                event.stop()
            elif event.key == "escape":
                search_input.value = ""
                self.search_query = ""
                self._apply_filters()
                scenario_list.focus()
                event.prevent_default()
                event.stop()

    def on_input_changed(self, event: Input.Changed):
        if event.input.id == "search-input":
            self.search_query = event.value
            if self._search_timer is not None:
                self._search_timer.stop()
            self._search_timer = self.set_timer(0.2, self._apply_filters)

    def on_list_view_highlighted(self, event: ListView.Highlighted):
        if event.item and isinstance(event.item, ScenarioListItem):
            self.query_one("#detail-panel", ScenarioDetailPanel).show_scenario(event.item.row)

    def on_list_view_selected(self, event: ListView.Selected):
        if isinstance(event.item, ScenarioListItem):
            detail_panel = self.query_one("#detail-panel", ScenarioDetailPanel)
            detail_panel.show_scenario(event.item.row)
            detail_panel.focus()

    def action_switch_focus(self):
        detail_panel = self.query_one("#detail-panel", ScenarioDetailPanel)
        if detail_panel.has_focus:
            self.query_one("#scenario-list", ListView).focus()
        elif detail_panel.current_row:
            detail_panel.focus()

    def action_focus_search(self):
        self.query_one("#search-input", Input).focus()

    def action_show_all(self):
        self.current_filter = "all"
        self._apply_filters()

    def action_show_passed(self):
        self.current_filter = "passed"
        self._apply_filters()

    def action_show_failed(self):
        self.current_filter = "failed"
        self._apply_filters()
