"""Decision Matrix terminal application.

A Textual-based interface for editing a payoff matrix and watching the
selected decision rule re-evaluate it on every change:
- Rule selector (Hurwicz shows a lambda input)
- Matrix table with derivation and result columns
- Recommended alternative highlighted
- Add, remove and rename alternatives and states
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, Rule, Select, Static

from decisionmatrix.config import configure_logging
from decisionmatrix.engine import format_lambda, format_number
from decisionmatrix.errors import DecisionMatrixError
from decisionmatrix.models.rules import RULE_LABELS, RuleType
from decisionmatrix.models.workspace import DecisionWorkspace, WorkspaceReport

logger = logging.getLogger(__name__)

RECOMMENDED_MARKER = "← recommended"


# =============================================================================
# Theme and Styles
# =============================================================================

CSS = """
Screen {
    background: $surface;
}

#controls {
    height: auto;
    padding: 0 1;
}

.control-label {
    width: auto;
    padding: 1 1 0 0;
    text-style: bold;
}

#rule-select {
    width: 36;
}

#lambda-row {
    height: auto;
}

#lambda-input {
    width: 12;
}

.lambda-hint {
    padding: 1 0 0 1;
    color: $text-muted;
}

#matrix-table {
    height: 1fr;
    border: solid $primary;
    margin: 0 1;
}

#summary {
    height: auto;
    padding: 0 1;
    text-style: bold;
    color: $success;
}

#help-text {
    height: auto;
    padding: 0 1;
    color: $text-muted;
}

#edit-modal {
    align: center middle;
    width: 100%;
    height: 100%;
}

.modal-container {
    width: 60;
    height: auto;
    border: solid green;
    padding: 1 2;
    background: $surface;
}

.modal-title {
    text-align: center;
    text-style: bold;
    color: $success;
}

.button-row {
    height: auto;
    margin-top: 1;
}
"""


# =============================================================================
# Screens
# =============================================================================


class EditValueModal(ModalScreen[Optional[str]]):
    """Modal asking for a single text value (payoff or label)."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, prompt: str, value: str) -> None:
        super().__init__()
        self.prompt = prompt
        self.initial_value = value

    def compose(self) -> ComposeResult:
        with Container(id="edit-modal"):
            with Vertical(classes="modal-container"):
                yield Static(self.prompt, classes="modal-title")
                yield Rule()
                yield Input(value=self.initial_value, id="value-input")
                with Horizontal(classes="button-row"):
                    yield Button("OK", id="ok", variant="success")
                    yield Button("Cancel", id="cancel", variant="default")

    def on_mount(self) -> None:
        self.query_one("#value-input", Input).focus()

    @on(Input.Submitted, "#value-input")
    def submit_from_input(self) -> None:
        self.dismiss(self.query_one("#value-input", Input).value)

    @on(Button.Pressed, "#ok")
    def submit_from_button(self) -> None:
        self.dismiss(self.query_one("#value-input", Input).value)

    @on(Button.Pressed, "#cancel")
    def cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class MatrixScreen(Screen):
    """Main screen: rule selection, matrix table and recommendation."""

    BINDINGS = [
        Binding("e", "edit_cell", "Edit"),
        Binding("n", "rename", "Rename"),
        Binding("a", "add_alternative", "Add alternative"),
        Binding("s", "add_state", "Add state"),
        Binding("d", "remove_alternative", "Delete alternative"),
        Binding("x", "remove_state", "Delete state"),
    ]

    def __init__(self, workspace: DecisionWorkspace) -> None:
        super().__init__()
        self.workspace = workspace
        self.report: Optional[WorkspaceReport] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="controls"):
            with Horizontal():
                yield Static("Decision rule:", classes="control-label")
                yield Select(
                    [(RULE_LABELS[rule], rule.value) for rule in RuleType],
                    value=self.workspace.rule_type.value,
                    allow_blank=False,
                    id="rule-select",
                )
            with Horizontal(id="lambda-row"):
                yield Static("Lambda (λ):", classes="control-label")
                yield Input(value=format_lambda(self.workspace.hurwicz_lambda), id="lambda-input")
                yield Static("(λ = weight of the maximum, 1-λ of the minimum)", classes="lambda-hint")
        yield DataTable(id="matrix-table", cursor_type="cell", zebra_stripes=True)
        yield Static("", id="summary")
        yield Static(
            "e: edit cell   n: rename   a/s: add alternative/state   d/x: delete alternative/state",
            id="help-text",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_matrix()
        self.query_one("#matrix-table", DataTable).focus()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def refresh_matrix(self) -> None:
        """Re-evaluate the workspace and rebuild the table from scratch."""
        table = self.query_one("#matrix-table", DataTable)
        cursor = table.cursor_coordinate
        self.query_one("#lambda-row").display = self.workspace.rule_type is RuleType.HURWICZ

        report = self.workspace.evaluate()
        self.report = report

        table.clear(columns=True)
        table.add_columns("Alternative", *report.states, "Derivation", "Result")
        for row in report.rows:
            style = "bold" if row.recommended else ""
            result = row.display_score + (f"  {RECOMMENDED_MARKER}" if row.recommended else "")
            table.add_row(
                Text(row.label, style=style),
                *(Text(format_number(v), style=style) for v in row.payoffs),
                Text(row.derivation, style="dim" if not row.recommended else style),
                Text(result, style="bold green" if row.recommended else ""),
            )

        table.move_cursor(
            row=min(cursor.row, self.workspace.n_alternatives - 1),
            column=min(cursor.column, self.workspace.n_states + 2),
        )
        self.query_one("#summary", Static).update(
            Text(f"Recommended ({report.rule_label}): {report.recommended_label}")
        )

    def _cursor_state(self) -> Optional[int]:
        """State index under the cursor, or None if the cursor is not on a payoff."""
        column = self.query_one("#matrix-table", DataTable).cursor_coordinate.column
        if 1 <= column <= self.workspace.n_states:
            return column - 1
        return None

    def _cursor_alternative(self) -> int:
        return self.query_one("#matrix-table", DataTable).cursor_coordinate.row

    # -------------------------------------------------------------------------
    # Rule controls
    # -------------------------------------------------------------------------

    @on(Select.Changed, "#rule-select")
    def rule_changed(self, event: Select.Changed) -> None:
        try:
            self.workspace.set_rule(event.value)
        except DecisionMatrixError as e:
            self.notify(str(e), severity="error")
            event.select.value = self.workspace.rule_type.value
            return
        self.refresh_matrix()

    @on(Input.Submitted, "#lambda-input")
    def lambda_submitted(self, event: Input.Submitted) -> None:
        try:
            self.workspace.set_lambda(event.value.strip())
        except DecisionMatrixError as e:
            self.notify(str(e), severity="error")
            event.input.value = format_lambda(self.workspace.hurwicz_lambda)
            return
        self.refresh_matrix()

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def action_edit_cell(self) -> None:
        i, j = self._cursor_alternative(), self._cursor_state()
        if j is None:
            self.notify("Move the cursor onto a payoff to edit it", severity="warning")
            return

        def apply(value: Optional[str]) -> None:
            if value is None:
                return
            try:
                self.workspace.set_cell(i, j, value)
            except DecisionMatrixError as e:
                self.notify(str(e), severity="error")
            self.refresh_matrix()

        prompt = f"{self.workspace.alternatives[i]} / {self.workspace.states[j]}"
        self.app.push_screen(EditValueModal(prompt, format_number(self.workspace.rows[i][j])), apply)

    def action_rename(self) -> None:
        i = self._cursor_alternative()
        j = self._cursor_state()
        column = self.query_one("#matrix-table", DataTable).cursor_coordinate.column

        if column == 0:
            current = self.workspace.alternatives[i]

            def apply(value: Optional[str]) -> None:
                if value is not None:
                    self.workspace.rename_alternative(i, value)
                    self.refresh_matrix()

        elif j is not None:
            current = self.workspace.states[j]

            def apply(value: Optional[str]) -> None:
                if value is not None:
                    self.workspace.rename_state(j, value)
                    self.refresh_matrix()

        else:
            self.notify("Move the cursor onto a name or state column to rename", severity="warning")
            return

        self.app.push_screen(EditValueModal(f"Rename '{current}'", current), apply)

    def action_add_alternative(self) -> None:
        self.workspace.add_alternative()
        self.refresh_matrix()

    def action_add_state(self) -> None:
        self.workspace.add_state()
        self.refresh_matrix()

    def action_remove_alternative(self) -> None:
        if not self.workspace.remove_alternative(self._cursor_alternative()):
            self.notify("At least one alternative is required", severity="warning")
            return
        self.refresh_matrix()

    def action_remove_state(self) -> None:
        j = self._cursor_state()
        if j is None:
            self.notify("Move the cursor onto a state column to delete it", severity="warning")
            return
        if not self.workspace.remove_state(j):
            self.notify("At least one state is required", severity="warning")
            return
        self.refresh_matrix()


# =============================================================================
# Main Application
# =============================================================================


class DecisionMatrixApp(App):
    """Main decision matrix terminal application."""

    TITLE = "Decision Matrix"
    SUB_TITLE = "Decisions under uncertainty"
    CSS = CSS

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(self, workspace: Optional[DecisionWorkspace] = None) -> None:
        super().__init__()
        self.workspace = workspace if workspace is not None else DecisionWorkspace.default()

    def on_mount(self) -> None:
        """Show the matrix screen when the app starts."""
        self.push_screen(MatrixScreen(self.workspace))


def main() -> None:
    """Entry point for the `decisionmatrix` command.

    For debugging with Textual devtools:
        1. In one terminal: textual console
        2. In another terminal: textual run --dev src/decisionmatrix/cli/app.py
    """
    configure_logging()
    logger.info("Starting decision matrix terminal UI")
    DecisionMatrixApp().run()


if __name__ == "__main__":
    main()
