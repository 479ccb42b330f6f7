# -*- coding: utf-8 -*-
"""
Interactive Menu Session

Menu-driven terminal UI over an :class:`~unitconv.engine.Engine`:
numbered categories, then Batch Conversion, History, Help and Quit.

Prompts that expect a unit or a number accept at most
``config.max_attempts`` consecutive invalid answers; after that the flow
returns to the menu without touching the history.
"""

import logging
from typing import Callable, List, Optional, Tuple, TypeVar

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from unitconv.calculation.unit_converter import parse_number, parse_quantity
from unitconv.engine import Engine
from unitconv.exceptions import (
    ConversionError,
    ParseNumberError,
    RetryBudgetExhausted,
    UnknownUnitError,
)
from unitconv.formatting import format_number
from unitconv.models import ALL, Category

logger = logging.getLogger(__name__)

T = TypeVar("T")

MENU_EXTRAS = ("Batch Conversion", "History", "Help", "Quit")


class InteractiveSession:
    """Menu loop bound to one engine.

    Args:
        engine: Engine to convert with and record into.
        console: Rich console for output (a default console if omitted).
        ask: Function that shows a prompt and returns the typed line.
            Raises EOFError when input is exhausted. Defaults to
            ``rich.prompt.Prompt.ask`` on ``console``.
    """

    def __init__(
        self,
        engine: Engine,
        console: Optional[Console] = None,
        ask: Optional[Callable[[str], str]] = None,
    ):
        self.engine = engine
        self.console = console or Console()
        self._ask = ask or self._prompt
        self.max_attempts = engine.config.max_attempts

    def _prompt(self, text: str) -> str:
        return Prompt.ask(text, console=self.console, default="", show_default=False)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Show the menu until the user quits or input ends."""
        try:
            while True:
                self.show_main_menu()
                if not self.handle_choice(self._ask("Enter your choice")):
                    break
        except EOFError:
            logger.debug("Input closed, leaving interactive session")
        self.console.print("Goodbye!")

    def menu_entries(self) -> List[str]:
        return [c.value for c in self.engine.categories()] + list(MENU_EXTRAS)

    def show_main_menu(self) -> None:
        self._clear()
        self._header("Ultimate Unit Converter")
        self.console.print("Select a category:\n")
        categories = self.engine.categories()
        for number, label in enumerate(self.menu_entries(), start=1):
            if number == len(categories) + 1:
                self.console.print()
            self.console.print(f"{number:2d}. {label}")
        self.console.print()

    def handle_choice(self, raw: str) -> bool:
        """Dispatch one menu answer. Returns False when the user quits."""
        text = raw.strip()
        if not text:
            self.print_error("Please enter a choice.")
            return True
        if text[0] in "qQ":
            return False

        try:
            number = int(text)
        except ValueError:
            self.print_error("Invalid choice!")
            return True

        categories = self.engine.categories()
        n = len(categories)
        if 1 <= number <= n:
            self.handle_conversion(categories[number - 1])
        elif number == n + 1:
            self.batch_conversion()
        elif number == n + 2:
            self.show_history()
        elif number == n + 3:
            self.show_help()
        elif number == n + 4:
            return False
        else:
            self.print_error("Invalid choice!")
        return True

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def show_category_menu(self, category: Category) -> None:
        self._clear()
        self._header(category.value)
        table = Table(title="Available units", box=box.SIMPLE_HEAD)
        table.add_column("Unit", style="cyan")
        table.add_column("Symbol", style="green")
        table.add_column("Description")
        for unit in self.engine.units(category):
            table.add_row(escape(unit.name), escape(unit.symbol), escape(unit.description))
        self.console.print(table)

    def handle_conversion(self, category: Category) -> None:
        """Ask for a value with its unit and a target unit, then convert."""
        self.show_category_menu(category)
        try:
            value, from_token = self.ask_with_retries(
                "Enter value and unit (e.g. '10 km')",
                lambda text: self._parse_quantity_in(text, category),
            )
            to_token = self.ask_with_retries(
                "Convert to",
                lambda text: self._parse_unit_in(text, category),
            )
            result = self.engine.convert(value, from_token, to_token, category)
        except RetryBudgetExhausted as e:
            self.print_error(e.message)
            return
        except ConversionError as e:
            self.print_error(e.message)
            return

        self.console.print(
            f"\nResult: {format_number(result.value)} {escape(result.from_token)} = "
            f"{format_number(result.result)} {escape(result.to_token)}\n"
        )
        if result.precision_warning:
            self.print_warning("Very large magnitude; the result may have lost precision.")
        self._report_persistence()
        self.pause()

    def batch_conversion(self) -> None:
        """Convert a list of values (one per line, blank line ends) with one unit pair.

        At most ``config.max_history`` values are read, since older ones
        would be evicted from the history straight away.
        """
        self._clear()
        self._header("Batch Conversion Mode")
        self.console.print("Enter values to convert (one per line, empty line to finish):")

        limit = self.engine.config.max_history
        values: List[float] = []
        while len(values) < limit:
            text = self._ask("Value").strip()
            if not text:
                break
            try:
                values.append(parse_number(text))
            except ParseNumberError:
                self.print_error("Invalid number! Skipping...")
        else:
            self.print_warning(f"Maximum of {limit} values reached.")

        if not values:
            self.print_error("No values entered!")
            self.pause()
            return

        try:
            from_token = self.ask_with_retries(
                "Convert from",
                lambda text: self._parse_unit_in(text, ALL),
            )
            category = self.engine.describe(from_token).category
            to_token = self.ask_with_retries(
                "Convert to",
                lambda text: self._parse_unit_in(text, category),
            )
            results = self.engine.convert_batch(values, from_token, to_token)
        except RetryBudgetExhausted as e:
            self.print_error(e.message)
            return
        except ConversionError as e:
            self.print_error(e.message)
            return

        self.console.print("\nResults:")
        for result in results:
            self.console.print(
                f"{result.value:.8g} {escape(result.from_token)} = "
                f"{result.result:.8g} {escape(result.to_token)}"
            )
        self._report_persistence()
        self.pause()

    def show_history(self) -> None:
        self._clear()
        self._header("Conversion History")
        history = self.engine.history

        if len(history) == 0:
            self.print_error("No conversion history available!")
            self.pause()
            return

        self.console.print(self.history_table())
        self.console.print("\nOptions:\n1. Clear history\n2. Export to CSV\n3. Return to menu")
        choice = self._ask("Enter your choice").strip()
        if choice == "1":
            self.engine.clear_history()
            self._report_persistence()
            self.console.print("History cleared!")
        elif choice == "2":
            if self.engine.export_history():
                self.console.print(f"History exported to {escape(self.engine.config.csv_file)}")
            else:
                self._report_persistence()
        elif choice == "3":
            return
        else:
            self.print_error("Invalid choice!")
        self.pause()

    def history_table(self) -> Table:
        table = Table(box=box.SIMPLE_HEAD)
        for column in ("No.", "From", "To", "Value", "Result", "Time"):
            table.add_column(column)
        for number, entry in enumerate(self.engine.history, start=1):
            table.add_row(
                str(number),
                escape(entry.from_symbol),
                escape(entry.to_symbol),
                format_number(entry.value),
                format_number(entry.result),
                entry.local_time(),
            )
        return table

    def show_help(self) -> None:
        self._clear()
        self._header("Help")
        self.console.print(HELP_TEXT)
        self.pause()

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    def ask_with_retries(self, prompt: str, parse: Callable[[str], T]) -> T:
        """Ask until ``parse`` accepts the answer or the retry budget runs out.

        ``parse`` signals a bad answer with UnknownUnitError or
        ParseNumberError.

        Raises:
            RetryBudgetExhausted: After ``max_attempts`` consecutive failures.
        """
        for attempt in range(1, self.max_attempts + 1):
            text = self._ask(prompt)
            try:
                return parse(text)
            except (UnknownUnitError, ParseNumberError) as e:
                logger.debug("Attempt %d/%d rejected: %s", attempt, self.max_attempts, e)
                self.print_error(f"{e.message}. Please try again.")
        raise RetryBudgetExhausted(prompt, self.max_attempts)

    def _parse_unit_in(self, text: str, category) -> str:
        token = text.strip()
        if not token or not self.engine.exists(token, category):
            raise UnknownUnitError(token, category=getattr(category, "value", category))
        return token

    def _parse_quantity_in(self, text: str, category: Category) -> Tuple[float, str]:
        value, token = parse_quantity(text)
        return value, self._parse_unit_in(token, category)

    def pause(self) -> None:
        self._ask("\nPress Enter to continue...")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def _report_persistence(self) -> None:
        error = self.engine.history.last_error
        if error is not None:
            self.print_warning(f"{error.message} (history kept in memory)")

    def _header(self, title: str) -> None:
        self.console.print(f"\n[bold]=== {escape(title)} ===[/bold]\n")

    def _clear(self) -> None:
        if self.engine.config.clear_screen:
            self.console.clear()


HELP_TEXT = """\
[bold]Features:[/bold]
1. Multiple unit categories
2. Conversion history with CSV export
3. Batch conversion mode
4. Unit aliases (e.g. 'kilometre', 'lbs', 'sqft')
5. Temperature conversion (C, F, K)
6. Scientific notation for large/small numbers

[bold]Tips:[/bold]
- Use unit symbols (e.g. 'km' for kilometer); case does not matter
  except where it changes the unit ('m' meter, 'L' liter, 'W' watt)
- Enter the value and unit together, e.g. '10 km' or '10km'
- Type 'q' at the menu to quit
- Run 'unitconv VALUE FROM TO' for a one-off conversion
- Run 'unitconv --info UNIT' to learn more about a unit"""
