# -*- coding: utf-8 -*-
"""
Tests for the interactive menu session, driven by scripted answers.
"""

import pytest

from unitconv.cli.interactive import MENU_EXTRAS, InteractiveSession
from unitconv.config import UnitConvConfig
from unitconv.engine import Engine

# Menu numbers with the default eleven categories.
LENGTH = "1"
TEMPERATURE = "2"
BATCH = "12"
HISTORY = "13"
HELP = "14"
QUIT = "15"


def _output(console):
    return console.file.getvalue()


class TestMainMenu:

    def test_menu_entries(self, make_session):
        session, _ = make_session()
        entries = session.menu_entries()
        assert entries[0] == "Length"
        assert entries[10] == "Pressure"
        assert entries[11:] == list(MENU_EXTRAS)

    def test_menu_is_numbered(self, make_session, console):
        session, _ = make_session()
        session.show_main_menu()
        out = _output(console)
        assert " 1. Length" in out
        assert "12. Batch Conversion" in out
        assert "15. Quit" in out

    @pytest.mark.parametrize("answer", ["q", "Q", "quit", QUIT])
    def test_quit(self, make_session, console, answer):
        session, scripted = make_session(answer)
        session.run()
        assert "Goodbye!" in _output(console)
        assert scripted.answers == []

    def test_end_of_input_ends_session(self, make_session, console):
        session, _ = make_session()
        session.run()
        assert "Goodbye!" in _output(console)

    def test_empty_choice(self, make_session, console):
        session, _ = make_session("", "q")
        session.run()
        assert "Please enter a choice." in _output(console)

    @pytest.mark.parametrize("answer", ["99", "0", "abc", "-1"])
    def test_invalid_choice(self, make_session, console, answer):
        session, _ = make_session(answer, "q")
        session.run()
        assert "Invalid choice!" in _output(console)

    def test_handle_choice_return_value(self, make_session):
        session, _ = make_session()
        assert session.handle_choice("q") is False
        assert session.handle_choice(QUIT) is False
        assert session.handle_choice("42") is True


class TestConversionFlow:

    def test_successful_conversion(self, make_session, console, engine):
        session, scripted = make_session(LENGTH, "1000 m", "km", "", "q")
        session.run()
        out = _output(console)
        assert "Available units" in out
        assert "Result: 1000 m = 1 km" in out
        assert len(engine.history) == 1
        assert engine.history[0].result == 1.0
        assert scripted.answers == []

    def test_value_and_unit_without_space(self, make_session, console, engine):
        session, _ = make_session(TEMPERATURE, "100C", "f", "", "q")
        session.run()
        assert "Result: 100 C = 212 f" in _output(console)
        assert engine.history[0].to_symbol == "f"

    def test_aliases_accepted(self, make_session, console, engine):
        session, _ = make_session(LENGTH, "2 kilometre", "miles", "", "q")
        session.run()
        assert "Result: 2 kilometre = 1.24274 miles" in _output(console)
        assert engine.history[0].result == pytest.approx(1.242742, rel=1e-6)

    def test_recovers_after_invalid_answers(self, make_session, console, engine):
        session, _ = make_session(LENGTH, "foo", "10 parsec", "5 km", "m", "", "q")
        session.run()
        out = _output(console)
        assert out.count("Please try again.") == 2
        assert "Result: 5 km = 5000 m" in out
        assert len(engine.history) == 1

    def test_three_invalid_values_return_to_menu(self, make_session, console, engine):
        session, scripted = make_session(LENGTH, "10 parsec", "abc", "10 kg", "q")
        session.run()
        out = _output(console)
        assert "Too many failed attempts (3). Returning to menu." in out
        assert len(engine.history) == 0
        assert "Convert to" not in scripted.prompts
        assert scripted.answers == []

    def test_three_invalid_targets_return_to_menu(self, make_session, console, engine, history_path):
        session, _ = make_session(LENGTH, "10 m", "kg", "lb", "g", "q")
        session.run()
        assert "Too many failed attempts" in _output(console)
        assert len(engine.history) == 0
        assert not history_path.exists()

    def test_other_category_unit_is_rejected(self, make_session, console):
        session, _ = make_session(TEMPERATURE, "10 km", "q")
        session.run()
        assert "Unknown unit: 'km' in Temperature" in _output(console)

    def test_retry_budget_from_config(self, tmp_path, registry, console):
        config = UnitConvConfig(history_file=str(tmp_path / "h.txt"), max_attempts=1,
                                clear_screen=False)
        engine = Engine(config=config, registry=registry)
        answers = iter([LENGTH, "bad", "q"])
        session = InteractiveSession(engine, console=console, ask=lambda _: next(answers))
        session.run()
        assert "Too many failed attempts (1)" in _output(console)

    def test_precision_warning(self, make_session, console):
        session, _ = make_session(LENGTH, "1e16 m", "km", "", "q")
        session.run()
        assert "Warning:" in _output(console)

    def test_persistence_failure_is_reported(self, tmp_path, registry, console):
        config = UnitConvConfig(history_file=str(tmp_path / "missing" / "h.txt"),
                                clear_screen=False)
        engine = Engine(config=config, registry=registry)
        answers = iter([LENGTH, "1 km", "m", "", "q"])
        session = InteractiveSession(engine, console=console, ask=lambda _: next(answers))
        session.run()
        out = _output(console)
        assert "Result: 1 km = 1000 m" in out
        assert "history kept in memory" in out
        assert len(engine.history) == 1


class TestBatchConversion:

    def test_batch(self, make_session, console, engine):
        session, _ = make_session(BATCH, "1", "2.5", "abc", "", "km", "m", "", "q")
        session.run()
        out = _output(console)
        assert "Invalid number! Skipping..." in out
        assert "1 km = 1000 m" in out
        assert "2.5 km = 2500 m" in out
        assert [e.value for e in engine.history] == [1.0, 2.5]

    def test_batch_stops_at_history_capacity(self, tmp_path, registry, console):
        config = UnitConvConfig(history_file=str(tmp_path / "h.txt"), max_history=2,
                                clear_screen=False)
        engine = Engine(config=config, registry=registry)
        answers = iter([BATCH, "1", "2", "km", "m", "", "q"])
        session = InteractiveSession(engine, console=console, ask=lambda _: next(answers))
        session.run()
        out = _output(console)
        assert "Maximum of 2 values reached." in out
        assert "2 km = 2000 m" in out
        assert [e.value for e in engine.history] == [1.0, 2.0]

    def test_batch_without_values(self, make_session, console, engine):
        session, _ = make_session(BATCH, "", "", "q")
        session.run()
        assert "No values entered!" in _output(console)
        assert len(engine.history) == 0

    def test_batch_target_limited_to_source_category(self, make_session, console, engine):
        session, _ = make_session(BATCH, "1", "", "kg", "km", "m", "mi", "q")
        session.run()
        assert "Too many failed attempts" in _output(console)
        assert len(engine.history) == 0


class TestHistoryScreen:

    def test_empty(self, make_session, console):
        session, _ = make_session(HISTORY, "", "q")
        session.run()
        assert "No conversion history available!" in _output(console)

    def test_table(self, make_session, console, engine):
        engine.convert(1, "km", "m")
        session, _ = make_session(HISTORY, "3", "q")
        session.run()
        out = _output(console)
        assert "Conversion History" in out
        assert "1000" in out

    def test_clear(self, make_session, console, engine, history_path):
        engine.convert(1, "km", "m")
        session, _ = make_session(HISTORY, "1", "", "q")
        session.run()
        assert "History cleared!" in _output(console)
        assert len(engine.history) == 0
        assert history_path.read_text(encoding="utf-8") == ""

    def test_export(self, make_session, console, engine, config):
        engine.convert(1, "km", "m")
        session, _ = make_session(HISTORY, "2", "", "q")
        session.run()
        assert "History exported to" in _output(console)
        with open(config.csv_file, encoding="utf-8") as f:
            assert f.readline().startswith("From,To")

    def test_invalid_option(self, make_session, console, engine):
        engine.convert(1, "km", "m")
        session, _ = make_session(HISTORY, "9", "", "q")
        session.run()
        assert "Invalid choice!" in _output(console)
        assert len(engine.history) == 1


class TestHelp:

    def test_help(self, make_session, console):
        session, scripted = make_session(HELP, "", "q")
        session.run()
        out = _output(console)
        assert "Features:" in out
        assert "Press Enter to continue..." in scripted.prompts[1]
