# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import io
import os

import pytest
from rich.console import Console

from unitconv.calculation.registry import build_default_registry
from unitconv.calculation.unit_converter import UnitConverter
from unitconv.config import UnitConvConfig, reset_config
from unitconv.engine import Engine
from unitconv.history.store import HistoryStore

START_TIME = 1_700_000_000


class FakeClock:
    """Deterministic wall clock: starts at START_TIME, advances one second per call."""

    def __init__(self, start: float = START_TIME, step: float = 1.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


class ScriptedInput:
    """Stand-in for the interactive prompt: replays answers, then raises EOFError."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Drop UNITCONV_* variables and the cached config around every test."""
    for name in list(os.environ):
        if name.startswith("UNITCONV_"):
            monkeypatch.delenv(name)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "conversion_history.txt"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config(tmp_path, history_path):
    return UnitConvConfig(
        history_file=str(history_path),
        csv_file=str(tmp_path / "conversion_history.csv"),
        clear_screen=False,
    )


@pytest.fixture(scope="session")
def registry():
    return build_default_registry()


@pytest.fixture
def converter(registry):
    return UnitConverter(registry)


@pytest.fixture
def store(history_path, clock):
    return HistoryStore(history_path, clock=clock)


@pytest.fixture
def engine(config, registry, store):
    return Engine(config=config, registry=registry, history=store)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)


@pytest.fixture
def make_session(engine, console):
    """Build an InteractiveSession that replays the given answers."""
    from unitconv.cli.interactive import InteractiveSession

    def _make(*answers: str):
        scripted = ScriptedInput(*answers)
        return InteractiveSession(engine, console=console, ask=scripted), scripted

    return _make
