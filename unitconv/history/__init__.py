# -*- coding: utf-8 -*-
"""Persistent conversion history."""

from unitconv.history.store import CSV_HEADER, HistoryStore

__all__ = ["CSV_HEADER", "HistoryStore"]
