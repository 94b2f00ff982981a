"""Deterministic privacy scoring, risk detection, confidence and
recommendation engine for browser-tab privacy signals."""

__version__ = "1.0.0"
