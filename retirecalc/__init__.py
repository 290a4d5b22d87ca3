"""Retire Calc - Retirement contribution vs. brokerage comparison tools."""

__version__ = "0.1.0"
