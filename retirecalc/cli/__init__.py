"""Retire Calc command-line interface."""
