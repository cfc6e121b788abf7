"""Shared scoreboard state: controller writes, remote polling, display reads."""

__version__ = "0.1.0"
