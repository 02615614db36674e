"""Reporters package for console output."""

from .base_reporter import BaseReporter
from .console_reporter import ConsoleReporter

__all__ = ["BaseReporter", "ConsoleReporter"]
