# src/draview/cli/__init__.py
"""
draview CLI Package

Exposes the top-level Typer `app` used by the console entrypoint and tests.
"""

from ..core.reconciler import ClusterReconciler
from ..reporters.console_reporter import ConsoleReporter
from .main import app

__all__ = ["app", "ClusterReconciler", "ConsoleReporter"]
