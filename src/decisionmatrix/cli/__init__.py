"""Decision matrix CLI module.

Provides a Textual-based terminal interface for editing and evaluating
decision matrices.

Usage:
    decisionmatrix

Or directly:
    python -m decisionmatrix.cli.app
"""

from decisionmatrix.cli.app import DecisionMatrixApp, main

__all__ = ["DecisionMatrixApp", "main"]
