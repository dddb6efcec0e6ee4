"""
Result Formatting

This module renders check results for the CI run log and GitHub Actions.
"""

from .actions import ActionsReporter

__all__ = ['ActionsReporter']
