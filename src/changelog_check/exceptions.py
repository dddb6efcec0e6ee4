"""
Exceptions

Error taxonomy for the changelog check. Infrastructure failures are kept
apart from policy violations so that callers can map them to different
exit codes.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.result import CheckResult


class ChangelogCheckError(Exception):
    """Base class for all changelog check errors"""


class PolicyViolation(ChangelogCheckError):
    """The pull request does not satisfy the changelog policy"""
    def __init__(self, result: "CheckResult"):
        super().__init__(result.reason)
        self.result = result


class InfrastructureError(ChangelogCheckError):
    """Labels or changed files could not be retrieved from the CI platform"""


class ConfigurationError(ChangelogCheckError):
    """Invalid configuration"""


class InvalidEventError(ChangelogCheckError):
    """The event is not a supported pull request event"""
