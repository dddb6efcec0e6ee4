"""
GitHub Integration Layer

This module provides GitHub API and Actions event payload integration
for label and changed-file retrieval.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import EventPayloadParser

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'EventPayloadParser']
