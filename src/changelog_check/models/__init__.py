"""
Data Models

Changelog Check 시스템의 핵심 데이터 모델들
"""

from .event import EventType, ChangedFile, PullRequestEvent, CheckRequest
from .result import CheckOutcome, CheckResult, CheckReport

__all__ = [
    "EventType",
    "ChangedFile",
    "PullRequestEvent",
    "CheckRequest",
    "CheckOutcome",
    "CheckResult",
    "CheckReport",
]
