"""
Check Result Models

정책 검사 결과 모델
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .event import PullRequestEvent


class CheckOutcome(str, Enum):
    """검사 결과 분류"""
    SKIPPED = "skipped"
    UPDATED = "updated"
    MISSING = "missing"


@dataclass(frozen=True)
class CheckResult:
    """한 번의 검사 실행 결과"""
    passed: bool
    reason: str
    outcome: CheckOutcome

    def __post_init__(self):
        """데이터 검증"""
        if self.passed == (self.outcome is CheckOutcome.MISSING):
            raise ValueError(f"Outcome {self.outcome.value} is inconsistent with passed={self.passed}")

    @property
    def exit_code(self) -> int:
        """CI 러너에 전달할 종료 코드"""
        return 0 if self.passed else 1

    def to_dict(self) -> Dict[str, Any]:
        """결과를 딕셔너리로 변환"""
        return {
            'passed': self.passed,
            'reason': self.reason,
            'outcome': self.outcome.value,
            'exit_code': self.exit_code,
        }


@dataclass(frozen=True)
class CheckReport:
    """검사 결과와 평가에 사용된 이벤트"""
    result: CheckResult
    event: PullRequestEvent
