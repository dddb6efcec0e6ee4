"""
Pull Request Event Models

Pull Request 이벤트 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple
from pydantic import BaseModel, field_validator

from ..exceptions import InvalidEventError


class EventType(str, Enum):
    """검사를 트리거하는 pull_request 액션"""
    OPENED = "opened"
    SYNCHRONIZE = "synchronize"
    REOPENED = "reopened"
    LABELED = "labeled"
    UNLABELED = "unlabeled"
    EDITED = "edited"

    @classmethod
    def parse(cls, action: str) -> "EventType":
        """액션 문자열을 EventType으로 변환"""
        try:
            return cls(action)
        except ValueError:
            valid = ", ".join(e.value for e in cls)
            raise InvalidEventError(
                f"Unsupported pull request action: {action!r} (expected one of: {valid})"
            ) from None


# GitHub file statuses that mean the file exists with new content at its path
CHANGED_STATUSES = frozenset({'added', 'modified', 'renamed', 'copied', 'changed'})
VALID_STATUSES = CHANGED_STATUSES | {'removed', 'unchanged'}


@dataclass(frozen=True)
class ChangedFile:
    """Pull Request에서 변경된 파일"""
    path: str
    status: str = 'modified'
    previous_path: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if not self.path:
            raise ValueError("File path must not be empty")
        if self.status not in VALID_STATUSES:
            raise ValueError(f"Invalid file status: {self.status}")

    @property
    def counts_as_changed(self) -> bool:
        """해당 경로에 파일이 추가/수정되었는지 여부"""
        return self.status in CHANGED_STATUSES


@dataclass(frozen=True)
class PullRequestEvent:
    """한 번의 검사 실행에 사용되는 Pull Request 이벤트"""
    labels: FrozenSet[str] = field(default_factory=frozenset)
    changed_paths: Tuple[str, ...] = ()
    event_type: EventType = EventType.SYNCHRONIZE
    repository: Optional[str] = None
    pr_number: Optional[int] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.repository is not None and '/' not in self.repository:
            raise ValueError("Repository must be in format 'owner/repo'")
        if self.pr_number is not None and self.pr_number <= 0:
            raise ValueError("PR number must be positive")

    @classmethod
    def create(
        cls,
        labels: Iterable[str] = (),
        changed_paths: Iterable[str] = (),
        event_type: str = EventType.SYNCHRONIZE.value,
        repository: Optional[str] = None,
        pr_number: Optional[int] = None,
    ) -> "PullRequestEvent":
        """임의의 iterable 입력으로부터 불변 이벤트 생성"""
        return cls(
            labels=frozenset(labels),
            changed_paths=tuple(changed_paths),
            event_type=EventType.parse(event_type) if isinstance(event_type, str) else event_type,
            repository=repository,
            pr_number=pr_number,
        )


# Pydantic models for API validation
class CheckRequest(BaseModel):
    """API 요청용 검사 요청 모델"""
    labels: List[str] = []
    changed_paths: Optional[List[str]] = None
    event_type: str = EventType.SYNCHRONIZE.value
    repository: Optional[str] = None
    pr_number: Optional[int] = None
    github_token: Optional[str] = None

    @field_validator('event_type')
    @classmethod
    def validate_event_type(cls, v):
        if v not in {e.value for e in EventType}:
            raise ValueError(f'Unsupported event type: {v}')
        return v

    @field_validator('repository')
    @classmethod
    def validate_repository(cls, v):
        if v is not None and '/' not in v:
            raise ValueError('Repository must be in format "owner/repo"')
        return v

    @field_validator('pr_number')
    @classmethod
    def validate_pr_number(cls, v):
        if v is not None and v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @property
    def targets_pull_request(self) -> bool:
        """GitHub API 조회가 필요한 요청인지 여부"""
        return self.repository is not None and self.pr_number is not None
