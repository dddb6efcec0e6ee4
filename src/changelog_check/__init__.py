"""
Changelog Check

Pull Request CHANGELOG 변경 여부를 검사하는 CI 정책 도구
"""

__version__ = "1.0.0"

from .checker import ChangelogPolicyChecker, evaluate
from .api import ChangelogCheckAPI

__all__ = ["ChangelogPolicyChecker", "ChangelogCheckAPI", "evaluate"]
