"""
Changelog Policy Checker

Decides whether a pull request satisfies the changelog policy.
The decision is a pure function of the event and the policy config.
"""

import logging
from typing import Callable, Iterable, Optional

from .config import PolicyConfig
from .models.event import EventType, PullRequestEvent
from .models.result import CheckOutcome, CheckResult


logger = logging.getLogger(__name__)

SKIPPED_REASON = "check skipped: exemption label present or policy disabled"
UPDATED_REASON = "changelog updated"


def is_required(labels: Iterable[str], config: PolicyConfig) -> bool:
    """Return True unless the policy is disabled or the exemption label is present."""
    return config.required_by_default and config.exemption_label not in set(labels)


def evaluate(event: PullRequestEvent, config: Optional[PolicyConfig] = None) -> CheckResult:
    """
    Evaluate the changelog policy for a single pull request event.

    Args:
        event: Labels and changed paths of the pull request
        config: Policy configuration (defaults apply when omitted)

    Returns:
        CheckResult describing the outcome
    """
    config = config or PolicyConfig()

    required = is_required(event.labels, config)
    if not required:
        logger.info(f"Changelog check skipped for {_describe(event)}")
        return CheckResult(passed=True, reason=SKIPPED_REASON, outcome=CheckOutcome.SKIPPED)

    if config.changelog_path in event.changed_paths:
        logger.info(f"{config.changelog_path} changed in {_describe(event)}")
        return CheckResult(passed=True, reason=UPDATED_REASON, outcome=CheckOutcome.UPDATED)

    logger.info(
        f"{config.changelog_path} not among {len(event.changed_paths)} changed paths in {_describe(event)}"
    )
    return CheckResult(
        passed=False,
        reason=f"{config.changelog_path} has not been changed",
        outcome=CheckOutcome.MISSING,
    )


def _describe(event: PullRequestEvent) -> str:
    if event.repository and event.pr_number:
        return f"{event.repository}#{event.pr_number} ({event.event_type.value})"
    return f"pull request ({event.event_type.value})"


class ChangelogPolicyChecker:
    """
    Stateless changelog policy checker.

    Holds only the policy configuration; every call evaluates fresh inputs.
    """

    def __init__(self, config: Optional[PolicyConfig] = None):
        """
        Initialize checker.

        Args:
            config: Policy configuration (defaults apply when omitted)
        """
        self.config = config or PolicyConfig()

    def is_required(self, labels: Iterable[str]) -> bool:
        """Whether the changelog must be changed given these labels."""
        return is_required(labels, self.config)

    def evaluate(self, event: PullRequestEvent) -> CheckResult:
        """Evaluate an event whose changed paths are already known."""
        return evaluate(event, self.config)

    def evaluate_lazy(
        self,
        labels: Iterable[str],
        changed_paths_provider: Callable[[], Iterable[str]],
        event_type: EventType = EventType.SYNCHRONIZE,
        repository: Optional[str] = None,
        pr_number: Optional[int] = None,
    ) -> CheckResult:
        """
        Evaluate, retrieving changed paths only when the check is required.

        Args:
            labels: Current pull request labels
            changed_paths_provider: Callable returning the changed paths;
                not called when the check is skipped
            event_type: Triggering pull request action
            repository: Optional 'owner/repo' for log context
            pr_number: Optional pull request number for log context

        Returns:
            CheckResult describing the outcome
        """
        labels = frozenset(labels)
        changed_paths = changed_paths_provider() if self.is_required(labels) else ()

        event = PullRequestEvent(
            labels=labels,
            changed_paths=tuple(changed_paths),
            event_type=event_type,
            repository=repository,
            pr_number=pr_number,
        )
        return self.evaluate(event)
