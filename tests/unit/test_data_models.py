"""
Unit tests for data models.
"""

import warnings

import pytest
from pydantic import ValidationError

from changelog_check.exceptions import InvalidEventError, PolicyViolation
from changelog_check.models.event import ChangedFile, CheckRequest, EventType, PullRequestEvent
from changelog_check.models.result import CheckOutcome, CheckResult


class TestEventType:
    """Unit tests for EventType."""

    def test_parse_supported_actions(self):
        for action in ["opened", "synchronize", "reopened", "labeled", "unlabeled", "edited"]:
            assert EventType.parse(action).value == action

    def test_parse_unsupported_action(self):
        with pytest.raises(InvalidEventError) as exc_info:
            EventType.parse("closed")

        assert "closed" in str(exc_info.value)


class TestChangedFile:
    """Unit tests for ChangedFile."""

    def test_changed_statuses(self):
        for status in ["added", "modified", "renamed", "copied", "changed"]:
            assert ChangedFile(path="CHANGELOG.md", status=status).counts_as_changed is True

    def test_removed_file_does_not_count(self):
        assert ChangedFile(path="CHANGELOG.md", status="removed").counts_as_changed is False

    def test_invalid_status(self):
        with pytest.raises(ValueError):
            ChangedFile(path="CHANGELOG.md", status="exploded")

    def test_empty_path(self):
        with pytest.raises(ValueError):
            ChangedFile(path="")


class TestPullRequestEvent:
    """Unit tests for PullRequestEvent."""

    def test_create_normalizes_inputs(self):
        event = PullRequestEvent.create(
            labels=["bug", "bug"],
            changed_paths=["b.py", "a.py"],
            event_type="labeled",
        )

        assert event.labels == frozenset({"bug"})
        assert event.changed_paths == ("b.py", "a.py")
        assert event.event_type is EventType.LABELED

    def test_event_is_immutable(self):
        event = PullRequestEvent.create()

        with pytest.raises(AttributeError):
            event.labels = frozenset({"x"})

    def test_invalid_repository(self):
        with pytest.raises(ValueError):
            PullRequestEvent(repository="no-slash")

    def test_invalid_pr_number(self):
        with pytest.raises(ValueError):
            PullRequestEvent(repository="owner/repo", pr_number=0)


class TestCheckResult:
    """Unit tests for CheckResult."""

    def test_to_dict(self):
        result = CheckResult(passed=False, reason="CHANGELOG.md has not been changed", outcome=CheckOutcome.MISSING)

        assert result.to_dict() == {
            'passed': False,
            'reason': "CHANGELOG.md has not been changed",
            'outcome': 'missing',
            'exit_code': 1,
        }

    def test_inconsistent_outcome(self):
        with pytest.raises(ValueError):
            CheckResult(passed=True, reason="x", outcome=CheckOutcome.MISSING)
        with pytest.raises(ValueError):
            CheckResult(passed=False, reason="x", outcome=CheckOutcome.UPDATED)

    def test_policy_violation_carries_result(self):
        result = CheckResult(passed=False, reason="CHANGELOG.md has not been changed", outcome=CheckOutcome.MISSING)

        error = PolicyViolation(result)

        assert error.result is result
        assert str(error) == "CHANGELOG.md has not been changed"


class TestCheckRequest:
    """Unit tests for the API request model."""

    def test_defaults(self):
        request = CheckRequest(changed_paths=["CHANGELOG.md"])

        assert request.labels == []
        assert request.event_type == "synchronize"
        assert request.targets_pull_request is False

    def test_pull_request_target(self):
        request = CheckRequest(repository="owner/repo", pr_number=5)

        assert request.targets_pull_request is True

    def test_invalid_event_type(self):
        with pytest.raises(ValidationError):
            CheckRequest(event_type="closed")

    def test_invalid_repository(self):
        with pytest.raises(ValidationError):
            CheckRequest(repository="repo", pr_number=1)

    def test_invalid_pr_number(self):
        with pytest.raises(ValidationError):
            CheckRequest(repository="owner/repo", pr_number=-3)

    def test_validators_use_field_validator(self):
        field_validators = CheckRequest.__pydantic_decorators__.field_validators

        assert set(field_validators) == {'validate_event_type', 'validate_repository', 'validate_pr_number'}
        assert not CheckRequest.__pydantic_decorators__.validators

    def test_validation_emits_no_warnings(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            request = CheckRequest(repository="owner/repo", pr_number=5, event_type="labeled")

        assert request.pr_number == 5
