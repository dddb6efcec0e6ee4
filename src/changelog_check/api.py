"""
Main Changelog Check API

Main interface that gathers pull request labels and changed files from
the CI platform and runs the changelog policy check.
"""

import logging
from typing import Callable, Iterable, Optional, Tuple

from .checker import ChangelogPolicyChecker
from .config import AppConfig
from .exceptions import ConfigurationError, InfrastructureError, PolicyViolation
from .github.client import GitHubClient
from .github.parser import EventPayloadParser
from .models.event import EventType, PullRequestEvent
from .models.result import CheckReport, CheckResult


logger = logging.getLogger(__name__)


class ChangelogCheckAPI:
    """
    Main Changelog Check API interface.

    Resolves the check inputs from one of:
    1. Explicit labels and changed paths
    2. A GitHub Actions event payload (+ API for changed files)
    3. A repository and pull request number (API only)

    Changed files are only fetched when the check is required. Every
    check returns its own CheckReport; the API keeps no per-check state.
    """

    def __init__(self, config: Optional[AppConfig] = None, client_factory: Optional[Callable[..., GitHubClient]] = None):
        """
        Initialize Changelog Check API.

        Args:
            config: Optional configuration object
            client_factory: Callable building a GitHubClient from
                (token, base_url, timeout); defaults to GitHubClient
        """
        self.config = config or AppConfig()
        self.checker = ChangelogPolicyChecker(self.config.policy)
        self.parser = EventPayloadParser()
        self._client_factory = client_factory or GitHubClient

    def check_event(self, event: PullRequestEvent) -> CheckReport:
        """Evaluate an event whose inputs are fully known."""
        return CheckReport(result=self.checker.evaluate(event), event=event)

    def check_inputs(
        self,
        labels: Iterable[str],
        changed_paths: Iterable[str],
        event_type: str = EventType.SYNCHRONIZE.value,
    ) -> CheckReport:
        """
        Evaluate explicit labels and changed paths.

        Args:
            labels: Pull request label names
            changed_paths: Repository-relative changed paths
            event_type: Triggering pull request action

        Returns:
            CheckReport
        """
        event = PullRequestEvent.create(labels=labels, changed_paths=changed_paths, event_type=event_type)
        return self.check_event(event)

    def check_payload(
        self,
        payload_path: str,
        changed_paths: Optional[Iterable[str]] = None,
        token: Optional[str] = None,
    ) -> CheckReport:
        """
        Evaluate a GitHub Actions pull_request event payload.

        Args:
            payload_path: Path to the event payload JSON (GITHUB_EVENT_PATH)
            changed_paths: Changed paths if already known; otherwise they
                are fetched from the GitHub API when the check is required
            token: GitHub token overriding the configured one

        Returns:
            CheckReport
        """
        payload = self.parser.load_payload(payload_path)
        event = self.parser.parse_event(payload)

        known_paths = tuple(changed_paths) if changed_paths is not None else None

        def provider():
            if known_paths is not None:
                return known_paths
            return self._fetch_changed_paths(event.repository, event.pr_number, token)

        return self._evaluate_lazy(event.labels, provider, event.event_type, event.repository, event.pr_number)

    def check_pull_request(
        self,
        repository: str,
        pr_number: int,
        token: Optional[str] = None,
        event_type: str = EventType.SYNCHRONIZE.value,
    ) -> CheckReport:
        """
        Evaluate a pull request using only the GitHub API.

        Args:
            repository: Repository in 'owner/repo' form
            pr_number: Pull request number
            token: GitHub token overriding the configured one
            event_type: Triggering pull request action

        Returns:
            CheckReport
        """
        owner, repo = self._split_repository(repository)
        client = self._client(token)

        labels = client.get_pull_request_labels(owner, repo, pr_number)

        def provider():
            return self._fetch_changed_paths(repository, pr_number, token, client=client)

        return self._evaluate_lazy(labels, provider, EventType.parse(event_type), repository, pr_number)

    def enforce(self, result: CheckResult) -> CheckResult:
        """
        Raise PolicyViolation for a failed result.

        Raises:
            PolicyViolation: If the result did not pass
        """
        if not result.passed:
            raise PolicyViolation(result)
        return result

    def _evaluate_lazy(
        self,
        labels: Iterable[str],
        provider: Callable[[], Iterable[str]],
        event_type: EventType,
        repository: Optional[str],
        pr_number: Optional[int],
    ) -> CheckReport:
        collected = {}

        def tracked_provider():
            collected['paths'] = tuple(provider())
            return collected['paths']

        labels = frozenset(labels)
        result = self.checker.evaluate_lazy(
            labels, tracked_provider, event_type=event_type, repository=repository, pr_number=pr_number
        )
        event = PullRequestEvent(
            labels=labels,
            changed_paths=collected.get('paths', ()),
            event_type=event_type,
            repository=repository,
            pr_number=pr_number,
        )
        return CheckReport(result=result, event=event)

    def _fetch_changed_paths(
        self,
        repository: Optional[str],
        pr_number: Optional[int],
        token: Optional[str],
        client: Optional[GitHubClient] = None,
    ) -> Tuple[str, ...]:
        if not repository or not pr_number:
            raise ConfigurationError(
                "Changed files were not supplied and the event does not identify a pull request"
            )
        owner, repo = self._split_repository(repository)
        client = client or self._client(token)

        files_data = client.get_pull_request_files(owner, repo, pr_number)
        files = self.parser.parse_changed_files(files_data)

        # The files endpoint stops at MAX_PULL_REQUEST_FILES entries
        changelog_path = self.config.policy.changelog_path
        if len(files_data) >= GitHubClient.MAX_PULL_REQUEST_FILES and not any(
            f.path == changelog_path for f in files
        ):
            raise InfrastructureError(
                f"GitHub listed {len(files_data)} files for {repository}#{pr_number}, the API maximum; "
                f"{changelog_path} may be beyond the truncated list"
            )

        paths = self.parser.changed_paths(files)
        logger.debug(f"Changed paths for {repository}#{pr_number}: {list(paths)}")
        return paths

    def _client(self, token: Optional[str]) -> GitHubClient:
        token = token or self.config.github.token
        if not token:
            raise ConfigurationError("A GitHub token is required to query the GitHub API (set GITHUB_TOKEN)")
        return self._client_factory(
            token,
            base_url=self.config.github.api_base_url,
            timeout=self.config.github.timeout_seconds,
        )

    @staticmethod
    def _split_repository(repository: str) -> Tuple[str, str]:
        owner, sep, repo = repository.partition('/')
        if not sep or not owner or not repo or '/' in repo:
            raise ConfigurationError(f"Repository must be in format 'owner/repo': {repository}")
        return owner, repo
