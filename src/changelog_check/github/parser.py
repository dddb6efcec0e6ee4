"""
Event Payload Parser

Parses GitHub Actions pull_request event payloads and pull request file
listings into structured events for the changelog check.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from ..exceptions import InfrastructureError, InvalidEventError
from ..models.event import ChangedFile, EventType, PullRequestEvent


logger = logging.getLogger(__name__)


class EventPayloadParser:
    """
    Parser for GitHub pull request event data.

    Converts the Actions event payload and REST API file listings into
    PullRequestEvent and ChangedFile objects.
    """

    def load_payload(self, payload_path: str) -> Dict[str, Any]:
        """
        Read an event payload file (GITHUB_EVENT_PATH).

        Args:
            payload_path: Path to the JSON payload

        Returns:
            Decoded payload

        Raises:
            InfrastructureError: If the file is missing or not valid JSON
        """
        path = Path(payload_path)
        logger.debug(f"Loading event payload from {path}")

        try:
            payload = json.loads(path.read_text(encoding='utf-8'))
        except OSError as e:
            raise InfrastructureError(f"Cannot read event payload {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise InfrastructureError(f"Event payload {path} is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise InfrastructureError(f"Event payload {path} is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise InfrastructureError(f"Event payload {path} must be a JSON object")
        return payload

    def parse_event(self, payload: Dict[str, Any], changed_paths: Iterable[str] = ()) -> PullRequestEvent:
        """
        Parse a pull_request event payload.

        Args:
            payload: Decoded event payload
            changed_paths: Changed paths collected separately, if known

        Returns:
            PullRequestEvent with labels and repository context
        """
        pull_request = payload.get('pull_request')
        if not isinstance(pull_request, dict):
            raise InvalidEventError("Event payload does not describe a pull request")

        event_type = EventType.parse(payload.get('action', ''))

        repository = None
        repo_data = payload.get('repository')
        if isinstance(repo_data, dict):
            repository = repo_data.get('full_name')

        pr_number = pull_request.get('number') or payload.get('number')
        if pr_number is not None and (not isinstance(pr_number, int) or isinstance(pr_number, bool)):
            raise InvalidEventError(f"Pull request number must be an integer: {pr_number!r}")
        if repository is not None and (not isinstance(repository, str) or '/' not in repository):
            raise InvalidEventError(f"Repository full_name must be 'owner/repo': {repository!r}")

        try:
            event = PullRequestEvent(
                labels=frozenset(self.parse_labels(pull_request)),
                changed_paths=tuple(changed_paths),
                event_type=event_type,
                repository=repository,
                pr_number=pr_number,
            )
        except ValueError as e:
            raise InvalidEventError(str(e)) from e

        logger.info(
            f"Parsed {event.event_type.value} event for {event.repository}#{event.pr_number} "
            f"with {len(event.labels)} labels"
        )
        return event

    def parse_labels(self, pull_request: Dict[str, Any]) -> List[str]:
        """Extract label names from a pull request object."""
        labels = pull_request.get('labels') or []
        if not isinstance(labels, list):
            raise InvalidEventError("Pull request labels must be a list")

        names = []
        for label in labels:
            name = label.get('name') if isinstance(label, dict) else label
            if isinstance(name, str):
                names.append(name)
        return names

    def parse_changed_files(self, files_data: List[Dict[str, Any]]) -> List[ChangedFile]:
        """
        Parse the /pulls/{number}/files response.

        Args:
            files_data: List of file change data from GitHub API

        Returns:
            List of ChangedFile objects in API order
        """
        changed_files = []
        for file_data in files_data:
            try:
                changed_files.append(ChangedFile(
                    path=file_data['filename'],
                    status=file_data.get('status', 'modified'),
                    previous_path=file_data.get('previous_filename'),
                ))
            except (KeyError, ValueError) as e:
                raise InfrastructureError(f"Malformed file entry from GitHub API: {file_data!r}") from e
        logger.debug(f"Parsed {len(changed_files)} changed files")
        return changed_files

    def changed_paths(self, files: Iterable[ChangedFile]) -> Tuple[str, ...]:
        """Paths that exist with new content after the pull request."""
        return tuple(f.path for f in files if f.counts_as_changed)

    def read_path_list(self, lines: Iterable[str]) -> Tuple[str, ...]:
        """Parse a newline-separated path list, ignoring blanks."""
        return tuple(line.strip() for line in lines if line.strip())
