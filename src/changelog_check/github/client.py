"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides methods for pull request label and changed-file retrieval.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import __version__
from ..exceptions import InfrastructureError


logger = logging.getLogger(__name__)


class GitHubAPIError(InfrastructureError):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with authentication, rate limiting, and error handling.

    Provides methods for:
    - Pull request metadata and label retrieval
    - Changed file listing with pagination
    - API rate limit tracking
    """

    PER_PAGE = 100
    # /pulls/{number}/files never lists more than this many files
    MAX_PULL_REQUEST_FILES = 3000

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: int = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (personal access token or Actions GITHUB_TOKEN)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        # Configure retry strategy
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # Set authentication headers
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': f'changelog-check/{__version__}'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Refuse to call the API while the rate limit is exhausted."""
        if self.rate_limit_remaining <= 0 and datetime.now() < self.rate_limit_reset:
            logger.warning(f"Rate limit exhausted until {self.rate_limit_reset}")
            raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        self._update_rate_limit(response)

        is_rate_limited = response.status_code == 429 or (
            response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'
        )
        if is_rate_limited:
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            error_data = self._error_body(response)
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    @staticmethod
    def _error_body(response: requests.Response) -> Dict:
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {'message': response.text[:200]}
        return data if isinstance(data, dict) else {'message': str(data)}

    @staticmethod
    def _json_body(response: requests.Response, expected_type: type):
        """Decode a successful response, rejecting bodies of the wrong shape."""
        try:
            data = response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GitHub API returned a non-JSON body: {e}",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, expected_type):
            raise GitHubAPIError(
                f"GitHub API returned {type(data).__name__}, expected {expected_type.__name__}",
                status_code=response.status_code,
            )
        return data

    def _get_paginated(self, endpoint: str) -> List[Dict]:
        """Collect every page of a list endpoint."""
        items = []
        page = 1

        while True:
            response = self._make_request(
                'GET',
                endpoint,
                params={'page': page, 'per_page': self.PER_PAGE}
            )

            page_items = self._json_body(response, list)
            if any(not isinstance(item, dict) for item in page_items):
                raise GitHubAPIError(f"GitHub API returned malformed items for {endpoint}", status_code=response.status_code)
            if not page_items:
                break

            items.extend(page_items)

            if len(page_items) < self.PER_PAGE:
                break

            page += 1

        return items

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """
        Get pull request information.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Pull request data
        """
        logger.info(f"Fetching PR {owner}/{repo}#{pr_number}")

        response = self._make_request('GET', f'/repos/{owner}/{repo}/pulls/{pr_number}')
        return self._json_body(response, dict)

    def get_pull_request_labels(self, owner: str, repo: str, pr_number: int) -> List[str]:
        """
        Get the current label names of a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of label names
        """
        logger.info(f"Fetching PR labels for {owner}/{repo}#{pr_number}")

        labels = self._get_paginated(f'/repos/{owner}/{repo}/issues/{pr_number}/labels')
        return [label['name'] for label in labels if isinstance(label.get('name'), str)]

    def get_pull_request_files(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Get files changed in a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of file change data
        """
        logger.info(f"Fetching PR files for {owner}/{repo}#{pr_number}")

        files = self._get_paginated(f'/repos/{owner}/{repo}/pulls/{pr_number}/files')

        logger.info(f"Found {len(files)} changed files")
        if len(files) >= self.MAX_PULL_REQUEST_FILES:
            logger.warning(f"File list for {owner}/{repo}#{pr_number} hit the {self.MAX_PULL_REQUEST_FILES} file API limit")
        return files
