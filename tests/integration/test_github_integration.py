"""
Integration tests for GitHub API client.

These tests verify the GitHub integration layer works correctly
with real API responses (mocked for testing).
"""

import pytest
from unittest.mock import Mock, patch
from datetime import datetime

import requests

from changelog_check.github.client import GitHubClient, GitHubAPIError, RateLimitExceeded


def make_response(status_code=200, json_data=None, headers=None):
    response = Mock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.json.return_value = json_data
    response.content = b'{}' if json_data is not None else b''
    response.headers = headers or {'X-RateLimit-Remaining': '4999'}
    return response


class TestGitHubClient:
    """Test GitHub API client functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = GitHubClient("test_token")

    @patch('requests.Session.request')
    def test_get_pull_request(self, mock_request):
        """Test getting pull request information."""
        mock_request.return_value = make_response(json_data={'number': 123, 'state': 'open'})

        result = self.client.get_pull_request('owner', 'repo', 123)

        assert result['number'] == 123
        method, url = mock_request.call_args[0]
        assert method == 'GET'
        assert url == 'https://api.github.com/repos/owner/repo/pulls/123'
        assert mock_request.call_args[1]['timeout'] == 30

    @patch('requests.Session.request')
    def test_get_pull_request_files(self, mock_request):
        """Test fetching PR files."""
        mock_request.return_value = make_response(json_data=[
            {'filename': 'src/main.py', 'status': 'modified'},
            {'filename': 'CHANGELOG.md', 'status': 'added'},
        ])

        files = self.client.get_pull_request_files('owner', 'repo', 123)

        assert [f['filename'] for f in files] == ['src/main.py', 'CHANGELOG.md']
        assert mock_request.call_args[1]['params'] == {'page': 1, 'per_page': 100}

    @patch('requests.Session.request')
    def test_get_pull_request_files_paginates(self, mock_request):
        """Test that every page of files is collected."""
        first_page = [{'filename': f'src/file_{i}.py', 'status': 'modified'} for i in range(100)]
        second_page = [{'filename': 'CHANGELOG.md', 'status': 'modified'}]
        mock_request.side_effect = [
            make_response(json_data=first_page),
            make_response(json_data=second_page),
        ]

        files = self.client.get_pull_request_files('owner', 'repo', 7)

        assert len(files) == 101
        assert files[-1]['filename'] == 'CHANGELOG.md'
        assert mock_request.call_count == 2
        assert mock_request.call_args_list[1][1]['params']['page'] == 2

    @patch('requests.Session.request')
    def test_get_pull_request_labels(self, mock_request):
        """Test fetching PR label names."""
        mock_request.return_value = make_response(json_data=[
            {'id': 1, 'name': 'bug'},
            {'id': 2, 'name': 'allow-no-changelog'},
        ])

        labels = self.client.get_pull_request_labels('owner', 'repo', 5)

        assert labels == ['bug', 'allow-no-changelog']
        url = mock_request.call_args[0][1]
        assert url.endswith('/repos/owner/repo/issues/5/labels')

    @patch('requests.Session.request')
    def test_api_error(self, mock_request):
        """Test non-success responses raise GitHubAPIError."""
        mock_request.return_value = make_response(status_code=404, json_data={'message': 'Not Found'}, headers={})

        with pytest.raises(GitHubAPIError) as exc_info:
            self.client.get_pull_request('owner', 'repo', 999)

        assert exc_info.value.status_code == 404
        assert 'Not Found' in str(exc_info.value)

    @patch('requests.Session.request')
    def test_rate_limit_handling(self, mock_request):
        """Test rate limit handling."""
        mock_request.return_value = make_response(status_code=429, json_data={}, headers={
            'X-RateLimit-Reset': str(int(datetime.now().timestamp()) + 3600)
        })

        with pytest.raises(RateLimitExceeded):
            self.client.get_pull_request_files('owner', 'repo', 1)

    @patch('requests.Session.request')
    def test_secondary_rate_limit_on_403(self, mock_request):
        """Test exhausted quota reported with 403."""
        mock_request.return_value = make_response(status_code=403, json_data={'message': 'API rate limit exceeded'}, headers={
            'X-RateLimit-Remaining': '0',
            'X-RateLimit-Reset': str(int(datetime.now().timestamp()) + 60),
        })

        with pytest.raises(RateLimitExceeded):
            self.client.get_pull_request_labels('owner', 'repo', 1)

    @patch('requests.Session.request')
    def test_exhausted_quota_blocks_next_call(self, mock_request):
        """Test that no request is sent while the quota is exhausted."""
        mock_request.return_value = make_response(json_data={'number': 1}, headers={
            'X-RateLimit-Remaining': '0',
            'X-RateLimit-Reset': str(int(datetime.now().timestamp()) + 3600),
        })
        self.client.get_pull_request('owner', 'repo', 1)

        with pytest.raises(RateLimitExceeded):
            self.client.get_pull_request('owner', 'repo', 1)

        assert mock_request.call_count == 1

    @patch('requests.Session.request')
    def test_network_error(self, mock_request):
        """Test connection failures become GitHubAPIError."""
        mock_request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(GitHubAPIError) as exc_info:
            self.client.get_pull_request_files('owner', 'repo', 1)

        assert exc_info.value.status_code is None

    @patch('requests.Session.request')
    def test_non_json_body(self, mock_request):
        """Test a 200 response that is not JSON becomes GitHubAPIError."""
        response = make_response(json_data={})
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        mock_request.return_value = response

        with pytest.raises(GitHubAPIError) as exc_info:
            self.client.get_pull_request_files('owner', 'repo', 1)
        assert exc_info.value.status_code == 200

        with pytest.raises(GitHubAPIError):
            self.client.get_pull_request('owner', 'repo', 1)

    @patch('requests.Session.request')
    def test_list_endpoint_returns_object(self, mock_request):
        """Test a list endpoint answering with an object becomes GitHubAPIError."""
        mock_request.return_value = make_response(json_data={'message': 'Moved Permanently'})

        with pytest.raises(GitHubAPIError):
            self.client.get_pull_request_files('owner', 'repo', 1)

    @patch('requests.Session.request')
    def test_list_endpoint_returns_non_objects(self, mock_request):
        """Test list items that are not objects become GitHubAPIError."""
        mock_request.return_value = make_response(json_data=['CHANGELOG.md'])

        with pytest.raises(GitHubAPIError):
            self.client.get_pull_request_labels('owner', 'repo', 1)

    @patch('requests.Session.request')
    def test_pull_request_endpoint_returns_list(self, mock_request):
        """Test the pull request endpoint answering with a list becomes GitHubAPIError."""
        mock_request.return_value = make_response(json_data=[])

        with pytest.raises(GitHubAPIError):
            self.client.get_pull_request('owner', 'repo', 1)

    @patch('requests.Session.request')
    def test_file_limit_warning(self, mock_request, caplog):
        """Test a file list at the endpoint maximum is reported."""
        pages = [
            [{'filename': f'src/file_{page}_{i}.py', 'status': 'modified'} for i in range(GitHubClient.PER_PAGE)]
            for page in range(GitHubClient.MAX_PULL_REQUEST_FILES // GitHubClient.PER_PAGE)
        ]
        mock_request.side_effect = [make_response(json_data=page) for page in pages] + [make_response(json_data=[])]

        with caplog.at_level('WARNING', logger='changelog_check.github.client'):
            files = self.client.get_pull_request_files('owner', 'repo', 1)

        assert len(files) == GitHubClient.MAX_PULL_REQUEST_FILES
        assert "3000 file API limit" in caplog.text
