"""
Changelog Check HTTP Service

Flask application exposing the changelog check to webhook relays and
other services.
"""

import logging
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from . import __version__
from .api import ChangelogCheckAPI
from .config import AppConfig
from .exceptions import ConfigurationError, InfrastructureError, InvalidEventError
from .models.event import CheckRequest


logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None, check_api: Optional[ChangelogCheckAPI] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Optional configuration object
        check_api: Optional preconfigured ChangelogCheckAPI

    Returns:
        Flask application
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for dashboards

    api = check_api or ChangelogCheckAPI(config)

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'changelog-check',
            'version': __version__
        })

    @app.route('/api/v1/checks/changelog', methods=['POST'])
    def run_check():
        """Evaluate the changelog policy for a pull request."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object', 'status': 'invalid'}), 400

        try:
            check_request = CheckRequest(**data)
        except ValidationError as e:
            return jsonify({'error': str(e), 'status': 'invalid'}), 400

        try:
            if check_request.targets_pull_request:
                report = api.check_pull_request(
                    repository=check_request.repository,
                    pr_number=check_request.pr_number,
                    token=check_request.github_token,
                    event_type=check_request.event_type,
                )
            elif check_request.changed_paths is not None:
                report = api.check_inputs(
                    labels=check_request.labels,
                    changed_paths=check_request.changed_paths,
                    event_type=check_request.event_type,
                )
            else:
                return jsonify({
                    'error': 'Either changed_paths or repository and pr_number are required',
                    'status': 'invalid'
                }), 400
        except (ConfigurationError, InvalidEventError) as e:
            return jsonify({'error': str(e), 'status': 'invalid'}), 400
        except InfrastructureError as e:
            logger.error(f"Changelog check infrastructure failure: {e}")
            return jsonify({'error': str(e), 'status': 'failed'}), 502

        return jsonify(report.result.to_dict())

    return app
