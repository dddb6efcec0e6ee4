#!/usr/bin/env python3
"""
Changelog Check Server

Runs the changelog check HTTP service.
"""

import os

from changelog_check.config import load_config
from changelog_check.server import create_app

config = load_config(os.getenv("CHANGELOG_CHECK_CONFIG"))
app = create_app(config)

if __name__ == '__main__':
    port = int(os.getenv("PORT", "8000"))
    print("🚀 Starting Changelog Check Server...")
    print(f"📍 Server will be available at: http://localhost:{port}")
    print("📋 API Documentation:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Run Check: POST /api/v1/checks/changelog")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug
    )
