"""
Pytest configuration and fixtures for the inventory API tests
"""
import os

# create_app refuses to start without a SECRET_KEY; HTTPS redirects and rate limits get in the way of the test client
os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ['ENABLE_HTTPS'] = 'False'
os.environ['RATELIMIT_ENABLED'] = 'False'
os.environ['LOG_TO_FILE'] = 'False'

import pytest
from tradesupply import create_app


@pytest.fixture(scope='session')
def app():
    """Create Flask application for testing"""
    app = create_app({'TESTING': True})

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def post_json(client):
    """Post a JSON body and return (status code, decoded JSON)"""
    def _post(url, payload):
        response = client.post(url, json=payload)
        return response.status_code, response.get_json()
    return _post
