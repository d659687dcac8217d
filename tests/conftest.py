"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "athlete_network.settings_test")
django.setup()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture(autouse=True)
def clear_security_context():
    """Make sure no principal leaks from one test into the next."""
    from social.auth.context import clear_current_user  # noqa: PLC0415

    clear_current_user()
    yield
    clear_current_user()
