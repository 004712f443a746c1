"""Shared fixtures for the v1 client tests."""

from unittest import mock

import pytest

from clarifai_v1.rest import ClarifaiApi, HttpTransport


@pytest.fixture
def transport():
    """A transport double that records calls and sends nothing."""
    return mock.MagicMock(spec=HttpTransport)


@pytest.fixture
def api(transport):
    return ClarifaiApi(transport=transport)
