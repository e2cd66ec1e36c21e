# conftest.py
import base64

import pytest

from blog_app import create_app


@pytest.fixture
def app():
    """메모리 저장소를 사용하는 테스트용 앱."""
    return create_app('testing')

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def services(app):
    return app.services

@pytest.fixture
def image_data_uri():
    return "data:image/png;base64," + base64.b64encode(b"\x89PNG-test-image").decode()

@pytest.fixture
def video_data_uri():
    return "data:video/mp4;base64," + base64.b64encode(b"mp4-test-video").decode()
