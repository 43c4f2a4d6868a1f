"""
공통 테스트 픽스처

테스트마다 인메모리 SQLite를 쓰는 앱을 새로 만들고, 메일 발송은
FakeEmailService로 대체합니다.
"""
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


class FakeEmailService:
    """발송 요청을 기록만 하는 메일 서비스"""

    def __init__(self, succeed=True):
        self.succeed = succeed
        self.sent = []

    def send_temporary_password(self, to_email, username, temp_password):
        self.sent.append({"to_email": to_email, "username": username, "temp_password": temp_password})
        return self.succeed


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def email_outbox(app):
    fake = FakeEmailService()
    app.state.email_service = fake
    return fake


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


def register_user(client, email="tester@example.com", password="password1", username="tester"):
    """회원가입 후 로그인하여 (user, Authorization 헤더)를 반환"""
    response = client.post("/api/auth/signup", json={
        "email": email,
        "password": password,
        "username": username,
    })
    assert response.status_code == 201, response.text
    login = client.post("/api/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    # 로그인 쿠키가 이후 요청에 섞이지 않도록 헤더로만 인증
    client.cookies.clear()
    return response.json(), {"Authorization": f"Bearer {login.json()['access_token']}"}


@pytest.fixture
def user_and_headers(client):
    return register_user(client)


@pytest.fixture
def auth_headers(user_and_headers):
    return user_and_headers[1]


def create_place(client, headers, latitude="37.5665", longitude="126.9780", place_name="시청역", **extra):
    payload = {
        "place_name": place_name,
        "address": "서울 중구 세종대로 110",
        "detail_address": "1번 출구",
        "latitude": latitude,
        "longitude": longitude,
    }
    payload.update(extra)
    response = client.post("/api/places", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
