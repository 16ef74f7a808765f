from datetime import date, timedelta
from typing import Any, Dict

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import SESSION_BASE, USER_CREATE, USER_LOGIN
from test.constants import DEFAULT_LANGUAGE, DEFAULT_LOCATION, DEFAULT_TIME


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def register_user(client: TestClient, email: str, password: str, name: str) -> Dict[str, Any]:
    response = client.post(
        USER_CREATE,
        json={'email': email, 'password': password, 'confirm_password': password, 'name': name},
    )
    assert_response_status(response, 201, f'Failed to register {email}')
    return response.json()


def login_user(client: TestClient, email: str, password: str) -> Any:
    """Helper function to login a user; the auth cookie stays on the client."""
    login_response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert login_response.status_code == 200, f'Login failed: {login_response.text}'
    return login_response


def days_from_today(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def session_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        'language': DEFAULT_LANGUAGE,
        'date': days_from_today(7),
        'time': DEFAULT_TIME,
        'location': DEFAULT_LOCATION,
        'total_seats': 10,
    }
    return payload | overrides


def create_session(client: TestClient, **overrides: Any) -> Dict[str, Any]:
    """Requires an admin cookie on the client"""
    response = client.post(SESSION_BASE, json=session_payload(**overrides))
    assert_response_status(response, 201, 'Failed to create session')
    return response.json()
