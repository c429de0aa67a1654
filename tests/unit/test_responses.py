"""
Unit tests for api/responses.py
"""
import json

import pytest

from api.responses import INTERNAL_ERROR_MESSAGE, error_response, status_for
from application.ports.session_repository import ErrorCode

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("error_code,status", [
    (ErrorCode.UNAUTHORIZED, 401),
    (ErrorCode.FORBIDDEN, 403),
    (ErrorCode.NOT_FOUND, 404),
    (ErrorCode.CONFLICT, 409),
    (ErrorCode.VALIDATION_ERROR, 400),
    (ErrorCode.STORE_ERROR, 500),
    (None, 500),
])
def test_status_for(error_code, status):
    assert status_for(error_code) == status


def test_client_errors_keep_message():
    response = error_response("Session not found", ErrorCode.NOT_FOUND)

    assert response.status_code == 404
    assert json.loads(response.body) == {"success": False, "error": "Session not found"}


def test_store_errors_are_hidden():
    response = error_response("Failed to fetch session: password=hunter2", ErrorCode.STORE_ERROR)

    assert response.status_code == 500
    assert json.loads(response.body) == {"success": False, "error": INTERNAL_ERROR_MESSAGE}
