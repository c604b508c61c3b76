"""Tests for request schema validation (src/ems/schemas/auth.py)."""

from datetime import time
from typing import Any

import pytest
from pydantic import ValidationError

from src.ems.schemas import LoginRequest, SignupRequest
from tests.helpers import STRONG_PASSWORD, signup_payload

pytestmark = pytest.mark.unit


def _error_fields(exc: ValidationError) -> set[str]:
    return {str(error["loc"][0]) for error in exc.errors()}


def test_signup_accepts_camel_case_payload() -> None:
    request = SignupRequest.model_validate(signup_payload())

    assert request.email_id == "a@x.com"
    assert request.workspace_name == "Acme"
    assert request.shifts[0].start_time == time(9, 0)
    assert request.shifts[0].end_time == time(17, 0)
    assert request.logo == ""


def test_signup_normalizes_email_and_names() -> None:
    request = SignupRequest.model_validate(
        signup_payload(emailId="  Ann@Example.COM ", workspaceName="  Acme  ")
    )
    assert request.email_id == "ann@example.com"
    assert request.workspace_name == "Acme"


def test_signup_deduplicates_reference_ids() -> None:
    request = SignupRequest.model_validate(signup_payload(departments=[3, 1, 3], designations=[2, 2]))
    assert request.departments == [3, 1]
    assert request.designations == [2]


def test_signup_keeps_logo_url() -> None:
    request = SignupRequest.model_validate(
        signup_payload(workspaceLogo="https://cdn.example.com/logo.png")
    )
    assert request.logo == "https://cdn.example.com/logo.png"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"emailId": "not-an-email"}, "emailId"),
        ({"password": "short"}, "password"),
        ({"password": "password123"}, "password"),
        ({"workspaceName": ""}, "workspaceName"),
        ({"adminName": "x" * 101}, "adminName"),
        ({"workspaceLogo": "not a url"}, "workspaceLogo"),
        ({"role": 0}, "role"),
        ({"departments": []}, "departments"),
        ({"designations": []}, "designations"),
        ({"shifts": []}, "shifts"),
        ({"shifts": [{"name": "Day", "startTime": "25:00", "endTime": "17:00"}]}, "shifts"),
    ],
)
def test_signup_rejects_invalid_input(overrides: dict[str, Any], field: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        SignupRequest.model_validate(signup_payload(**overrides))
    assert field in _error_fields(exc_info.value)


def test_password_length_bounds() -> None:
    with pytest.raises(ValidationError):
        SignupRequest.model_validate(signup_payload(password=STRONG_PASSWORD + "x" * 128))


def test_login_normalizes_email() -> None:
    request = LoginRequest.model_validate({"emailId": " A@X.com", "password": "pw"})
    assert request.email_id == "a@x.com"
