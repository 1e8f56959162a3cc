# e2e_tests/components/scenarios.py
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional, TypedDict

EXPECTED_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


class ScenarioResult(TypedDict):
    name: str
    status: str  # 'PASS' or 'FAIL'
    details: str


@dataclass(frozen=True)
class Scenario:
    """One direct invocation of the deployed handler and the checks to apply."""

    name: str
    event: dict
    expected_status: int
    check_body: Callable[[Any], Optional[str]]


def _is_iso8601(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def _greeting_check(expected_body: Any) -> Callable[[Any], Optional[str]]:
    def check(payload: Any) -> Optional[str]:
        if not isinstance(payload, dict):
            return f"Response body is not an object: {payload!r}"
        if payload.get("message") != "Hello, World!":
            return f"Unexpected message: {payload.get('message')!r}"
        if not _is_iso8601(payload.get("timestamp")):
            return f"Invalid timestamp: {payload.get('timestamp')!r}"
        if not payload.get("requestId"):
            return "Missing requestId"
        if payload.get("body") != expected_body:
            return f"Echoed body {payload.get('body')!r} != {expected_body!r}"
        return None

    return check


def _error_check(expected_code: str) -> Callable[[Any], Optional[str]]:
    def check(payload: Any) -> Optional[str]:
        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            return f"Response body has no error object: {payload!r}"
        if error.get("code") != expected_code:
            return f"Error code {error.get('code')!r} != {expected_code!r}"
        if not error.get("requestId"):
            return "Error payload is missing requestId"
        return None

    return check


def default_scenarios() -> List[Scenario]:
    return [
        Scenario(
            name="json-object-body",
            event={"httpMethod": "GET", "path": "/", "body": json.dumps({"x": 1})},
            expected_status=200,
            check_body=_greeting_check({"x": 1}),
        ),
        Scenario(
            name="json-array-body",
            event={"httpMethod": "GET", "path": "/", "body": "[1, \"two\", null]"},
            expected_status=200,
            check_body=_greeting_check([1, "two", None]),
        ),
        Scenario(
            name="no-body",
            event={"httpMethod": "GET", "path": "/"},
            expected_status=200,
            check_body=_greeting_check({}),
        ),
        Scenario(
            name="malformed-body",
            event={"httpMethod": "GET", "path": "/", "body": "not-json"},
            expected_status=400,
            check_body=_error_check("MALFORMED_REQUEST_BODY"),
        ),
    ]


def evaluate(scenario: Scenario, response: dict) -> ScenarioResult:
    """Checks a proxy response against a scenario's expectations."""

    def fail(details: str) -> ScenarioResult:
        return {"name": scenario.name, "status": "FAIL", "details": details}

    status = response.get("statusCode")
    if status != scenario.expected_status:
        return fail(f"Status {status!r} != {scenario.expected_status}")

    headers = response.get("headers") or {}
    for header, value in EXPECTED_HEADERS.items():
        if headers.get(header) != value:
            return fail(f"Header {header} is {headers.get(header)!r}")

    try:
        payload = json.loads(response.get("body") or "")
    except json.JSONDecodeError:
        return fail("Response body is not JSON")

    problem = scenario.check_body(payload)
    if problem:
        return fail(problem)
    return {"name": scenario.name, "status": "PASS", "details": "OK"}
