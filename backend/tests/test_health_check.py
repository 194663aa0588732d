import requests

import health_check


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


def test_healthy_service(monkeypatch) -> None:
    monkeypatch.setattr(health_check.requests, "get", lambda url, timeout: FakeResponse(200))
    assert health_check.check_service("Backend API", "http://backend/api/health") == (True, "✅ Backend API: OK")


def test_unhealthy_status(monkeypatch) -> None:
    monkeypatch.setattr(health_check.requests, "get", lambda url, timeout: FakeResponse(503))
    healthy, message = health_check.check_service("Backend API", "http://backend/api/health")
    assert not healthy
    assert message.endswith("HTTP 503")


def test_connection_refused(monkeypatch) -> None:
    def refuse(url, timeout):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(health_check.requests, "get", refuse)
    assert health_check.check_service("Analysis Worker", "http://worker/health") == (
        False, "❌ Analysis Worker: Connection refused"
    )


def test_main_reports_failure(monkeypatch) -> None:
    monkeypatch.setattr(health_check.requests, "get", lambda url, timeout: FakeResponse(500))
    monkeypatch.setattr(health_check.time, "sleep", lambda seconds: None)
    assert health_check.main() == 1
