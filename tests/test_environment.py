import pytest

from force_transport.environment import (
    BASE_URL_ENV,
    base_url_from_origin,
    detect_base_url,
    normalize_api_host,
    resolve_url,
)


@pytest.mark.parametrize(
    ("host", "expected"),
    [
        ("na1.visual.force.com", "na1.salesforce.com"),
        ("c.na1.visual.force.com", "na1.salesforce.com"),
        ("myorg.salesforce.com", "myorg.salesforce.com"),
        ("app.example.com", "app.example.com"),
    ],
)
def test_normalize_api_host(host: str, expected: str) -> None:
    assert normalize_api_host(host) == expected


def test_base_url_from_origin_accepts_urls_and_hosts() -> None:
    assert base_url_from_origin("https://na1.visual.force.com/apex/page") == "https://na1.salesforce.com"
    assert base_url_from_origin("localhost:8080") == "https://localhost:8080"
    assert base_url_from_origin("") == ""


def test_detect_base_url_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv(BASE_URL_ENV, "https://org.salesforce.com")
    assert detect_base_url() == "https://org.salesforce.com"
    monkeypatch.delenv(BASE_URL_ENV)
    assert detect_base_url() == ""
    assert detect_base_url("https://org.visual.force.com") == "https://org.salesforce.com"


def test_resolve_url() -> None:
    assert resolve_url("/services/data", "https://org.salesforce.com") == "https://org.salesforce.com/services/data"
    assert resolve_url("https://x.example.com/a", "https://org.salesforce.com") == "https://x.example.com/a"
