import xml.etree.ElementTree as ET
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.core.chart import SERIES_ELEMENT_ID
from app.main import app
from app.utils.error import ErrorKind, RepositoryError
from app.utils.github import get_star_source
from app.utils.trace import NoopTracer, get_tracer
from tests.fakes import FakeStarSource, too_many_stars

client = TestClient(app)

_SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def source():
    """@brief Install a fake star source and a silent tracer for each test."""
    fake = FakeStarSource()
    app.dependency_overrides[get_star_source] = lambda: fake
    app.dependency_overrides[get_tracer] = lambda: NoopTracer()
    yield fake
    app.dependency_overrides.pop(get_star_source, None)
    app.dependency_overrides.pop(get_tracer, None)


def _assert_chart_headers(response) -> None:
    assert response.headers["content-type"] == "image/svg+xml;charset=utf-8"
    assert "max-age=86400" in response.headers["cache-control"]
    assert response.headers["cache-control"].startswith("public")
    assert response.headers["expires"] == response.headers["date"]


def test_chart_renders_star_history(source: FakeStarSource):
    response = client.get("/caarlos0/starcharts.svg")

    assert response.status_code == 200
    _assert_chart_headers(response)
    assert source.resolved == ["caarlos0/starcharts"]

    root = ET.fromstring(response.content)
    assert root.tag == f"{_SVG_NS}svg"
    series_groups = [e for e in root.iter() if e.get("id") == SERIES_ELEMENT_ID]
    assert len(series_groups) == 1


def test_chart_renders_repository_without_stars(source: FakeStarSource):
    source.events = []

    response = client.get("/owner/empty.svg")

    assert response.status_code == 200
    _assert_chart_headers(response)
    assert ET.fromstring(response.content).tag == f"{_SVG_NS}svg"


def test_chart_renders_error_graphic_for_too_many_stars(source: FakeStarSource):
    error = too_many_stars()
    source.fetch_error = error

    response = client.get("/torvalds/linux.svg")

    assert response.status_code == 200
    _assert_chart_headers(response)
    root = ET.fromstring(response.content)
    assert (root.get("width"), root.get("height")) == ("1024", "50")
    assert root.find(f"{_SVG_NS}text").text == str(error)


def test_chart_returns_400_when_repository_cannot_be_resolved(source: FakeStarSource):
    source.resolve_error = RepositoryError(
        ErrorKind.NOT_FOUND, "repository not found: nobody/nothing"
    )

    response = client.get("/nobody/nothing.svg")

    assert response.status_code == 400
    assert response.text == "repository not found: nobody/nothing"
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.parametrize("kind", [ErrorKind.TRANSIENT, ErrorKind.NOT_FOUND])
def test_chart_returns_503_when_stars_cannot_be_fetched(
    source: FakeStarSource, kind: ErrorKind
):
    source.fetch_error = RepositoryError(kind, "GitHub returned HTTP 502 for owner/repo")

    response = client.get("/owner/repo.svg")

    assert response.status_code == 503
    assert response.text == "GitHub returned HTTP 502 for owner/repo"


def test_chart_returns_empty_body_when_rendering_fails(source: FakeStarSource):
    with patch(
        "app.services.chart.render_chart", side_effect=RuntimeError("backend exploded")
    ):
        response = client.get("/owner/repo.svg")

    assert response.status_code == 200
    assert response.content == b""


def test_chart_logs_retrieval_failures_with_repository_context(
    source: FakeStarSource, caplog: pytest.LogCaptureFixture
):
    app.dependency_overrides.pop(get_tracer, None)
    source.fetch_error = RepositoryError(ErrorKind.TRANSIENT, "upstream outage")

    with caplog.at_level("ERROR", logger="app.repository"):
        response = client.get("/owner/repo.svg")

    assert response.status_code == 503
    assert any(
        "repo=owner/repo" in record.getMessage()
        and "failed to get stars" in record.getMessage()
        for record in caplog.records
    )


def test_chart_response_carries_a_single_date_header(source: FakeStarSource):
    response = client.get("/owner/repo.svg")

    assert response.status_code == 200
    assert len(response.headers.get_list("date")) == 1
    assert response.headers["date"] == response.headers["expires"]


def test_non_chart_responses_receive_a_date_header():
    response = client.get("/")

    assert response.status_code == 200
    assert len(response.headers.get_list("date")) == 1
    assert response.headers["date"].endswith(" GMT")
