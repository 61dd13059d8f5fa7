"""Tests for starguard.stargazer."""

from __future__ import annotations

import pytest
import requests

from models import ErrorKind, StarGuardError
from starguard.stargazer import Stargazer, parse_star_count
from tests._fixtures.fakes import FakeResponse, FakeSession, repo_page

URL = "https://github.com/foo/bar"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("950", 950),
        ("1.2k", 1200),
        ("3k", 3000),
        ("0", 0),
        ("  42\n ", 42),
        ("12.9", 12),
        ("2.3k", 2300),
        ("0.5k", 500),
    ],
)
def test_parse_star_count(text: str, expected: int) -> None:
    assert parse_star_count(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "   ", "k", "abc", "1.2K", "1.2m", "NaN", "inf", "-3", "1,234", "1e400", "1e3000000", "1e308k"],
)
def test_parse_star_count_rejects_unreadable_text(text: str) -> None:
    with pytest.raises(ValueError):
        parse_star_count(text)


def test_get_stars_reads_counter() -> None:
    session = FakeSession({URL: FakeResponse(URL, repo_page("1.2k"))})

    stargazer = Stargazer(timeout=5, session=session)

    assert stargazer.get_stars(URL) == 1200
    assert session.calls == [(URL, 5)]


def test_get_stars_uses_first_counter_in_document_order() -> None:
    page = (
        "<html><body><div><p><span id='repo-stars-counter-star'>7</span></p></div>"
        "<span id='repo-stars-counter-star'>9000</span></body></html>"
    )
    session = FakeSession({URL: FakeResponse(URL, page)})

    assert Stargazer(session=session).get_stars(URL) == 7


def test_get_stars_reads_first_text_of_nested_counter() -> None:
    page = "<span id='repo-stars-counter-star'><b>15</b> stars</span>"
    session = FakeSession({URL: FakeResponse(URL, page)})

    assert Stargazer(session=session).get_stars(URL) == 15


def test_get_stars_missing_counter() -> None:
    session = FakeSession({URL: FakeResponse(URL, repo_page("12", element_id="other"))})

    with pytest.raises(StarGuardError) as excinfo:
        Stargazer(session=session).get_stars(URL)

    error = excinfo.value
    assert error.kind is ErrorKind.METRIC_UNAVAILABLE
    assert error.target == URL
    assert str(error) == (
        f"Error on Parsing Stars for {URL} - could not find stars element in fetched HTML"
    )


@pytest.mark.parametrize("counter", ["", "lots"])
def test_get_stars_unparsable_counter(counter: str) -> None:
    session = FakeSession({URL: FakeResponse(URL, repo_page(counter))})

    with pytest.raises(StarGuardError) as excinfo:
        Stargazer(session=session).get_stars(URL)

    assert excinfo.value.kind is ErrorKind.METRIC_UNAVAILABLE


def test_get_stars_error_status_is_query_failure() -> None:
    # body of an error page must not be parsed even if it has a counter
    session = FakeSession({URL: FakeResponse(URL, repo_page("5"), status_code=500)})

    with pytest.raises(StarGuardError) as excinfo:
        Stargazer(session=session).get_stars(URL)

    error = excinfo.value
    assert error.kind is ErrorKind.QUERY_FAILED
    assert error.message.startswith(f"Error on Querying Github for {URL} - 500")


def test_get_stars_transport_error_is_query_failure() -> None:
    session = FakeSession({URL: requests.ConnectionError("connection refused")})

    with pytest.raises(StarGuardError) as excinfo:
        Stargazer(session=session).get_stars(URL)

    assert excinfo.value.kind is ErrorKind.QUERY_FAILED
    assert "connection refused" in excinfo.value.message


def test_get_stars_timeout_is_query_failure() -> None:
    session = FakeSession({URL: requests.Timeout("read timed out")})

    with pytest.raises(StarGuardError) as excinfo:
        Stargazer(session=session).get_stars(URL)

    assert excinfo.value.kind is ErrorKind.QUERY_FAILED


def test_default_session_is_created() -> None:
    stargazer = Stargazer()

    assert isinstance(stargazer.session, requests.Session)
    assert stargazer.session.headers["Accept"] == "text/html"


def test_get_stars_overflowing_counter_is_metric_unavailable() -> None:
    session = FakeSession({URL: FakeResponse(URL, repo_page("1e3000000"))})

    with pytest.raises(StarGuardError) as excinfo:
        Stargazer(session=session).get_stars(URL)

    assert excinfo.value.kind is ErrorKind.METRIC_UNAVAILABLE


def test_given_session_headers_are_left_alone() -> None:
    session = FakeSession({URL: FakeResponse(URL, repo_page("12"))})

    Stargazer(session=session).get_stars(URL)

    assert session.headers == {}
