from servicehub.auth import (create_session_token, dump_filters, dump_flash, get_session_from_token,
                             load_filters, load_flash)
from servicehub.models import SearchFilters, SessionUser


def test_session_round_trip():
    token = create_session_token(SessionUser(username="dana", role="ROLE_CUSTOMER", token="abc"))

    session = get_session_from_token(token)

    assert session.is_authenticated
    assert session.user.username == "dana"
    assert session.user.token == "abc"


def test_missing_or_tampered_session_is_anonymous():
    token = create_session_token(SessionUser(username="dana", role="ROLE_CUSTOMER"))

    assert get_session_from_token(None).is_authenticated is False
    assert get_session_from_token(token + "x").is_authenticated is False
    assert get_session_from_token("garbage").user is None


def test_filters_round_trip_and_fallback():
    filters = SearchFilters(search="plumber", location=" Dhaka ")
    assert load_filters(dump_filters(filters)) == filters
    assert load_filters("tampered") == SearchFilters()


def test_tokens_are_not_interchangeable():
    # a filters cookie must not pass as a session
    assert get_session_from_token(dump_filters(SearchFilters())).is_authenticated is False


def test_flash_round_trip():
    assert load_flash(dump_flash(["Booking request sent successfully!"])) == ["Booking request sent successfully!"]
    assert load_flash(None) == []
    assert load_flash("bad") == []
