import pytest

from backend.errors import ClientInputError
from backend.middleware import normalize_movie_fields


def test_coerces_loose_values():
    fields = normalize_movie_fields({
        "title": 5, "year": "2020", "genre": "Drama", "language": "en", "description": 7,
    })
    assert fields == {
        "title": "5", "year": 2020, "genre": "drama", "language": "en", "description": "7",
    }


def test_lowercases_title():
    fields = normalize_movie_fields({
        "title": "The THING", "year": 1982, "genre": "g1", "language": "en", "description": "d",
    })
    assert fields["title"] == "the thing"
    assert fields["year"] == 1982


def test_year_reads_leading_integer():
    fields = normalize_movie_fields({"year": " 1999 (remaster)"}, partial=True)
    assert fields["year"] == 1999


def test_unreadable_year():
    with pytest.raises(ClientInputError, match="Year must be a number"):
        normalize_movie_fields({"year": "soon"}, partial=True)


@pytest.mark.parametrize("missing", ["title", "year", "genre", "language", "description"])
def test_missing_field_rejected(missing):
    body = {"title": "t", "year": 2000, "genre": "g", "language": "en", "description": "d"}
    del body[missing]
    with pytest.raises(ClientInputError, match="Please provide all required fields"):
        normalize_movie_fields(body)


def test_non_string_language_rejected():
    with pytest.raises(ClientInputError, match="Language must be a string"):
        normalize_movie_fields({
            "title": "t", "year": 2000, "genre": "g", "language": 3, "description": "d",
        })


def test_partial_touches_only_given_fields():
    assert normalize_movie_fields({"year": "2001"}, partial=True) == {"year": 2001}
    assert normalize_movie_fields({}, partial=True) == {}


def test_missing_language_over_http(client, make_user, make_genre):
    user = make_user()
    genre = make_genre()
    res = client.post(f"/movies/{user['id']}", json={
        "title": "ok", "year": 2000, "genre": genre["id"], "description": "fine", "image": "a.jpg",
    })
    assert res.status_code == 400
