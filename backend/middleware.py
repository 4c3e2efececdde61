# backend/middleware.py
"""Normalization of movie payloads before they reach the movie controller.

Malformed values are coerced where a sensible reading exists instead of being
rejected. Only a missing required field, an unreadable year and a non-string
language stop the request.
"""
import functools
import re

from flask import g, request

from .errors import ClientInputError

MOVIE_FIELDS = ("title", "year", "genre", "language", "description")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def request_values():
    """Body fields of a JSON or form/multipart request as a plain dict."""
    if request.is_json:
        body = request.get_json(silent=True)
        return dict(body) if isinstance(body, dict) else {}
    return request.form.to_dict()


def _parse_year(value):
    match = _LEADING_INT.match(value)
    if not match:
        raise ClientInputError("Year must be a number")
    return int(match.group(1))


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_movie_fields(body, partial=False):
    """Return a copy of ``body`` with the movie fields coerced.

    With ``partial`` the required-field check is skipped and only the fields
    present are touched.
    """
    fields = dict(body)

    if not partial:
        if not all(fields.get(name) for name in MOVIE_FIELDS):
            raise ClientInputError("Please provide all required fields")

    if isinstance(fields.get("year"), str):
        fields["year"] = _parse_year(fields["year"])

    if "language" in fields and not isinstance(fields["language"], str):
        raise ClientInputError("Language must be a string")

    title = fields.get("title")
    if _is_number(title):
        fields["title"] = str(title)
    elif isinstance(title, str):
        fields["title"] = title.lower()

    if isinstance(fields.get("genre"), str):
        fields["genre"] = fields["genre"].lower()

    if _is_number(fields.get("description")):
        fields["description"] = str(fields["description"])

    return fields


def convert_movie_fields(route=None, partial=False):
    """Decorator: normalize the request body into ``g.movie_fields``."""
    def decorator(view):
        @functools.wraps(view)
        def route_wrapper(*args, **kwargs):
            g.movie_fields = normalize_movie_fields(request_values(), partial=partial)
            return view(*args, **kwargs)

        return route_wrapper

    if route is not None:
        return decorator(route)
    return decorator
