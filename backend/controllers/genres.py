# backend/controllers/genres.py
from flask import current_app, jsonify

from .. import gateway
from ..errors import ClientInputError, Conflict, NotFound
from ..middleware import request_values
from .movies import page_arg


def _genre_name(body):
    name = body.get("name")
    if not name or not isinstance(name, str) or not name.strip():
        raise ClientInputError("Genre name is required")
    return name.strip().lower()


def create_genre():
    name = _genre_name(request_values())
    if gateway.get_genre_by_name(name):
        raise Conflict("Genre already exists")

    genre = gateway.create_genre(name)
    current_app.logger.info("Created genre %s (%s)", genre.name, genre.id)
    return jsonify({
        "status": "success",
        "message": "Genre created successfully",
        "new_genre": genre.to_dict(),
    }), 201


def list_movies_by_genre_and_user(genre_name, user_id):
    genre = gateway.get_genre_by_name(genre_name)
    if not genre:
        raise NotFound("Genre not found")

    # a known genre with no movies for this user is still a success
    page = gateway.list_movies_by_genre_and_user(genre, user_id, page_arg())
    return jsonify({
        "status": "success",
        "movies": [m.to_dict() for m in page.items],
        "pagination": page.meta(),
    })


def list_genres(user_id):
    genres = gateway.list_genres_with_user_movies(user_id)
    return jsonify([
        dict(genre.to_dict(), movies=[m.to_dict(genre=None) for m in movies])
        for genre, movies in genres
    ])


def update_genre(genre_name, genre_id):
    # genre_name is part of the route only; the id decides
    name = _genre_name(request_values())
    genre = gateway.get_genre(genre_id)
    if not genre:
        raise NotFound("Genre not found")

    clash = gateway.get_genre_by_name(name)
    if clash and clash.id != genre.id:
        raise Conflict("Genre already exists")

    genre = gateway.rename_genre(genre, name)
    return jsonify({
        "status": "success",
        "message": "Genre updated successfully",
        "updated_genre": genre.to_dict(),
    })


def delete_genre(genre_name, genre_id):
    genre = gateway.get_genre(genre_id)
    if not genre:
        raise NotFound("Genre not found")
    if gateway.count_movies(genre_id=genre.id):
        raise ClientInputError("Genre still has movies")

    gateway.delete_genre(genre)
    return "", 204
