# backend/controllers/movies.py
from flask import current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from .. import gateway
from ..gateway import PAGE_SIZE
from ..errors import ClientInputError, InternalError, NotFound
from ..images import get_uploader, resolve_image_input
from ..middleware import convert_movie_fields, request_values

MAX_PAGE = (2 ** 63 - 1) // PAGE_SIZE + 1


def page_arg():
    """The 1-based ``page`` query parameter; anything unusable means page 1."""
    try:
        page = int(request.args.get("page", 1))
    except (TypeError, ValueError):
        return 1
    # the offset (page - 1) * PAGE_SIZE must fit a signed 64-bit column
    if page < 1 or page > MAX_PAGE:
        return 1
    return page


def _persist_or_discard(upload, write):
    """Run ``write``; if it fails, remove the image that was just uploaded."""
    try:
        return write()
    except SQLAlchemyError as e:
        gateway.rollback()
        if upload is not None:
            get_uploader().destroy(upload.public_id)
        raise InternalError("Could not save movie") from e


# ---------------- CREATE ----------------
@convert_movie_fields
def create_movie(user_id):
    fields = g.movie_fields
    image = resolve_image_input(request.files, request_values())
    if image is None:
        raise ClientInputError("Image is missing")

    upload = get_uploader().upload(image)
    movie = _persist_or_discard(
        upload,
        lambda: gateway.create_movie(user_id, fields["genre"], fields, image=upload),
    )
    current_app.logger.info("Created movie %s for user %s", movie.id, user_id)
    return jsonify({
        "status": "success",
        "message": "Movie created successfully",
        "new_movie": movie.to_dict(genre="full"),
    }), 201


# ---------------- UPDATE ----------------
@convert_movie_fields(partial=True)
def update_movie(movie_id):
    movie = gateway.get_movie(movie_id)
    if not movie:
        raise NotFound("Movie not found")

    fields = {
        k: v for k, v in g.movie_fields.items()
        if k in ("title", "description", "language", "year", "genre") and v is not None
    }
    image = resolve_image_input(request.files, request_values())
    upload = get_uploader().upload(image) if image is not None else None

    movie = _persist_or_discard(
        upload, lambda: gateway.update_movie(movie, fields, image=upload)
    )
    return jsonify({
        "status": "success",
        "message": "Movie updated successfully",
        "updated_movie": movie.to_dict(genre="full"),
    })


# ---------------- READ ----------------
def get_movie(movie_id):
    movie = gateway.get_movie(movie_id)
    if not movie:
        raise NotFound("Movie not found")
    return jsonify({"status": "success", "movie": movie.to_dict()})


def list_movies():
    page = gateway.list_movies(page_arg())
    return jsonify({
        "status": "success",
        "data": [m.to_dict(genre="full") for m in page.items],
        "pagination": page.meta(),
    })


# ---------------- DELETE ----------------
def delete_movie(movie_id):
    if not gateway.delete_movie(movie_id):
        raise NotFound("Movie not found")
    return "", 204
