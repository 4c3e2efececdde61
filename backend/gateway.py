# backend/gateway.py
"""Data access for users, genres and movies.

Controllers never touch ``db.session`` directly; everything they read or
write goes through the functions below. Writes commit immediately unless
``commit=False`` is passed, in which case the caller owns the transaction.
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from .models import db, User, Genre, Movie

PAGE_SIZE = 4


class Page:
    def __init__(self, items, page, total):
        self.items = items
        self.page = page
        self.total = total

    @property
    def pages(self):
        # ceil(total / PAGE_SIZE)
        return -(-self.total // PAGE_SIZE)

    def meta(self):
        return {
            "current_page": self.page,
            "page_size": PAGE_SIZE,
            "total_movies": self.total,
            "total_pages": self.pages,
        }


def _paginate(query, page):
    result = query.paginate(page=page, per_page=PAGE_SIZE, error_out=False, count=True)
    return Page(result.items, page, result.total or 0)


def _commit(commit):
    if commit:
        db.session.commit()
    else:
        db.session.flush()


# ---------------- USERS ----------------
def get_user(user_id) -> Optional[User]:
    return (
        User.query.options(selectinload(User.movies).selectinload(Movie.genre))
        .filter_by(id=user_id)
        .first()
    )


def get_user_by_email(email) -> Optional[User]:
    return (
        User.query.options(selectinload(User.movies).selectinload(Movie.genre))
        .filter_by(email=email)
        .first()
    )


def list_users() -> List[User]:
    return (
        User.query.options(selectinload(User.movies).selectinload(Movie.genre))
        .order_by(User.created_at)
        .all()
    )


def create_user(name, email, commit=True) -> User:
    user = User(name=name, email=email)
    db.session.add(user)
    _commit(commit)
    return user


def update_user(user, fields, commit=True) -> User:
    for key in ("name", "email"):
        if key in fields:
            setattr(user, key, fields[key])
    _commit(commit)
    return user


def delete_user(user_id) -> int:
    """Delete a user and the movies they own. Returns the number of users removed."""
    user = db.session.get(User, user_id)
    if user is None:
        return 0
    db.session.delete(user)
    db.session.commit()
    return 1


# ---------------- GENRES ----------------
def get_genre(genre_id) -> Optional[Genre]:
    return db.session.get(Genre, genre_id)


def get_genre_by_name(name) -> Optional[Genre]:
    return Genre.query.filter(func.lower(Genre.name) == name.lower()).first()


def create_genre(name, commit=True) -> Genre:
    genre = Genre(name=name)
    db.session.add(genre)
    _commit(commit)
    return genre


def rename_genre(genre, name, commit=True) -> Genre:
    genre.name = name
    _commit(commit)
    return genre


def delete_genre(genre) -> None:
    db.session.delete(genre)
    db.session.commit()


def list_genres_with_user_movies(user_id):
    """Every genre paired with the movies ``user_id`` owns in it."""
    genres = Genre.query.order_by(Genre.name).all()
    movies = Movie.query.filter_by(user_id=user_id).order_by(Movie.created_at).all()

    by_genre = {}
    for m in movies:
        by_genre.setdefault(m.genre_id, []).append(m)
    return [(g, by_genre.get(g.id, [])) for g in genres]


# ---------------- MOVIES ----------------
def get_movie(movie_id) -> Optional[Movie]:
    return Movie.query.options(selectinload(Movie.genre)).filter_by(id=movie_id).first()


def create_movie(user_id, genre_id, fields, image=None, commit=True) -> Movie:
    movie = Movie(
        title=fields["title"],
        year=fields["year"],
        description=fields["description"],
        language=fields["language"],
        genre_id=genre_id,
        user_id=user_id,
    )
    if image is not None:
        movie.image_id = image.public_id
        movie.image_url = image.secure_url
    db.session.add(movie)
    _commit(commit)
    return movie


def update_movie(movie, fields, image=None, commit=True) -> Movie:
    """Patch the keys present in ``fields`` and, when given, the image reference.

    Both changes land in the same commit.
    """
    for key in ("title", "description", "language", "year"):
        if key in fields:
            setattr(movie, key, fields[key])
    if "genre" in fields:
        movie.genre_id = fields["genre"]
        # drop the stale relationship so the new genre loads on access
        db.session.expire(movie, ["genre"])
    if image is not None:
        movie.image_id = image.public_id
        movie.image_url = image.secure_url
    _commit(commit)
    return movie


def delete_movie(movie_id) -> int:
    deleted = Movie.query.filter_by(id=movie_id).delete()
    db.session.commit()
    return deleted


def count_movies(**filters) -> int:
    return Movie.query.filter_by(**filters).count()


def list_movies(page) -> Page:
    q = Movie.query.options(selectinload(Movie.genre)).order_by(Movie.created_at, Movie.id)
    return _paginate(q, page)


def list_movies_by_genre_and_user(genre, user_id, page) -> Page:
    q = (
        Movie.query.options(selectinload(Movie.genre))
        .filter_by(genre_id=genre.id, user_id=user_id)
        .order_by(Movie.created_at, Movie.id)
    )
    return _paginate(q, page)


def rollback():
    db.session.rollback()
