# backend/models.py
import uuid
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()


def new_id():
    return uuid.uuid4().hex


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(30), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    movies = db.relationship(
        "Movie",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Movie.created_at",
    )

    def __repr__(self):
        return f"<User {self.id}:{self.email}>"

    def to_dict(self, with_movies=True):
        data = {"id": self.id, "name": self.name, "email": self.email}
        if with_movies:
            data["movies"] = [m.to_dict(genre="full") for m in self.movies]
        return data


class Genre(db.Model):
    __tablename__ = "genres"
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(100), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    movies = db.relationship("Movie", back_populates="genre")

    def __repr__(self):
        return f"<Genre {self.id}:{self.name}>"

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class Movie(db.Model):
    __tablename__ = "movies"
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    description = db.Column(db.Text, nullable=False)
    language = db.Column(db.String(50), nullable=False)
    image_id = db.Column(db.String(255))
    image_url = db.Column(db.String(1024))
    genre_id = db.Column(db.String(32), db.ForeignKey("genres.id"), nullable=False)
    user_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    genre = db.relationship("Genre", back_populates="movies")
    user = db.relationship("User", back_populates="movies")

    def __repr__(self):
        return f"<Movie {self.id}:{self.title} ({self.year})>"

    def to_dict(self, genre="name"):
        """Serialize the movie.

        ``genre`` picks the projection of the related genre: ``"name"`` gives
        ``{"name": ...}``, ``"full"`` gives ``{"id": ..., "name": ...}`` and
        ``None`` leaves it out.
        """
        data = {
            "id": self.id,
            "title": self.title,
            "year": self.year,
            "description": self.description,
            "language": self.language,
            "image_id": self.image_id,
            "image_url": self.image_url,
        }
        if genre == "full":
            data["genre"] = self.genre.to_dict()
        elif genre == "name":
            data["genre"] = {"name": self.genre.name}
        return data
