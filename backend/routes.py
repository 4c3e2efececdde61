# backend/routes.py
from flask import Blueprint, jsonify

from .controllers import genres, movies, users

users_bp = Blueprint("users", __name__, url_prefix="/user")
movies_bp = Blueprint("movies", __name__, url_prefix="/movies")
genres_bp = Blueprint("genres", __name__, url_prefix="/genres")

# ---------------- USERS ----------------
users_bp.add_url_rule("", "create", users.create_user, methods=["POST"])
users_bp.add_url_rule("", "list", users.list_users, methods=["GET"])
users_bp.add_url_rule("/<user_id>", "get", users.get_user, methods=["GET"])
users_bp.add_url_rule("/<user_id>", "update", users.update_user, methods=["PUT"])
users_bp.add_url_rule("/<user_id>", "delete", users.delete_user, methods=["DELETE"])

# ---------------- MOVIES ----------------
movies_bp.add_url_rule("/<movie_id>", "get", movies.get_movie, methods=["GET"])
movies_bp.add_url_rule("", "list", movies.list_movies, methods=["GET"])
movies_bp.add_url_rule("/<user_id>", "create", movies.create_movie, methods=["POST"])
movies_bp.add_url_rule("/<movie_id>", "update", movies.update_movie, methods=["PUT"])
movies_bp.add_url_rule("/<movie_id>", "delete", movies.delete_movie, methods=["DELETE"])

# ---------------- GENRES ----------------
genres_bp.add_url_rule("", "create", genres.create_genre, methods=["POST"])
genres_bp.add_url_rule("/<genre_name>/<genre_id>", "update", genres.update_genre, methods=["PUT"])
genres_bp.add_url_rule(
    "/<genre_name>/<user_id>", "movies", genres.list_movies_by_genre_and_user, methods=["GET"]
)
genres_bp.add_url_rule("/<user_id>", "list", genres.list_genres, methods=["GET"])
genres_bp.add_url_rule("/<genre_name>/<genre_id>", "delete", genres.delete_genre, methods=["DELETE"])


def home():
    return jsonify({"message": "Welcome to the API world"})


def register_routes(app):
    app.add_url_rule("/", "home", home)
    for bp in (users_bp, movies_bp, genres_bp):
        app.register_blueprint(bp)
