# backend/controllers/users.py
import re

from flask import current_app, jsonify

from .. import gateway
from ..errors import ClientInputError, Conflict, NotFound
from ..middleware import request_values

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_MIN, NAME_MAX = 2, 30


def validate_name(name):
    if not isinstance(name, str) or not NAME_MIN <= len(name) <= NAME_MAX:
        raise ClientInputError(
            "Invalid username. It must be between 2 and 30 characters long."
        )


def validate_email(email):
    if not isinstance(email, str) or not EMAIL_RE.match(email):
        raise ClientInputError("Invalid email format. Make sure it includes: '@', '.'")


# ---------------- CREATE OR FETCH ----------------
def create_user():
    body = request_values()
    name = body.get("name")
    email = body.get("email")

    if not name or not email:
        current_app.logger.warning("User signup without name or email")
        raise ClientInputError("Name and email are required fields.")
    validate_name(name)
    validate_email(email)

    existing = gateway.get_user_by_email(email)
    if existing:
        return jsonify({
            "status": "success",
            "message": "User already exists.",
            "user": existing.to_dict(),
        }), 200

    user = gateway.create_user(name, email)
    current_app.logger.info("Created user %s", user.id)
    return jsonify({
        "status": "success",
        "message": "User created successfully!",
        "user": user.to_dict(),
    }), 201


# ---------------- READ ----------------
def get_user(user_id):
    user = gateway.get_user(user_id)
    if not user:
        raise NotFound("User not found")
    return jsonify({"status": "success", "user": user.to_dict()})


def list_users():
    users = gateway.list_users()
    # an empty collection is answered as not found
    if not users:
        raise NotFound("Users not found")
    return jsonify({"status": "success", "all_users": [u.to_dict() for u in users]})


# ---------------- UPDATE ----------------
def update_user(user_id):
    body = request_values()
    fields = {k: body[k] for k in ("name", "email") if body.get(k) is not None}

    user = gateway.get_user(user_id)
    if not user:
        raise NotFound("User not found")

    if "name" in fields:
        validate_name(fields["name"])
    if "email" in fields:
        validate_email(fields["email"])
        owner = gateway.get_user_by_email(fields["email"])
        if owner and owner.id != user.id:
            raise Conflict("Email already in use")

    user = gateway.update_user(user, fields)
    return jsonify({
        "status": "success",
        "message": "User updated successfully",
        "user": user.to_dict(),
    })


# ---------------- DELETE ----------------
def delete_user(user_id):
    # nothing deleted still answers 204
    if not gateway.delete_user(user_id):
        current_app.logger.info("Delete of unknown user %s", user_id)
    return "", 204
