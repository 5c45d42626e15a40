from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from pymongo.errors import DuplicateKeyError
from werkzeug.security import check_password_hash, generate_password_hash

from taskmanager.errors import AuthError, ConflictError, ValidationError
from taskmanager.models.user_model import User
from taskmanager.utils.dates import utcnow
from taskmanager.utils.db import get_db, to_object_id
from taskmanager.validation import validate_credentials

auth_bp = Blueprint("auth", __name__)


def _credentials(min_password_length=1):
    payload = request.get_json(silent=True)
    result = validate_credentials(payload, min_password_length)
    if not result.ok:
        raise ValidationError(result.errors)
    return result.value["email"], result.value["password"]


def _token_response(user: User, status):
    token = create_access_token(identity=user.id)
    return jsonify(token=token, user=user.to_transfer()), status


@auth_bp.post("/register")
def register():
    email, password = _credentials(current_app.config["PASSWORD_MIN_LENGTH"])
    users = get_db().users

    if users.find_one({"email": email}) is not None:
        raise ConflictError("Email already registered")

    now = utcnow()
    user_doc = {
        "email": email,
        "password_hash": generate_password_hash(password),
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        users.insert_one(user_doc)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same email
        raise ConflictError("Email already registered") from None

    current_app.logger.info("Registered user %s", user_doc["_id"])
    return _token_response(User.from_document(user_doc), 201)


@auth_bp.post("/login")
def login():
    email, password = _credentials()
    doc = get_db().users.find_one({"email": email})
    if doc is None or not check_password_hash(doc["password_hash"], password):
        current_app.logger.info("Failed login attempt for %s", email)
        raise AuthError("Invalid email or password")
    return _token_response(User.from_document(doc), 200)


@auth_bp.get("/me")
@jwt_required()
def me():
    doc = get_db().users.find_one({"_id": to_object_id(get_jwt_identity())})
    if doc is None:
        raise AuthError("User no longer exists")
    return jsonify(User.from_document(doc).to_transfer()), 200
