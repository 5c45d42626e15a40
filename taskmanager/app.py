import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from pymongo.errors import PyMongoError

from taskmanager.errors import AuthError, StoreError, TaskManagerError


def _error_response(error: TaskManagerError):
    return jsonify(error.to_dict()), error.status_code


def _init_jwt(app):
    jwt = JWTManager(app)

    # Requests are rejected here before any task code runs
    @jwt.unauthorized_loader
    def missing_token(reason):
        return _error_response(AuthError(reason))

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _error_response(AuthError(f"Invalid token: {reason}"))

    @jwt.expired_token_loader
    def expired_token(_header, _payload):
        return _error_response(AuthError("Token has expired"))

    return jwt


def create_app(config_overrides=None, mongo_client=None):
    app = Flask(__name__)
    app.config.from_object("taskmanager.config.Config")
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Core extensions
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)
    _init_jwt(app)

    from taskmanager.store import TaskStore
    from taskmanager.utils.db import get_db, init_app as init_db, ping_db

    init_db(app, mongo_client)

    with app.app_context():
        db = get_db()
        try:
            TaskStore(db.tasks).ensure_indexes()
            db.users.create_index("email", unique=True)
        except PyMongoError as exc:
            app.logger.warning("Could not create MongoDB indexes: %s", exc)

    # Register blueprints
    from taskmanager.routes.auth_routes import auth_bp
    from taskmanager.routes.task_routes import tasks_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    @app.get("/health")
    def health():
        return jsonify(status="ok", dbConnected=ping_db()), 200

    @app.errorhandler(TaskManagerError)
    def task_manager_error(error):
        return _error_response(error)

    @app.errorhandler(PyMongoError)
    def mongo_error(error):
        app.logger.exception("Unhandled MongoDB error: %s", error)
        return _error_response(StoreError())

    @app.errorhandler(404)
    def not_found(_):
        return jsonify(message="Not Found"), 404

    @app.errorhandler(405)
    def method_not_allowed(_):
        return jsonify(message="Method Not Allowed"), 405

    @app.errorhandler(500)
    def server_error(_):
        return jsonify(message="Internal Server Error"), 500

    return app


if __name__ == "__main__":
    # Direct run support: python -m taskmanager.app
    create_app().run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "3000")),
        debug=os.environ.get("FLASK_DEBUG", "1") == "1",
    )
