from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from taskmanager.services import TaskService
from taskmanager.store import TaskStore
from taskmanager.utils.db import get_db

tasks_bp = Blueprint("tasks", __name__)


def get_task_service() -> TaskService:
    return TaskService(TaskStore(get_db().tasks))


@tasks_bp.get("/", strict_slashes=False)
@jwt_required()
def list_tasks():
    user_id = get_jwt_identity()
    return jsonify(get_task_service().list(user_id)), 200


@tasks_bp.get("/<task_id>")
@jwt_required()
def get_task(task_id):
    user_id = get_jwt_identity()
    return jsonify(get_task_service().get(user_id, task_id)), 200


@tasks_bp.post("/", strict_slashes=False)
@jwt_required()
def create_task():
    user_id = get_jwt_identity()
    # Anything that is not a JSON object is rejected by validation
    payload = request.get_json(silent=True)
    return jsonify(get_task_service().create(user_id, payload)), 201


@tasks_bp.put("/<task_id>")
@jwt_required()
def update_task(task_id):
    user_id = get_jwt_identity()
    payload = request.get_json(silent=True)
    return jsonify(get_task_service().update(user_id, task_id, payload)), 200


@tasks_bp.delete("/<task_id>")
@jwt_required()
def delete_task(task_id):
    user_id = get_jwt_identity()
    return jsonify(get_task_service().delete(user_id, task_id)), 200
