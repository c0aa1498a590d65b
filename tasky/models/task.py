"""
Task documents in the ``tasks`` collection.
"""
from bson import ObjectId

from ..schemas.task import TaskCreate, TaskResponse, TaskUpdate

TASKS_COLLECTION = "tasks"

# Server-side validator applied when the collection is created
TASK_SCHEMA = {
    "bsonType": "object",
    "required": ["title", "userId"],
    "properties": {
        "title": {
            "bsonType": "string",
            "description": "must be a string and is required",
        },
        "description": {
            "bsonType": "string",
            "description": "must be a string",
        },
        "completed": {
            "bsonType": "bool",
            "description": "must be a boolean",
        },
        "userId": {
            "bsonType": "objectId",
            "description": "must be an objectId and is required",
        },
    },
}


def task_to_document(task: TaskCreate) -> dict:
    """Build the document inserted for a new task. ``_id`` is left to the store."""
    return {
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "userId": ObjectId(task.user_id),
    }


def task_update_fields(task: TaskUpdate) -> dict:
    """Fields for a ``$set`` update; all of them, always."""
    return {
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
    }


def task_from_document(doc: dict) -> TaskResponse:
    return TaskResponse(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        description=doc.get("description", ""),
        completed=bool(doc.get("completed", False)),
        user_id=str(doc.get("userId", "")),
    )
