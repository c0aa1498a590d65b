"""
User documents in the ``users`` collection.

Passwords are stored as received and never returned.
"""
from ..schemas.user import UserCreate, UserResponse, UserUpdate

USERS_COLLECTION = "users"

USER_SCHEMA = {
    "bsonType": "object",
    "required": ["name", "email", "password"],
    "properties": {
        "name": {
            "bsonType": "string",
            "description": "must be a string and is required",
        },
        "email": {
            "bsonType": "string",
            "description": "must be a string and is required",
        },
        "password": {
            "bsonType": "string",
            "description": "must be a string and is required",
        },
    },
}


def user_to_document(user: UserCreate) -> dict:
    return {
        "name": user.name,
        "email": user.email,
        "password": user.password,
    }


def user_update_fields(user: UserUpdate) -> dict:
    return {
        "name": user.name,
        "email": user.email,
        "password": user.password,
    }


def user_from_document(doc: dict) -> UserResponse:
    return UserResponse(
        id=str(doc["_id"]),
        name=doc.get("name", ""),
        email=doc.get("email", ""),
    )
