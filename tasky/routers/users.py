import logging

import pymongo
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..core.config import Settings, get_settings
from ..core.database import Store, get_store
from ..core.identifiers import parse_object_id
from ..models.user import (
    user_from_document, user_to_document, user_update_fields
)
from ..schemas.common import Message
from ..schemas.user import (
    CreatedUser, UserCreate, UserList, UserResponse, UserUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserList)
def get_users(
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Get all users"""
    try:
        with pymongo.timeout(settings.request_timeout):
            cursor = store.users.find({}).sort("_id", ASCENDING)
            users = [user_from_document(doc) for doc in cursor]
    except PyMongoError as e:
        logger.error(f"Error fetching users: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users"
        )

    logger.info("All users fetched successfully")
    return UserList(users=users, count=len(users))


@router.post("", response_model=CreatedUser, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Create a new user"""
    try:
        with pymongo.timeout(settings.request_timeout):
            result = store.users.insert_one(user_to_document(user))
    except PyMongoError as e:
        logger.error(f"Error inserting user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    logger.info("User created successfully")
    return CreatedUser(message="User created successfully", user_id=str(result.inserted_id))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Get a specific user by ID"""
    object_id = parse_object_id(user_id, "user")

    try:
        with pymongo.timeout(settings.request_timeout):
            doc = store.users.find_one({"_id": object_id})
    except PyMongoError as e:
        logger.error(f"Error fetching user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if doc is None:
        logger.error(f"User {user_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    logger.info("User fetched successfully")
    return user_from_document(doc)


@router.put("/{user_id}", response_model=Message)
def update_user(
    user_id: str,
    user: UserUpdate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Overwrite name, email and password of a user"""
    object_id = parse_object_id(user_id, "user")

    try:
        with pymongo.timeout(settings.request_timeout):
            result = store.users.update_one(
                {"_id": object_id},
                {"$set": user_update_fields(user)}
            )
    except PyMongoError as e:
        logger.error(f"Error updating user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if result.matched_count == 0:
        logger.error("User not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    logger.info("User updated successfully")
    return Message(message="User updated successfully")


@router.delete("/{user_id}", response_model=Message)
def delete_user(
    user_id: str,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Delete a user. Their tasks are left in place."""
    object_id = parse_object_id(user_id, "user")

    try:
        with pymongo.timeout(settings.request_timeout):
            result = store.users.delete_one({"_id": object_id})
    except PyMongoError as e:
        logger.error(f"Error deleting user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if result.deleted_count == 0:
        logger.error("User not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    logger.info("User deleted successfully")
    return Message(message="User deleted successfully")
