import logging
from typing import List, Optional

import pymongo
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..core.config import Settings, get_settings
from ..core.database import Store, get_store
from ..core.identifiers import parse_object_id
from ..core.pagination import PageRequest, PaginationError, paginate
from ..models.task import (
    task_from_document, task_to_document, task_update_fields
)
from ..schemas.common import Message
from ..schemas.task import (
    CreatedTask, TaskCreate, TaskPage, TaskResponse, TaskUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=TaskPage)
def list_tasks(
    page: Optional[str] = Query(None, description="Page number, 1-based"),
    limit: Optional[str] = Query(None, description="Tasks per page, at most 30"),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """List tasks one page at a time"""
    request = PageRequest.from_query(
        page,
        limit,
        default_page=settings.default_page,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )

    try:
        with pymongo.timeout(settings.request_timeout):
            result = paginate(store.tasks, request, task_from_document)
    except PaginationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {e.stage} tasks"
        )

    logger.info("Tasks fetched successfully with pagination")
    return TaskPage(
        tasks=result.items,
        page=result.page,
        limit=result.limit,
        total=result.total
    )


@router.post("", response_model=CreatedTask, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Create a new task. The owning user is not looked up."""
    try:
        with pymongo.timeout(settings.request_timeout):
            result = store.tasks.insert_one(task_to_document(task))
    except PyMongoError as e:
        logger.error(f"Error inserting task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    logger.info("Task created successfully")
    return CreatedTask(message="Task created successfully", task_id=str(result.inserted_id))


@router.get("/user/{user_id}", response_model=List[TaskResponse])
def get_user_tasks(
    user_id: str,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Get all tasks owned by a user"""
    owner = parse_object_id(user_id, "user")

    try:
        with pymongo.timeout(settings.request_timeout):
            cursor = store.tasks.find({"userId": owner}).sort("_id", ASCENDING)
            tasks = [task_from_document(doc) for doc in cursor]
    except PyMongoError as e:
        logger.error(f"Error fetching user tasks: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    logger.info("User tasks fetched successfully")
    return tasks


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Get a specific task by ID"""
    object_id = parse_object_id(task_id, "task")

    try:
        with pymongo.timeout(settings.request_timeout):
            doc = store.tasks.find_one({"_id": object_id})
    except PyMongoError as e:
        logger.error(f"Error fetching task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if doc is None:
        logger.error(f"No task found with ID {task_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    logger.info("Task fetched successfully")
    return task_from_document(doc)


@router.put("/{task_id}", response_model=Message)
def update_task(
    task_id: str,
    task: TaskUpdate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Overwrite title, description and completed of a task"""
    object_id = parse_object_id(task_id, "task")

    try:
        with pymongo.timeout(settings.request_timeout):
            result = store.tasks.update_one(
                {"_id": object_id},
                {"$set": task_update_fields(task)}
            )
    except PyMongoError as e:
        logger.error(f"Error updating task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if result.matched_count == 0:
        logger.error("No task found with the given ID")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    logger.info("Task updated successfully")
    return Message(message="Task updated successfully")


@router.delete("/{task_id}", response_model=Message)
def delete_task(
    task_id: str,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Delete a task"""
    object_id = parse_object_id(task_id, "task")

    try:
        with pymongo.timeout(settings.request_timeout):
            result = store.tasks.delete_one({"_id": object_id})
    except PyMongoError as e:
        logger.error(f"Error deleting task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if result.deleted_count == 0:
        logger.error("No task found with the given ID")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    logger.info("Task deleted successfully")
    return Message(message="Task deleted successfully")
