"""
Pydantic schemas for tasks.
"""
from typing import List

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field("", description="Task description")
    completed: bool = Field(False, description="Whether the task is done")
    user_id: str = Field(..., alias="userId", description="Owning user ID (24 hex characters)")

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, value: str) -> str:
        if not ObjectId.is_valid(value):
            raise ValueError("userId must be a 24 character hex string")
        return value


class TaskUpdate(BaseModel):
    """
    Schema for updating a task.

    Every field is written back, so a field missing from the body
    overwrites the stored value with its default.
    """
    title: str = Field("", description="Task title")
    description: str = Field("", description="Task description")
    completed: bool = Field(False, description="Whether the task is done")


class TaskResponse(BaseModel):
    """Schema for task response"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Task description")
    completed: bool = Field(False, description="Whether the task is done")
    user_id: str = Field(..., alias="userId", description="Owning user ID")


class TaskPage(BaseModel):
    """Schema for paginated task list"""
    tasks: List[TaskResponse] = Field(..., description="Tasks on this page")
    page: int = Field(..., description="Page number")
    limit: int = Field(..., description="Page size applied")
    total: int = Field(..., description="Total number of tasks at count time")


class CreatedTask(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    task_id: str = Field(..., alias="taskId")
