from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


# Names are stored exactly as posted; any JSON value is accepted.


class Student(BaseModel):
    id: int
    name: Any


class GroupSummary(BaseModel):
    """Stored form of a group: members are student ids."""

    id: int
    groupName: Any = None
    members: List[int] = Field(default_factory=list)


class Group(BaseModel):
    """Expanded form of a group returned by the single-group lookup."""

    id: int
    groupName: Any = None
    # None marks a member id with no matching student
    members: List[Optional[Student]] = Field(default_factory=list)


class CreateGroupRequest(BaseModel):
    groupName: Any = None
    members: Any = None


class ErrorResponse(BaseModel):
    error: str
