from __future__ import annotations

import re
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .errors import DuplicateGroupError, GroupNotFoundError
from .schemas import CreateGroupRequest, ErrorResponse, Group, GroupSummary, Student
from .store import Directory


router = APIRouter(prefix="/api", tags=["Directory"])

GROUP_EXISTS = "Group already exists"
GROUP_NOT_FOUND = "Group not found"

# Digits are ASCII only; a 0x prefix switches to hexadecimal
_LEADING_INT = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")


def get_directory(request: Request) -> Directory:
    return request.app.state.directory


def parse_group_id(raw: str) -> Optional[int]:
    """
    Parse the leading integer of a path segment.

    Trailing characters are ignored ("12abc" is 12) and a "0x" prefix reads the
    digits as hexadecimal ("0x1f" is 31). A segment without leading digits
    yields None, which never matches a group.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        if not hex_digits:
            return None
        value = int(hex_digits, 16)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def _require_group_id(raw: str) -> int:
    group_id = parse_group_id(raw)
    if group_id is None:
        raise GroupNotFoundError(raw)
    return group_id


@router.get("/groups", response_model=List[GroupSummary], summary="List groups")
async def list_groups(directory: Directory = Depends(get_directory)) -> List[GroupSummary]:
    return directory.groups.list()


@router.get("/students", response_model=List[Student], summary="List students")
async def list_students(directory: Directory = Depends(get_directory)) -> List[Student]:
    return directory.students.list()


@router.post(
    "/groups",
    response_model=GroupSummary,
    responses={404: {"model": ErrorResponse, "description": GROUP_EXISTS}},
    summary="Create a group",
)
async def create_group(
    payload: Any = Body(None, description="Object with groupName and members."),
    directory: Directory = Depends(get_directory),
):
    # A missing or non-object body behaves like an empty one and fails on the
    # absent members
    if isinstance(payload, dict):
        group_request = CreateGroupRequest.model_validate(payload)
    else:
        group_request = CreateGroupRequest()
    try:
        return directory.groups.create(group_request.groupName, group_request.members)
    except DuplicateGroupError:
        return JSONResponse(status_code=404, content={"error": GROUP_EXISTS})


@router.delete(
    "/groups/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse, "description": GROUP_NOT_FOUND}},
    summary="Delete a group",
)
async def delete_group(
    group_id: str = Path(..., description="Numeric group id."),
    directory: Directory = Depends(get_directory),
) -> Response:
    try:
        directory.groups.delete(_require_group_id(group_id))
    except GroupNotFoundError:
        return JSONResponse(status_code=404, content={"error": GROUP_NOT_FOUND})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/groups/{group_id}",
    response_model=Group,
    responses={404: {"content": {"text/plain": {}}, "description": GROUP_NOT_FOUND}},
    summary="Get a group with its members expanded",
)
async def get_group(
    group_id: str = Path(..., description="Numeric group id."),
    directory: Directory = Depends(get_directory),
):
    try:
        return directory.groups.get_expanded(_require_group_id(group_id))
    except GroupNotFoundError:
        return PlainTextResponse(GROUP_NOT_FOUND, status_code=404)
