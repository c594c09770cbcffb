from __future__ import annotations

from typing import Any


class DirectoryError(Exception):
    """Base class for registry failures reported back to the caller."""


class DuplicateGroupError(DirectoryError):
    def __init__(self, group_name: Any) -> None:
        super().__init__(f"Group {group_name!r} already exists with the same members")
        self.group_name = group_name


class GroupNotFoundError(DirectoryError):
    def __init__(self, group_id: Any) -> None:
        super().__init__(f"Group {group_id!r} not found")
        self.group_id = group_id
