from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .errors import DuplicateGroupError, GroupNotFoundError
from .schemas import Group, GroupSummary, Student

logger = logging.getLogger(__name__)


# Preloaded when SEED_SAMPLE_DATA is enabled
SAMPLE_GROUPS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Group 1", ("Alice", "Bob", "David")),
    ("Group 2", ("Charlie", "Eve")),
)


def same_value(left: Any, right: Any) -> bool:
    """
    Strict equality between two decoded JSON values.

    Values of different JSON types never match, so 1, "1" and true are all
    distinct. Objects and arrays only match themselves, never an equal copy.
    """
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return left is right
    if isinstance(left, str) != isinstance(right, str):
        return False
    return left == right


class StudentRegistry:
    """Find-or-create registry of students, looked up by exact name."""

    def __init__(self) -> None:
        self._students: List[Student] = []
        self._next_id = 0

    def resolve(self, name: Any) -> int:
        """Return the id of the first student called ``name``, creating one if needed."""
        for student in self._students:
            if same_value(student.name, name):
                return student.id

        student = Student(id=self._next_id, name=name)
        self._students.append(student)
        self._next_id += 1
        logger.debug(f"Created student {student.id} ({name!r})")
        return student.id

    def get(self, student_id: int) -> Optional[Student]:
        for student in self._students:
            if student.id == student_id:
                return student.model_copy(deep=True)
        return None

    def list(self) -> List[Student]:
        return [student.model_copy(deep=True) for student in self._students]


class GroupRegistry:
    """
    Registry of groups whose members are resolved through a StudentRegistry.

    Group ids start at 1 and are never handed out twice, even after the group
    holding them is deleted. Students resolved while creating a group are kept
    when the group itself is rejected as a duplicate. Stored groups are never
    handed out directly; callers always get copies.
    """

    def __init__(self, students: StudentRegistry) -> None:
        self._students = students
        self._groups: List[GroupSummary] = []
        self._last_id = 0

    def create(self, group_name: Any, member_names: Sequence[Any]) -> GroupSummary:
        if not isinstance(member_names, (list, tuple)):
            raise TypeError(
                f"members must be a list of names, got {type(member_names).__name__}"
            )
        member_ids = [self._students.resolve(name) for name in member_names]

        if self._find_duplicate(group_name, member_ids) is not None:
            logger.info(f"Rejected duplicate group {group_name!r} with members {member_ids}")
            raise DuplicateGroupError(group_name)

        self._last_id += 1
        group = GroupSummary(id=self._last_id, groupName=group_name, members=member_ids)
        self._groups.append(group)
        logger.debug(f"Created group {group.id} ({group_name!r}) with members {member_ids}")
        return group.model_copy(deep=True)

    def delete(self, group_id: int) -> None:
        index = self._index_of(group_id)
        if index is None:
            raise GroupNotFoundError(group_id)
        del self._groups[index]
        logger.debug(f"Deleted group {group_id}")

    def get(self, group_id: int) -> Optional[GroupSummary]:
        index = self._index_of(group_id)
        return self._groups[index].model_copy(deep=True) if index is not None else None

    def get_expanded(self, group_id: int) -> Group:
        """Return the group with each member id replaced by its student record."""
        group = self.get(group_id)
        if group is None:
            raise GroupNotFoundError(group_id)
        return Group(
            id=group.id,
            groupName=group.groupName,
            members=[self._students.get(member_id) for member_id in group.members],
        )

    def list(self) -> List[GroupSummary]:
        return [group.model_copy(deep=True) for group in self._groups]

    def _find_duplicate(
        self, group_name: Any, member_ids: Sequence[int]
    ) -> Optional[GroupSummary]:
        # Same name, same length, and every existing member present in the
        # candidate. Multiplicity is not compared.
        for group in self._groups:
            if (
                same_value(group.groupName, group_name)
                and len(group.members) == len(member_ids)
                and all(member_id in member_ids for member_id in group.members)
            ):
                return group
        return None

    def _index_of(self, group_id: int) -> Optional[int]:
        for index, group in enumerate(self._groups):
            if group.id == group_id:
                return index
        return None


class Directory:
    """The student and group registries shared by every request of one app."""

    def __init__(self) -> None:
        self.students = StudentRegistry()
        self.groups = GroupRegistry(self.students)


def seed_sample_data(directory: Directory) -> None:
    for group_name, member_names in SAMPLE_GROUPS:
        directory.groups.create(group_name, member_names)
    logger.info(f"Seeded {len(SAMPLE_GROUPS)} sample groups")
