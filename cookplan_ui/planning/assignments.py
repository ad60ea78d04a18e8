from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from cookplan_ui.style.palette import PALETTE, palette_color


@dataclass(frozen=True)
class Person:
    person_id: str
    name: str
    color: str

    def __post_init__(self) -> None:
        if not self.person_id.strip():
            raise ValueError("Person.person_id must be non-empty")
        if not self.name.strip():
            raise ValueError("Person.name must be non-empty")

    @property
    def initial(self) -> str:
        return self.name.strip()[0].upper()


class AssignmentBoard:
    """People roster plus the task -> people relation.

    Empty assignment sets are never stored, so "no entry" and "nobody assigned" read the same.
    """

    def __init__(self, *, palette: tuple[str, ...] = PALETTE) -> None:
        self._palette = palette
        self._people: dict[str, Person] = {}
        self._assignments: dict[str, set[str]] = {}
        self._next_person = 1

    @property
    def people(self) -> tuple[Person, ...]:
        return tuple(self._people.values())

    def person(self, person_id: str) -> Person | None:
        return self._people.get(person_id)

    def add_person(self, name: str, *, color: str | None = None) -> Person | None:
        text = name.strip()
        if not text:
            return None
        person = Person(
            person_id=f"p{self._next_person}",
            name=text,
            color=color or palette_color(self._palette, len(self._people)),
        )
        self._next_person += 1
        self._people[person.person_id] = person
        return person

    def remove_person(self, person_id: str) -> bool:
        if self._people.pop(person_id, None) is None:
            return False
        for task_id in list(self._assignments):
            self._discard(task_id, person_id)
        return True

    def is_assigned(self, task_id: str, person_id: str) -> bool:
        return person_id in self._assignments.get(task_id, ())

    def assigned_people(self, task_id: str) -> tuple[Person, ...]:
        assigned = self._assignments.get(task_id, set())
        return tuple(person for pid, person in self._people.items() if pid in assigned)

    def toggle_task(self, task_id: str, person_id: str) -> bool:
        """Flip one assignment; returns whether the person is assigned afterwards."""
        if person_id not in self._people:
            return False
        if self.is_assigned(task_id, person_id):
            self._discard(task_id, person_id)
            return False
        self._assignments.setdefault(task_id, set()).add(person_id)
        return True

    def toggle_lane(self, task_ids: Iterable[str], person_id: str) -> bool:
        """Unassign from every task only when already on all of them; otherwise fill the gaps."""
        ids = tuple(dict.fromkeys(task_ids))
        if person_id not in self._people or not ids:
            return False
        if all(self.is_assigned(task_id, person_id) for task_id in ids):
            for task_id in ids:
                self._discard(task_id, person_id)
            return False
        for task_id in ids:
            self._assignments.setdefault(task_id, set()).add(person_id)
        return True

    def lane_has_person(self, task_ids: Iterable[str], person_id: str) -> bool:
        return any(self.is_assigned(task_id, person_id) for task_id in task_ids)

    def snapshot(self) -> dict[str, tuple[str, ...]]:
        return {
            task_id: tuple(person.person_id for person in self.assigned_people(task_id))
            for task_id in sorted(self._assignments)
        }

    def _discard(self, task_id: str, person_id: str) -> None:
        current = self._assignments.get(task_id)
        if current is None:
            return
        current.discard(person_id)
        if not current:
            del self._assignments[task_id]


def build_demo_board() -> AssignmentBoard:
    board = AssignmentBoard()
    board.add_person("Tim", color="#FE9B22")
    board.add_person("Tiff", color="#3E9751")
    return board
