"""Anforderungen an einen Stundenplan (Pins).

Drei Varianten, unterschieden über das Feld `kind`:
  - course_timeslot:  eine Section des Kurses liegt im geforderten Slot
  - course_teacher:   eine Section des Kurses wird von der Lehrkraft gehalten
  - section_timeslot: genau diese Section liegt im geforderten Slot

Der Scheduler behandelt section_timeslot zusätzlich als harte Vorgabe
bei der Zeitvergabe (siehe solver/allocation.py).
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from models.schedule import Schedule
from models.timeslot import TimeSlot


def _slot_matches(actual: TimeSlot, required: TimeSlot) -> bool:
    """Tag muss passen (falls gefordert), Startzeit nur wenn gefordert."""
    if required.has_day and actual.day != required.day:
        return False
    if required.has_start and actual.start_minutes != required.start_minutes:
        return False
    return True


class CourseTimeSlotPin(BaseModel):
    """Kurs muss (mit mindestens einer Section) im Slot liegen."""

    kind: Literal["course_timeslot"] = "course_timeslot"
    course_code: str
    time_slot: TimeSlot
    weight: float = 1.0

    def is_satisfied(self, schedule: Schedule) -> bool:
        return any(
            _slot_matches(s.time_slot, self.time_slot)
            for s in schedule.get_sections_for_course(self.course_code)
        )

    @property
    def description(self) -> str:
        return f"Kurs {self.course_code} muss im Zeitslot {self.time_slot} liegen"

    def get_description(self) -> str:
        return self.description


class CourseTeacherPin(BaseModel):
    """Kurs muss von der Lehrkraft gehalten werden."""

    kind: Literal["course_teacher"] = "course_teacher"
    course_code: str
    teacher_id: str
    weight: float = 1.0

    def is_satisfied(self, schedule: Schedule) -> bool:
        return any(
            s.teacher_id == self.teacher_id
            for s in schedule.get_sections_for_course(self.course_code)
        )

    @property
    def description(self) -> str:
        return f"Kurs {self.course_code} muss von {self.teacher_id} gehalten werden"

    def get_description(self) -> str:
        return self.description


class SectionTimeSlotPin(BaseModel):
    """Section (per ID) muss exakt im Slot liegen. Tag ohne Zeit = ganzer Tag."""

    kind: Literal["section_timeslot"] = "section_timeslot"
    section_id: str
    time_slot: TimeSlot
    weight: float = 1.0

    def is_satisfied(self, schedule: Schedule) -> bool:
        section = schedule.get_section(self.section_id)
        if section is None:
            return False
        return _slot_matches(section.time_slot, self.time_slot)

    @property
    def description(self) -> str:
        return f"Section {self.section_id} muss im Zeitslot {self.time_slot} liegen"

    def get_description(self) -> str:
        return self.description


Requirement = Annotated[
    Union[CourseTimeSlotPin, CourseTeacherPin, SectionTimeSlotPin],
    Field(discriminator="kind"),
]


class RequirementSet(BaseModel):
    """Hülle für Validierung/Serialisierung einer Anforderungsliste."""

    requirements: list[Requirement] = []


def pinned_slot_for(section_id: str, requirements: list) -> Optional[TimeSlot]:
    """Slot des ersten SectionTimeSlotPin für diese Section (sonst None)."""
    for req in requirements:
        if req.kind == "section_timeslot" and req.section_id == section_id:
            return req.time_slot
    return None
