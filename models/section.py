"""Datenmodell für eine Section (eine konkrete Veranstaltung eines Kurses)."""

from typing import Optional

from pydantic import BaseModel

from models.timeslot import Day, TimeSlot


class Section(BaseModel):
    """Eine Section referenziert Kurs und Lehrkraft nur über deren IDs.

    Der TimeSlot ist austauschbar: beim Anlegen oft nur mit Dauer, der
    Scheduler erzeugt daraus neue Section-Werte mit vollständigem Slot.
    """

    id: str
    course_code: str
    teacher_id: str
    time_slot: TimeSlot

    @property
    def duration_minutes(self) -> int:
        return self.time_slot.duration_minutes

    def with_time_slot(self, time_slot: TimeSlot) -> "Section":
        """Neue Section mit gleicher ID und anderem Zeitslot."""
        return self.model_copy(update={"time_slot": time_slot})

    def key(self) -> tuple[str, str, Day, Optional[int]]:
        """Vergleichsschlüssel für Stundenplan-Äquivalenz."""
        return (
            self.course_code,
            self.teacher_id,
            self.time_slot.day,
            self.time_slot.start_minutes,
        )

    def overlaps(self, other: "Section") -> bool:
        """Konflikt: gleiche Lehrkraft und überlappende Zeit."""
        return self.teacher_id == other.teacher_id and self.time_slot.overlaps(other.time_slot)
