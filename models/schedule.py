"""Ein Stundenplan-Kandidat: geordnete Sections mit vollständigen Zeitslots."""

from collections import Counter
from typing import Iterator, Optional

from pydantic import BaseModel

from models.section import Section


class Schedule(BaseModel):
    """Geordnete Menge von Sections (je ID höchstens einmal).

    Gültig ist ein Stundenplan, wenn keine Lehrkraft zwei überlappende
    Sections hat (has_conflicts() == False).
    """

    sections: list[Section] = []

    # ─── Aufbau ───

    def add_section(self, section: Section) -> None:
        """Fügt eine Section hinzu; eine bereits enthaltene ID wird ignoriert."""
        if self.get_section(section.id) is None:
            self.sections.append(section)

    def remove_section(self, section_id: str) -> bool:
        before = len(self.sections)
        self.sections = [s for s in self.sections if s.id != section_id]
        return len(self.sections) < before

    def replace_section(self, section: Section) -> "Schedule":
        """Kopie dieses Plans, in der die Section mit gleicher ID ersetzt ist."""
        return Schedule(sections=[
            section if s.id == section.id else s for s in self.sections
        ])

    # ─── Abfragen ───

    def get_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def get_sections_for_course(self, course_code: str) -> list[Section]:
        return [s for s in self.sections if s.course_code == course_code]

    def get_teacher_sections(self, teacher_id: str) -> list[Section]:
        return [s for s in self.sections if s.teacher_id == teacher_id]

    def is_empty(self) -> bool:
        return not self.sections

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    # ─── Konflikte & Äquivalenz ───

    def conflicts(self) -> list[tuple[str, str]]:
        """Alle Paare (ID, ID) mit gleicher Lehrkraft und überlappender Zeit."""
        pairs: list[tuple[str, str]] = []
        for i, a in enumerate(self.sections):
            for b in self.sections[i + 1:]:
                if a.overlaps(b):
                    pairs.append((a.id, b.id))
        return pairs

    def has_conflicts(self) -> bool:
        for i, a in enumerate(self.sections):
            for b in self.sections[i + 1:]:
                if a.overlaps(b):
                    return True
        return False

    def signature(self) -> frozenset:
        """Reihenfolgeunabhängige Multimenge der Section-Schlüssel."""
        return frozenset(Counter(s.key() for s in self.sections).items())

    def is_equivalent(self, other: "Schedule") -> bool:
        """Gleiche Anzahl und gleiche (Kurs, Lehrkraft, Tag, Start) je Section."""
        return len(self) == len(other) and self.signature() == other.signature()
