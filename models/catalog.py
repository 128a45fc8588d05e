"""Catalog: Registry aller Kurse, Lehrkräfte, Sections und Anforderungen.

Die Entitäten referenzieren einander nur über IDs; der Catalog ist der
einzige Eigentümer und pflegt die Rückverweise (Kurs → Sections,
Lehrkraft → Kurse).
"""

from pydantic import BaseModel

from models.course import Course
from models.requirement import Requirement
from models.section import Section
from models.teacher import Teacher


class CatalogError(ValueError):
    """Ungültige Registrierung (unbekannte Referenz oder doppelte ID)."""


class Catalog(BaseModel):
    """Vollständiger Datensatz für einen Scheduling-Lauf."""

    courses: dict[str, Course] = {}
    teachers: dict[str, Teacher] = {}
    sections: list[Section] = []
    requirements: list[Requirement] = []

    # ─── Registrierung ───

    def add_course(self, course: Course) -> Course:
        existing = self.courses.get(course.code)
        if existing is not None:
            if (existing.name, existing.credits) != (course.name, course.credits):
                raise CatalogError(f"Kurs-Code '{course.code}' ist bereits vergeben.")
            return existing
        self.courses[course.code] = course
        return course

    def add_teacher(self, teacher: Teacher) -> Teacher:
        existing = self.teachers.get(teacher.id)
        if existing is not None:
            if existing.name != teacher.name:
                raise CatalogError(f"Lehrer-ID '{teacher.id}' ist bereits vergeben.")
            return existing
        self.teachers[teacher.id] = teacher
        return teacher

    def add_section(self, section: Section) -> Section:
        """Registriert eine Section und pflegt die Rückverweise."""
        course = self.courses.get(section.course_code)
        if course is None:
            raise CatalogError(
                f"Section '{section.id}': unbekannter Kurs '{section.course_code}'."
            )
        teacher = self.teachers.get(section.teacher_id)
        if teacher is None:
            raise CatalogError(
                f"Section '{section.id}': unbekannte Lehrkraft '{section.teacher_id}'."
            )
        existing = self.get_section(section.id)
        if existing is not None:
            if existing != section:
                raise CatalogError(f"Section-ID '{section.id}' ist bereits vergeben.")
            return existing

        self.sections.append(section)
        course.add_section_id(section.id)
        teacher.add_course_code(course.code)
        return section

    def add_requirement(self, requirement: Requirement) -> None:
        """Registriert eine Anforderung; Referenzen müssen bekannt sein."""
        if requirement.kind == "section_timeslot":
            if self.get_section(requirement.section_id) is None:
                raise CatalogError(
                    f"Anforderung verweist auf unbekannte Section '{requirement.section_id}'."
                )
        else:
            if requirement.course_code not in self.courses:
                raise CatalogError(
                    f"Anforderung verweist auf unbekannten Kurs '{requirement.course_code}'."
                )
            if requirement.kind == "course_teacher" and requirement.teacher_id not in self.teachers:
                raise CatalogError(
                    f"Anforderung verweist auf unbekannte Lehrkraft '{requirement.teacher_id}'."
                )
        if requirement not in self.requirements:
            self.requirements.append(requirement)

    def clear(self) -> None:
        self.courses = {}
        self.teachers = {}
        self.sections = []
        self.requirements = []

    # ─── Lookup ───

    def get_course(self, code: str) -> Course:
        try:
            return self.courses[code]
        except KeyError:
            raise CatalogError(f"Unbekannter Kurs: '{code}'") from None

    def get_teacher(self, teacher_id: str) -> Teacher:
        try:
            return self.teachers[teacher_id]
        except KeyError:
            raise CatalogError(f"Unbekannte Lehrkraft: '{teacher_id}'") from None

    def get_section(self, section_id: str):
        return next((s for s in self.sections if s.id == section_id), None)

    def describe_section(self, section: Section) -> str:
        """Kanonische Beschreibung, dient als Blatt-Label im PQ-Baum."""
        teacher = self.teachers.get(section.teacher_id)
        teacher_name = teacher.name if teacher else section.teacher_id
        return f"{section.course_code} ({teacher_name}, {section.time_slot})"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        pinned = sum(1 for r in self.requirements if r.kind == "section_timeslot")
        lines = [
            f"Kurse: {len(self.courses)}",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Sections: {len(self.sections)}",
            f"Anforderungen: {len(self.requirements)} ({pinned} Section-Pins)",
        ]
        return "\n".join(lines)
