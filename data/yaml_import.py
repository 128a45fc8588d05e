"""YAML-Import eines Datensatzes (Kurse, Lehrkräfte, Sections, Anforderungen).

Format:

    courses:
      - {code: CS101, name: Informatik, credits: 1}
    teachers:
      - {id: MUE, name: "Müller, Anna"}
    sections:
      - {id: A, course: CS101, teacher: MUE, duration: 60, day: Mo, start: "09:00"}
    requirements:
      - {type: section_timeslot, section: A, day: Mo, start: "09:00"}
      - {type: course_teacher, course: CS101, teacher: MUE}
      - {type: course_timeslot, course: CS101, day: Di, weight: 2}

`day`/`start`/`duration` sind optional; ohne `duration` gilt credits × 60.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from models.catalog import Catalog, CatalogError
from models.course import Course
from models.requirement import CourseTeacherPin, CourseTimeSlotPin, SectionTimeSlotPin
from models.section import Section
from models.teacher import Teacher
from models.timeslot import Day, TimeSlot, parse_clock


class DatasetImportError(Exception):
    """Fehler beim Datensatz-Import (enthält alle gesammelten Probleme)."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(f"• {e}" for e in self.errors))


class ImportReport(BaseModel):
    """Bericht über den YAML-Import."""
    warnings: list[str] = []
    courses_imported: int = 0
    teachers_imported: int = 0
    sections_imported: int = 0
    requirements_imported: int = 0

    def print_rich(self) -> None:
        from rich.console import Console
        from rich.panel import Panel
        console = Console()
        lines = [f"[green]Kurse: {self.courses_imported}[/green]  "
                 f"[green]Lehrkräfte: {self.teachers_imported}[/green]  "
                 f"[green]Sections: {self.sections_imported}[/green]  "
                 f"[green]Anforderungen: {self.requirements_imported}[/green]"]
        if self.warnings:
            lines.append("\n[yellow]Warnungen:[/yellow]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        console.print(Panel("\n".join(lines), title="Datensatz-Import", border_style="cyan"))


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _parse_slot(entry: dict, duration: int) -> TimeSlot:
    """day/start aus einem Eintrag → TimeSlot (fehlende Angaben bleiben offen)."""
    day = Day.parse(entry["day"]) if entry.get("day") is not None else Day.UNASSIGNED
    slot = TimeSlot(day, duration_minutes=duration)
    start = entry.get("start")
    if start is not None:
        slot = slot.with_start_minutes(parse_clock(str(start)))
    return slot


def _build_requirement(entry: dict):
    kind = entry.get("type")
    weight = float(entry.get("weight", 1.0))
    if kind == "section_timeslot":
        return SectionTimeSlotPin(
            section_id=str(entry["section"]),
            time_slot=_parse_slot(entry, int(entry.get("duration", 60))),
            weight=weight,
        )
    if kind == "course_timeslot":
        return CourseTimeSlotPin(
            course_code=str(entry["course"]),
            time_slot=_parse_slot(entry, int(entry.get("duration", 60))),
            weight=weight,
        )
    if kind == "course_teacher":
        return CourseTeacherPin(
            course_code=str(entry["course"]),
            teacher_id=str(entry["teacher"]),
            weight=weight,
        )
    raise ValueError(f"Unbekannter Anforderungstyp: {kind!r}")


# ─── Import ───────────────────────────────────────────────────────────────────

def import_dataset(path: Path, catalog: Optional[Catalog] = None) -> tuple[Catalog, ImportReport]:
    """Liest einen YAML-Datensatz in einen (neuen oder gegebenen) Catalog.

    Raises:
        FileNotFoundError: Datei fehlt
        DatasetImportError: Syntax- oder Referenzfehler (alle gesammelt)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Datensatz nicht gefunden: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = YAML(typ="safe").load(f) or {}
    except YAMLError as e:
        raise DatasetImportError([f"YAML-Syntaxfehler: {e}"]) from e
    if not isinstance(raw, dict):
        raise DatasetImportError(["Datensatz muss ein Mapping mit courses/teachers/sections sein."])

    catalog = catalog if catalog is not None else Catalog()
    report = ImportReport()
    errors: list[str] = []

    for i, entry in enumerate(raw.get("courses") or [], start=1):
        try:
            catalog.add_course(Course(
                code=str(entry["code"]),
                name=str(entry.get("name", entry["code"])),
                credits=int(entry.get("credits", 1)),
            ))
            report.courses_imported += 1
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            errors.append(f"Kurs #{i}: {e}")

    for i, entry in enumerate(raw.get("teachers") or [], start=1):
        try:
            catalog.add_teacher(Teacher(id=str(entry["id"]), name=str(entry.get("name", entry["id"]))))
            report.teachers_imported += 1
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            errors.append(f"Lehrkraft #{i}: {e}")

    for i, entry in enumerate(raw.get("sections") or [], start=1):
        try:
            course_code = str(entry["course"])
            duration = entry.get("duration")
            if duration is None:
                course = catalog.courses.get(course_code)
                duration = course.default_duration_minutes if course else 60
            catalog.add_section(Section(
                id=str(entry["id"]),
                course_code=course_code,
                teacher_id=str(entry["teacher"]),
                time_slot=_parse_slot(entry, int(duration)),
            ))
            report.sections_imported += 1
        except (KeyError, TypeError, ValueError, ValidationError, CatalogError) as e:
            errors.append(f"Section #{i}: {e}")

    for i, entry in enumerate(raw.get("requirements") or [], start=1):
        try:
            catalog.add_requirement(_build_requirement(entry))
            report.requirements_imported += 1
        except (KeyError, TypeError, ValueError, ValidationError, CatalogError) as e:
            errors.append(f"Anforderung #{i}: {e}")

    if errors:
        raise DatasetImportError(errors)
    if not catalog.sections:
        report.warnings.append("Keine Sections im Datensatz – es wird kein Plan entstehen.")
    return catalog, report
