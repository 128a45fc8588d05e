"""Gemeinsamer Renderer für die Terminal-Anzeige eines Stundenplans.

Liefert nur Tabellenzeilen; die Ausgabe übernimmt main.py (Rich).
"""

from typing import TYPE_CHECKING, Optional

from models.timeslot import format_clock

if TYPE_CHECKING:
    from models.catalog import Catalog
    from models.schedule import Schedule
    from models.section import Section


def _sort_key(section: "Section") -> tuple[int, int]:
    start = section.time_slot.start_minutes
    return (int(section.time_slot.day), -1 if start is None else start)


def _time_label(section: "Section") -> str:
    slot = section.time_slot
    if not slot.has_start:
        return f"({slot.duration_minutes} min)"
    return f"{format_clock(slot.start_minutes)}–{format_clock(slot.end_minutes)}"


def render_week_rows(
    schedule: "Schedule",
    catalog: "Catalog",
    day_names: Optional[list[str]] = None,
) -> list[list[str]]:
    """Tabellenzeilen nach Tag und Startzeit sortiert.

    Jede Zeile: [Tag, Zeit, Kurs, Lehrkraft, Section]
    """
    names = day_names or ["Mo", "Di", "Mi", "Do", "Fr"]
    rows: list[list[str]] = []
    for section in sorted(schedule.sections, key=_sort_key):
        day = section.time_slot.day
        day_label = names[int(day)] if int(day) < len(names) else day.short_name
        teacher = catalog.teachers.get(section.teacher_id)
        rows.append([
            day_label,
            _time_label(section),
            section.course_code,
            teacher.name if teacher else section.teacher_id,
            section.id,
        ])
    return rows


def render_teacher_rows(
    schedule: "Schedule",
    catalog: "Catalog",
) -> dict[str, list[list[str]]]:
    """Zeilen je Lehrkraft (Lehrer-ID → [Tag, Zeit, Kurs, Section])."""
    grouped: dict[str, list[list[str]]] = {}
    for teacher_id in sorted({s.teacher_id for s in schedule}):
        grouped[teacher_id] = [
            [s.time_slot.day.short_name, _time_label(s), s.course_code, s.id]
            for s in sorted(schedule.get_teacher_sections(teacher_id), key=_sort_key)
        ]
    return grouped
