"""Validierung eines fertigen Stundenplans.

Prüft den Plan unabhängig von der Engine als Sicherheitsnetz: Doppelbuchungen,
unvollständige Slots, unbekannte Referenzen, fehlende Sections und offene
Anforderungen.
"""

from collections import Counter
from typing import Literal

from pydantic import BaseModel

from models.catalog import Catalog
from models.schedule import Schedule


class ValidationViolation(BaseModel):
    """Eine einzelne Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "teacher_double_booking"
    description: str
    entity: str          # section_id / teacher_id / course_code


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Plan-Validierung", border_style="cyan"))

        if not self.violations:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=26)
        table.add_column("Entität", width=12)
        table.add_column("Beschreibung")
        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleValidator:
    """Prüft einen Schedule gegen den Catalog."""

    def validate(self, schedule: Schedule, catalog: Catalog) -> ValidationReport:
        violations: list[ValidationViolation] = []

        violations.extend(self._check_references(schedule, catalog))
        violations.extend(self._check_incomplete_slots(schedule))
        violations.extend(self._check_teacher_double_booking(schedule))
        violations.extend(self._check_missing_sections(schedule, catalog))
        violations.extend(self._check_requirements(schedule, catalog))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_references(
        self, schedule: Schedule, catalog: Catalog
    ) -> list[ValidationViolation]:
        violations: list[ValidationViolation] = []
        for section in schedule:
            if catalog.get_section(section.id) is None:
                violations.append(ValidationViolation(
                    severity="error", constraint="unknown_section", entity=section.id,
                    description=f"Section {section.id} ist nicht registriert.",
                ))
            if section.course_code not in catalog.courses:
                violations.append(ValidationViolation(
                    severity="error", constraint="unknown_course", entity=section.id,
                    description=f"Unbekannter Kurs '{section.course_code}'.",
                ))
            if section.teacher_id not in catalog.teachers:
                violations.append(ValidationViolation(
                    severity="error", constraint="unknown_teacher", entity=section.id,
                    description=f"Unbekannte Lehrkraft '{section.teacher_id}'.",
                ))
        counts = Counter(s.id for s in schedule)
        for section_id, n in counts.items():
            if n > 1:
                violations.append(ValidationViolation(
                    severity="error", constraint="duplicate_section", entity=section_id,
                    description=f"Section {section_id} ist {n}x im Plan.",
                ))
        return violations

    def _check_incomplete_slots(self, schedule: Schedule) -> list[ValidationViolation]:
        return [
            ValidationViolation(
                severity="error", constraint="incomplete_timeslot", entity=s.id,
                description=f"Section {s.id} hat keinen vollständigen Zeitslot ({s.time_slot}).",
            )
            for s in schedule if not s.time_slot.is_complete
        ]

    def _check_teacher_double_booking(
        self, schedule: Schedule
    ) -> list[ValidationViolation]:
        """Keine Lehrkraft darf zur selben Zeit zwei Sections halten."""
        violations: list[ValidationViolation] = []
        for a_id, b_id in schedule.conflicts():
            a = schedule.get_section(a_id)
            b = schedule.get_section(b_id)
            violations.append(ValidationViolation(
                severity="error",
                constraint="teacher_double_booking",
                entity=a.teacher_id,
                description=(
                    f"{a_id} ({a.time_slot}) überschneidet sich mit "
                    f"{b_id} ({b.time_slot})"
                ),
            ))
        return violations

    def _check_missing_sections(
        self, schedule: Schedule, catalog: Catalog
    ) -> list[ValidationViolation]:
        planned = {s.id for s in schedule}
        return [
            ValidationViolation(
                severity="warning", constraint="missing_section", entity=s.id,
                description=f"Section {s.id} ({s.course_code}) fehlt im Plan.",
            )
            for s in catalog.sections if s.id not in planned
        ]

    def _check_requirements(
        self, schedule: Schedule, catalog: Catalog
    ) -> list[ValidationViolation]:
        violations: list[ValidationViolation] = []
        for req in catalog.requirements:
            if req.is_satisfied(schedule):
                continue
            entity = req.section_id if req.kind == "section_timeslot" else req.course_code
            violations.append(ValidationViolation(
                severity="warning", constraint=f"requirement_{req.kind}",
                entity=entity, description=req.description,
            ))
        return violations
