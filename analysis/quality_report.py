"""Qualitätsbericht für einen Stundenplan.

Gewichteter Erfüllungsgrad der Anforderungen und Tagesauslastung.
"""

from collections import defaultdict
from typing import Optional, Sequence

from pydantic import BaseModel

from models.schedule import Schedule
from models.timeslot import Day, format_clock


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class RequirementStatus(BaseModel):
    """Erfüllung einer einzelnen Anforderung."""

    description: str
    kind: str
    weight: float
    satisfied: bool


class DayLoad(BaseModel):
    """Belegung eines Wochentags."""

    day: str
    sections: int
    minutes: int
    latest_end: Optional[str] = None  # "HH:MM"


class ScheduleQualityReport(BaseModel):
    """Qualitätsbericht für einen Schedule."""

    requirement_score: float        # 0.0–1.0, gewichtet
    requirements: list[RequirementStatus]
    day_loads: list[DayLoad]
    load_spread_minutes: int        # max − min Minuten über Mo–Fr

    @property
    def all_satisfied(self) -> bool:
        return all(r.satisfied for r in self.requirements)


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class QualityAnalyzer:
    """Berechnet Qualitätsmetriken für einen Schedule."""

    def analyze(
        self, schedule: Schedule, requirements: Sequence
    ) -> ScheduleQualityReport:
        statuses = [
            RequirementStatus(
                description=req.description,
                kind=req.kind,
                weight=req.weight,
                satisfied=req.is_satisfied(schedule),
            )
            for req in requirements
        ]
        day_loads = self._day_loads(schedule)
        minutes = [d.minutes for d in day_loads]

        return ScheduleQualityReport(
            requirement_score=round(self._score(statuses), 4),
            requirements=statuses,
            day_loads=day_loads,
            load_spread_minutes=max(minutes) - min(minutes),
        )

    @staticmethod
    def _score(statuses: list[RequirementStatus]) -> float:
        """Σ Gewicht erfüllt / Σ Gewicht; 1.0 ohne Anforderungen."""
        total = sum(s.weight for s in statuses)
        if total <= 0:
            return 1.0
        return sum(s.weight for s in statuses if s.satisfied) / total

    @staticmethod
    def _day_loads(schedule: Schedule) -> list[DayLoad]:
        count: dict[Day, int] = defaultdict(int)
        minutes: dict[Day, int] = defaultdict(int)
        latest: dict[Day, int] = {}
        for section in schedule:
            slot = section.time_slot
            if not slot.is_complete:
                continue
            count[slot.day] += 1
            minutes[slot.day] += slot.duration_minutes
            latest[slot.day] = max(latest.get(slot.day, 0), slot.end_minutes)

        return [
            DayLoad(
                day=day.short_name,
                sections=count[day],
                minutes=minutes[day],
                latest_end=format_clock(latest[day]) if day in latest else None,
            )
            for day in Day.weekdays()
        ]

    def print_rich(self, report: ScheduleQualityReport) -> None:
        """Gibt den Qualitätsbericht formatiert über Rich aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        console.print(
            f"[bold]Erfüllungsgrad:[/bold] {report.requirement_score:.0%}  |  "
            f"Tages-Spreizung: {report.load_spread_minutes} min"
        )

        if report.requirements:
            table = Table(title="Anforderungen", box=box.ROUNDED)
            table.add_column("Status", width=6)
            table.add_column("Gewicht", justify="right")
            table.add_column("Beschreibung")
            for r in report.requirements:
                mark = "[green]✓[/green]" if r.satisfied else "[red]✗[/red]"
                table.add_row(mark, f"{r.weight:g}", r.description)
            console.print(table)

        table = Table(title="Tagesauslastung", box=box.ROUNDED)
        table.add_column("Tag")
        table.add_column("Sections", justify="right")
        table.add_column("Minuten", justify="right")
        table.add_column("Ende")
        for d in report.day_loads:
            table.add_row(d.day, str(d.sections), str(d.minutes), d.latest_end or "—")
        console.print(table)
