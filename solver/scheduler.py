"""Scheduling-Engine: PQ-Baum → Anordnungen → Zeitvergabe → Auswahl.

Architektur:
  - Registry (Catalog) mit Kursen, Lehrkräften, Sections, Anforderungen
  - Ein Q-Knoten über alle Sections, sortiert nach bekannter Zeit
  - Jede Frontier wird auf Sections zurückgeführt und per TimeAllocator
    in einen Kandidaten-Stundenplan übersetzt
  - Konfliktfreie Kandidaten werden dedupliziert und um Tag/Zeit-Varianten
    für nicht gepinnte Sections ergänzt
  - Gewählt wird der erste Kandidat, der alle Anforderungen erfüllt,
    sonst der erste gültige Kandidat
"""

import logging
import threading
import time
from collections import deque
from typing import Optional, Sequence

from pydantic import BaseModel

from config.defaults import default_engine_config
from config.schema import EngineConfig
from models.catalog import Catalog
from models.course import Course
from models.requirement import Requirement, pinned_slot_for
from models.schedule import Schedule
from models.section import Section
from models.teacher import Teacher
from models.timeslot import Day
from solver.allocation import TimeAllocator
from solver.pq_tree import PQTree

logger = logging.getLogger(__name__)


# ─── Lauf-Statistik ───────────────────────────────────────────────────────────

class RunStats(BaseModel):
    """Kennzahlen des letzten generate_schedule()-Laufs."""

    num_sections: int = 0
    frontiers: int = 0
    dropped_frontiers: int = 0     # Labels ohne passende Section
    discarded_candidates: int = 0  # leer oder mit Konflikten
    duplicate_candidates: int = 0
    base_candidates: int = 0
    variant_candidates: int = 0
    over_limit: bool = False       # mehr Sections als max_sections
    satisfied: bool = False
    solve_time_seconds: float = 0.0

    @property
    def total_candidates(self) -> int:
        return self.base_candidates + self.variant_candidates


# ─── Engine ───────────────────────────────────────────────────────────────────

class SchedulingEngine:
    """Erzeugt konfliktfreie Stundenpläne aus den registrierten Daten.

    Verwendung:
        engine = SchedulingEngine()
        engine.add_course(Course(code="CS101", name="Informatik"))
        ...
        found = engine.generate_schedule()
        plan = engine.get_current_schedule()

    Ein Lauf ist atomar: Registrierungen warten, bis generate_schedule()
    fertig ist (ein Lock für die gesamte Engine).
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        catalog: Optional[Catalog] = None,
    ) -> None:
        self.config = config or default_engine_config()
        self.catalog = catalog or Catalog()
        self._lock = threading.RLock()

        self._current: Optional[Schedule] = None
        self._candidates: list[Schedule] = []
        self.last_run = RunStats()

    # ─── Registrierung ────────────────────────────────────────────────────────

    def add_course(self, course: Course) -> Course:
        with self._lock:
            return self.catalog.add_course(course)

    def add_teacher(self, teacher: Teacher) -> Teacher:
        with self._lock:
            return self.catalog.add_teacher(teacher)

    def add_section(self, section: Section) -> Section:
        with self._lock:
            return self.catalog.add_section(section)

    def add_requirement(self, requirement: Requirement) -> None:
        with self._lock:
            self.catalog.add_requirement(requirement)

    def clear(self) -> None:
        """Entfernt alle Daten und Ergebnisse."""
        with self._lock:
            self.catalog.clear()
            self._current = None
            self._candidates = []
            self.last_run = RunStats()

    def get_courses(self) -> list[Course]:
        return list(self.catalog.courses.values())

    def get_teachers(self) -> list[Teacher]:
        return list(self.catalog.teachers.values())

    def get_sections(self) -> list[Section]:
        return list(self.catalog.sections)

    def get_requirements(self) -> list:
        return list(self.catalog.requirements)

    # ─── Ergebnisse ───────────────────────────────────────────────────────────

    def get_current_schedule(self) -> Optional[Schedule]:
        """Bester gefundener Plan (ggf. ohne alle Anforderungen zu erfüllen)."""
        return self._current

    def get_all_possible_schedules(self) -> list[Schedule]:
        """Deduplizierter Kandidaten-Pool des letzten Laufs."""
        return list(self._candidates)

    # ─── PQ-Baum ──────────────────────────────────────────────────────────────

    def build_schedule_tree(self) -> PQTree:
        """Q-Knoten über alle Sections in zeitlicher Reihenfolge."""
        with self._lock:
            return PQTree.build_time_ordered_tree(
                self.catalog.sections, self.catalog.describe_section,
            )

    def build_course_tree(self) -> PQTree:
        """Gruppierter Baum: je Kurs ein P-Knoten mit einem Q-Knoten seiner Section-IDs."""
        with self._lock:
            groups = {
                code: list(course.section_ids)
                for code, course in self.catalog.courses.items()
            }
            return PQTree.build_grouped_tree(groups)

    # ─── Haupt-Lauf ───────────────────────────────────────────────────────────

    def generate_schedule(self) -> bool:
        """Erzeugt den Kandidaten-Pool und wählt einen Plan.

        Returns:
            True wenn ein Plan alle Anforderungen erfüllt. Mehr Sections als
            search.max_sections ergeben einen leeren Pool (last_run.over_limit).
        """
        with self._lock:
            t0 = time.time()
            self._current = None
            self._candidates = []
            stats = RunStats(num_sections=len(self.catalog.sections))
            self.last_run = stats

            search = self.config.search
            if stats.num_sections > search.max_sections:
                stats.over_limit = True
                stats.solve_time_seconds = time.time() - t0
                logger.warning(
                    f"{stats.num_sections} Sections überschreiten max_sections="
                    f"{search.max_sections} – kein Lauf. Grenze in der Konfiguration anheben."
                )
                return False

            requirements = list(self.catalog.requirements)
            allocator = TimeAllocator(self.config.time_grid.day_start_minutes)
            signatures: set[frozenset] = set()
            bases: list[Schedule] = []

            tree = PQTree.build_time_ordered_tree(
                self.catalog.sections, self.catalog.describe_section,
            )
            frontiers = tree.get_frontiers(limit=search.max_frontiers)
            stats.frontiers = len(frontiers)
            labels = self._sections_by_label()

            for frontier in frontiers:
                ordered = self._map_frontier(frontier, labels)
                if ordered is None:
                    stats.dropped_frontiers += 1
                    continue
                candidate = allocator.allocate(ordered, requirements)
                if candidate.is_empty():
                    stats.discarded_candidates += 1
                    continue
                if self._accept(candidate, bases, signatures):
                    stats.base_candidates += 1
                else:
                    stats.duplicate_candidates += 1

            if stats.dropped_frontiers:
                logger.warning(
                    f"{stats.dropped_frontiers} Anordnung(en) verworfen: "
                    f"Labels ohne passende Section"
                )

            variants: list[Schedule] = []
            for base in bases:
                for variant in self._generate_variants(base, requirements):
                    if variant.has_conflicts():
                        stats.discarded_candidates += 1
                    elif self._accept(variant, variants, signatures):
                        stats.variant_candidates += 1
                    else:
                        stats.duplicate_candidates += 1

            self._candidates = bases + variants
            stats.satisfied = self._select(requirements)
            stats.solve_time_seconds = time.time() - t0

            logger.info(
                f"Scheduler beendet: {stats.total_candidates} Kandidaten "
                f"({stats.base_candidates} Basis, {stats.variant_candidates} Varianten) | "
                f"Anforderungen erfüllt: {'ja' if stats.satisfied else 'nein'} | "
                f"Zeit: {stats.solve_time_seconds:.3f}s"
            )
            return stats.satisfied

    # ─── Hilfsfunktionen ──────────────────────────────────────────────────────

    def _sections_by_label(self) -> dict[str, list[Section]]:
        labels: dict[str, list[Section]] = {}
        for section in self.catalog.sections:
            labels.setdefault(self.catalog.describe_section(section), []).append(section)
        return labels

    @staticmethod
    def _map_frontier(
        frontier: Sequence[str], labels: dict[str, list[Section]],
    ) -> Optional[list[Section]]:
        """Label → Section; gleiche Labels verbrauchen verschiedene Sections."""
        pools = {label: deque(sections) for label, sections in labels.items()}
        ordered: list[Section] = []
        for label in frontier:
            pool = pools.get(label)
            if not pool:
                return None
            ordered.append(pool.popleft())
        return ordered

    @staticmethod
    def _accept(
        candidate: Schedule, target: list[Schedule], signatures: set[frozenset],
    ) -> bool:
        signature = candidate.signature()
        if signature in signatures:
            return False
        signatures.add(signature)
        target.append(candidate)
        return True

    def _generate_variants(
        self, base: Schedule, requirements: Sequence,
    ) -> list[Schedule]:
        """Bis zu len(variant_rules) Tag/Zeit-Alternativen je nicht gepinnter Section."""
        weekdays = Day.weekdays()
        variants: list[Schedule] = []
        for section in base.sections:
            if pinned_slot_for(section.id, requirements) is not None:
                continue
            slot = section.time_slot
            for rule in self.config.search.variant_rules:
                day = weekdays[(int(slot.day) + rule.day_shift) % len(weekdays)]
                start = rule.start_minutes
                if start is None:
                    start = slot.start_minutes
                moved = slot.with_day(day).with_start_minutes(start)
                variants.append(base.replace_section(section.with_time_slot(moved)))
        return variants

    def _select(self, requirements: Sequence) -> bool:
        """Erster Kandidat, der alle Anforderungen erfüllt; sonst der erste."""
        for candidate in self._candidates:
            if all(req.is_satisfied(candidate) for req in requirements):
                self._current = candidate
                return True
        if self._candidates:
            self._current = self._candidates[0]
            unmet = [r.description for r in requirements if not r.is_satisfied(self._current)]
            logger.info(f"Kein Plan erfüllt alle Anforderungen – Fallback, offen: {unmet}")
        return False
