"""Greedy-Zeitvergabe: macht aus einer Section-Reihenfolge einen Stundenplan.

Ablauf je Anordnung:
  1. Sections mit SectionTimeSlotPin zuerst an ihren Pflicht-Slot setzen
  2. Übrige Sections nach Dauer absteigend sortieren (stabil)
  3. Jede auf den Wochentag mit der kleinsten Watermark legen
     (Gleichstand: früherer Tag gewinnt), Watermark um die Dauer erhöhen
  4. Konflikte (nur durch kollidierende Pins möglich) → leerer Plan

Kein Backtracking: ein verworfener Kandidat wird nicht repariert.
"""

import logging
from typing import Optional, Sequence

from models.requirement import pinned_slot_for
from models.schedule import Schedule
from models.section import Section
from models.timeslot import Day, TimeSlot, format_clock

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


class TimeAllocator:
    """Weist Sections Tag und Startzeit zu (Watermark je Wochentag)."""

    def __init__(self, day_start_minutes: int = 8 * 60) -> None:
        self.day_start_minutes = day_start_minutes
        self.watermarks: dict[Day, int] = {}

    def _reset(self) -> None:
        self.watermarks = {day: self.day_start_minutes for day in Day.weekdays()}

    def _place(self, section: Section, day: Day, start: int) -> Optional[Section]:
        if start >= MINUTES_PER_DAY:
            return None
        slot = TimeSlot(day, duration_minutes=section.duration_minutes).with_start_minutes(start)
        self.watermarks[day] = max(self.watermarks[day], start + section.duration_minutes)
        return section.with_time_slot(slot)

    def allocate(self, sections: Sequence[Section], requirements: Sequence) -> Schedule:
        """Erzeugt einen Kandidaten-Stundenplan für genau diese Reihenfolge.

        Returns:
            Schedule in Eingabe-Reihenfolge, oder einen leeren Schedule wenn
            Pins kollidieren oder ein Tag überläuft.
        """
        self._reset()
        placed: dict[str, Section] = {}

        # Pins mit Startzeit vor Pins mit nur einem Tag
        timed_pins: list[tuple[Section, TimeSlot]] = []
        day_pins: list[tuple[Section, TimeSlot]] = []
        flexible: list[Section] = []
        for section in sections:
            pin = pinned_slot_for(section.id, requirements)
            if pin is None or not pin.has_day:
                flexible.append(section)
            elif pin.has_start:
                timed_pins.append((section, pin))
            else:
                day_pins.append((section, pin))

        for section, pin in timed_pins:
            placed[section.id] = self._place(section, pin.day, pin.start_minutes)
        for section, pin in day_pins:
            result = self._place(section, pin.day, self.watermarks[pin.day])
            if result is None:
                logger.debug(f"Tag {pin.day.short_name} läuft über – Kandidat verworfen")
                return Schedule()
            placed[section.id] = result

        for section in sorted(flexible, key=lambda s: s.duration_minutes, reverse=True):
            day = min(Day.weekdays(), key=lambda d: (self.watermarks[d], int(d)))
            result = self._place(section, day, self.watermarks[day])
            if result is None:
                logger.debug(
                    f"Kein Platz mehr für Section {section.id} "
                    f"(früheste Watermark {format_clock(self.watermarks[day])}) – Kandidat verworfen"
                )
                return Schedule()
            placed[section.id] = result

        schedule = Schedule()
        for section in sections:
            schedule.add_section(placed[section.id])

        if schedule.has_conflicts():
            logger.debug(f"Pin-Konflikte {schedule.conflicts()} – Kandidat verworfen")
            return Schedule()
        return schedule
