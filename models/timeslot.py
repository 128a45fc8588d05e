"""Datenmodell für einen Zeitslot im Wochenraster."""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional


class Day(IntEnum):
    """Wochentag. UNASSIGNED = noch nicht eingeplant (sortiert hinter Freitag)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    UNASSIGNED = 5

    @property
    def short_name(self) -> str:
        """Abgekürzter Tagesname ("Mo".."Fr", "offen")."""
        return DAY_NAMES[self.value] if self.value < len(DAY_NAMES) else "offen"

    @classmethod
    def weekdays(cls) -> tuple["Day", ...]:
        """Alle planbaren Wochentage Mo–Fr."""
        return (cls.MONDAY, cls.TUESDAY, cls.WEDNESDAY, cls.THURSDAY, cls.FRIDAY)

    @classmethod
    def parse(cls, value) -> "Day":
        """Akzeptiert Day, int (0–5), Kurzname ("Mo") oder englischen Namen."""
        if isinstance(value, Day):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if text in DAY_NAMES:
            return cls(DAY_NAMES.index(text))
        if text.lower() in ("offen", "unassigned", ""):
            return cls.UNASSIGNED
        lowered = text.lower()
        if lowered[:2] in _DAY_MAP:
            return cls(_DAY_MAP[lowered[:2]])
        for day in cls.weekdays():
            if len(lowered) >= 3 and day.name.lower().startswith(lowered):
                return day
        raise ValueError(f"Unbekannter Wochentag: {value!r}")


DAY_NAMES = ["Mo", "Di", "Mi", "Do", "Fr"]

# Präfix → Tag ("Montag", "Mon", "Dienstag", "Fr", ...)
_DAY_MAP = {"mo": 0, "di": 1, "mi": 2, "do": 3, "fr": 4}


def parse_clock(text: str) -> int:
    """'HH:MM' → Minuten seit Mitternacht."""
    try:
        hh, mm = text.strip().split(":")
        hour, minute = int(hh), int(mm)
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Ungültige Uhrzeit (erwartet HH:MM): {text!r}") from e
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Uhrzeit außerhalb des Bereichs: {text!r}")
    return hour * 60 + minute


def format_clock(minutes: int) -> str:
    """Minuten seit Mitternacht → 'HH:MM'."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class TimeSlot:
    """Tag + optionale Startzeit + Dauer einer Section.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    Startstunde und Startminute sind entweder beide gesetzt oder beide None.
    """

    day: Day = Day.UNASSIGNED
    start_hour: Optional[int] = None
    start_minute: Optional[int] = None
    duration_minutes: int = 60

    def __post_init__(self) -> None:
        object.__setattr__(self, "day", Day.parse(self.day))
        if (self.start_hour is None) != (self.start_minute is None):
            raise ValueError("start_hour und start_minute müssen gemeinsam gesetzt sein.")
        if self.start_hour is not None:
            if not 0 <= self.start_hour <= 23:
                raise ValueError(f"start_hour außerhalb 0–23: {self.start_hour}")
            if not 0 <= self.start_minute <= 59:
                raise ValueError(f"start_minute außerhalb 0–59: {self.start_minute}")
        if self.duration_minutes <= 0:
            raise ValueError(f"duration_minutes muss > 0 sein: {self.duration_minutes}")

    @classmethod
    def partial(cls, duration_minutes: int) -> "TimeSlot":
        """Nur Dauer bekannt, Tag und Zeit werden vom Scheduler ergänzt."""
        return cls(duration_minutes=duration_minutes)

    @classmethod
    def at(cls, day, start: str, duration_minutes: int = 60) -> "TimeSlot":
        """Kurzform: TimeSlot.at(Day.MONDAY, "09:00", 60)."""
        minutes = parse_clock(start)
        return cls(Day.parse(day), minutes // 60, minutes % 60, duration_minutes)

    # ─── Abfragen ───

    @property
    def has_day(self) -> bool:
        return self.day != Day.UNASSIGNED

    @property
    def has_start(self) -> bool:
        return self.start_hour is not None

    @property
    def is_complete(self) -> bool:
        """True wenn Tag und Startzeit feststehen."""
        return self.has_day and self.has_start

    @property
    def start_minutes(self) -> Optional[int]:
        """Beginn in Minuten seit Mitternacht (None ohne Startzeit)."""
        if not self.has_start:
            return None
        return self.start_hour * 60 + self.start_minute

    @property
    def end_minutes(self) -> Optional[int]:
        start = self.start_minutes
        return None if start is None else start + self.duration_minutes

    # ─── Abgeleitete Slots ───

    def with_day(self, day) -> "TimeSlot":
        return replace(self, day=Day.parse(day))

    def with_time(self, hour: int, minute: int) -> "TimeSlot":
        return replace(self, start_hour=hour, start_minute=minute)

    def with_start_minutes(self, minutes: int) -> "TimeSlot":
        return self.with_time(minutes // 60, minutes % 60)

    def overlaps(self, other: "TimeSlot") -> bool:
        """Überschneidung nur bei gleichem Tag und vollständigen Slots (halboffen)."""
        if not (self.is_complete and other.is_complete):
            return False
        if self.day != other.day:
            return False
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes

    def __str__(self) -> str:
        if not self.has_start:
            return f"{self.day.short_name} ({self.duration_minutes} min)"
        return (
            f"{self.day.short_name} "
            f"{format_clock(self.start_minutes)}-{format_clock(self.end_minutes)}"
        )
