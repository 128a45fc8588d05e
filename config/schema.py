from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.timeslot import parse_clock


# ─── ZEITRASTER ───

class TimeGridConfig(BaseModel):
    """Arbeitstag des Schedulers.

    Jeder Wochentag startet mit einer "Watermark" bei day_start; der
    Zeitvergabe-Algorithmus reiht Sections ab dort lückenlos auf.
    """
    # Beginn des Arbeitstages im Format "HH:MM"
    day_start: str = Field("08:00",
        description="Beginn des Arbeitstages (HH:MM)")
    # Namen der Wochentage (nur Anzeige)
    day_names: list[str] = Field(
        default=["Mo", "Di", "Mi", "Do", "Fr"],
        description="Namen der Wochentage")

    @field_validator("day_start")
    @classmethod
    def validate_day_start(cls, v: str) -> str:
        parse_clock(v)
        return v

    @field_validator("day_names")
    @classmethod
    def validate_day_names(cls, v: list[str]) -> list[str]:
        if len(v) != 5:
            raise ValueError(f"Genau 5 Tagesnamen erwartet, erhalten: {len(v)}")
        return v

    @property
    def day_start_minutes(self) -> int:
        return parse_clock(self.day_start)


# ─── VARIANTEN ───

class VariantRule(BaseModel):
    """Regel für eine Tag/Zeit-Variante einer nicht gepinnten Section.

    Der Tag wird zyklisch um day_shift verschoben (Fr + 1 → Mo);
    start_time=None behält die bisherige Startzeit.
    """
    # Verschiebung des Wochentags (1–4)
    day_shift: int = Field(ge=1, le=4)
    # Neue Startzeit "HH:MM" oder None (= Startzeit beibehalten)
    start_time: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_clock(v)
        return v

    @property
    def start_minutes(self) -> Optional[int]:
        return None if self.start_time is None else parse_clock(self.start_time)


# ─── SUCHE ───

class SearchConfig(BaseModel):
    """Grenzen der kombinatorischen Suche."""
    # Maximale Anzahl Sections pro Lauf
    max_sections: int = Field(60, ge=1, le=500,
        description="Maximale Anzahl Sections pro Lauf")
    # Maximale Anzahl aufgezählter Frontiers
    max_frontiers: int = Field(40320, ge=1,
        description="Maximale Anzahl aufgezählter Anordnungen (8! = 40320)")
    # Varianten-Regeln für nicht gepinnte Sections (höchstens 4)
    variant_rules: list[VariantRule] = Field(
        default_factory=lambda: [
            VariantRule(day_shift=1),
            VariantRule(day_shift=2, start_time="09:00"),
            VariantRule(day_shift=3, start_time="14:00"),
        ],
        description="Tag/Zeit-Varianten für nicht gepinnte Sections")

    @model_validator(mode='after')
    def validate_variant_rules(self):
        if len(self.variant_rules) > 4:
            raise ValueError(
                f"Höchstens 4 Varianten-Regeln erlaubt, erhalten: {len(self.variant_rules)}")
        return self


# ─── GESAMT-CONFIG ───

class EngineConfig(BaseModel):
    """Gesamtkonfiguration des Schedulers."""
    # Arbeitstag und Tagesnamen
    time_grid: TimeGridConfig = Field(default_factory=TimeGridConfig)
    # Such-Grenzen und Varianten
    search: SearchConfig = Field(default_factory=SearchConfig)
