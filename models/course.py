"""Datenmodell für einen Kurs (Pydantic v2)."""

from pydantic import BaseModel, field_validator


class Course(BaseModel):
    """Ein Kurs, z.B. "CS101". Sections hängen über ihre ID am Kurs."""

    code: str                    # "CS101"
    name: str                    # "Einführung in die Informatik"
    credits: int = 1             # Dauer-Hinweis: 1 Credit = 60 Minuten
    section_ids: list[str] = []  # Rückverweise, gepflegt vom Catalog

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Kurs-Code darf nicht leer sein.")
        return v

    @property
    def default_duration_minutes(self) -> int:
        """Standarddauer einer Section dieses Kurses."""
        return max(self.credits, 1) * 60

    def add_section_id(self, section_id: str) -> None:
        if section_id not in self.section_ids:
            self.section_ids.append(section_id)

    def remove_section_id(self, section_id: str) -> None:
        self.section_ids = [s for s in self.section_ids if s != section_id]
