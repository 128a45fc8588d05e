"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import BaseModel, field_validator


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    id: str                       # Kürzel, eindeutig über den gesamten Lauf
    name: str                     # "Müller, Hans"
    course_codes: list[str] = []  # Kurse mit mindestens einer Section dieser Lehrkraft

    @field_validator("id")
    @classmethod
    def normalize_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Lehrer-ID darf nicht leer sein.")
        return v

    def add_course_code(self, code: str) -> None:
        if code not in self.course_codes:
            self.course_codes.append(code)

    def remove_course_code(self, code: str) -> None:
        self.course_codes = [c for c in self.course_codes if c != code]
