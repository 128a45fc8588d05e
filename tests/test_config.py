"""Tests für Konfiguration (Schema, Manager) und YAML-Datensatz-Import."""

import pytest
from pydantic import ValidationError

from config.defaults import default_engine_config
from config.manager import ConfigManager
from config.schema import EngineConfig, SearchConfig, TimeGridConfig, VariantRule
from data.yaml_import import DatasetImportError, import_dataset
from models.catalog import Catalog
from models.timeslot import Day


# ─── Schema ───────────────────────────────────────────────────────────────────

class TestSchema:
    def test_defaults(self):
        config = default_engine_config()
        assert config.time_grid.day_start_minutes == 480
        assert config.search.max_sections == 60
        assert config.search.max_frontiers == 40320
        assert [(r.day_shift, r.start_time) for r in config.search.variant_rules] == [
            (1, None), (2, "09:00"), (3, "14:00"),
        ]

    def test_plain_model_matches_defaults(self):
        assert EngineConfig() == default_engine_config()

    def test_invalid_day_start(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(day_start="25:00")

    def test_day_names_need_five_entries(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(day_names=["Mo", "Di"])

    def test_variant_rule_day_shift_range(self):
        with pytest.raises(ValidationError):
            VariantRule(day_shift=0)
        with pytest.raises(ValidationError):
            VariantRule(day_shift=5)

    def test_variant_rule_start_minutes(self):
        assert VariantRule(day_shift=2, start_time="09:30").start_minutes == 570
        assert VariantRule(day_shift=1).start_minutes is None

    def test_at_most_four_variant_rules(self):
        with pytest.raises(ValidationError):
            SearchConfig(variant_rules=[VariantRule(day_shift=1)] * 5)

    def test_max_sections_bounds(self):
        with pytest.raises(ValidationError):
            SearchConfig(max_sections=0)


# ─── ConfigManager ────────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_round_trip(self, tmp_path):
        """Gespeicherte Config wird unverändert wieder geladen."""
        path = tmp_path / "engine.yaml"
        config = default_engine_config()
        config.time_grid.day_start = "07:30"
        config.search.max_sections = 20

        mgr = ConfigManager(path)
        assert mgr.save(config) == path
        assert mgr.exists()
        assert mgr.load() == config

    def test_saved_file_has_comments(self, tmp_path):
        path = tmp_path / "engine.yaml"
        ConfigManager(path).save(default_engine_config())
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Arbeitstag ───" in text
        assert "─── Suche ───" in text

    def test_missing_file(self, tmp_path):
        mgr = ConfigManager(tmp_path / "fehlt.yaml")
        assert not mgr.exists()
        with pytest.raises(FileNotFoundError):
            mgr.load()
        assert mgr.load_or_default() == default_engine_config()

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("search:\n  max_sections: -3\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("time_grid:\n  day_start: '09:00'\n", encoding="utf-8")
        config = ConfigManager(path).load()
        assert config.time_grid.day_start_minutes == 540
        assert config.search == default_engine_config().search


# ─── YAML-Import ──────────────────────────────────────────────────────────────

DATASET = """\
courses:
  - {code: CS101, name: Informatik, credits: 1}
  - {code: MA201, name: Mathematik, credits: 2}
teachers:
  - {id: MUE, name: "Müller, Anna"}
  - {id: SCH, name: "Schmidt, Hans"}
sections:
  - {id: A, course: CS101, teacher: MUE}
  - {id: B, course: MA201, teacher: SCH, day: Di, start: "10:00", duration: 90}
requirements:
  - {type: section_timeslot, section: A, day: Mo, start: "09:00"}
  - {type: course_teacher, course: MA201, teacher: SCH}
  - {type: course_timeslot, course: CS101, day: Fr, weight: 0.5}
"""


def write(tmp_path, text: str):
    path = tmp_path / "datensatz.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestYamlImport:
    def test_import_counts(self, tmp_path):
        catalog, report = import_dataset(write(tmp_path, DATASET))
        assert report.courses_imported == 2
        assert report.teachers_imported == 2
        assert report.sections_imported == 2
        assert report.requirements_imported == 3
        assert report.warnings == []
        assert catalog.get_teacher("MUE").course_codes == ["CS101"]

    def test_slots_and_default_duration(self, tmp_path):
        catalog, _ = import_dataset(write(tmp_path, DATASET))
        a = catalog.get_section("A")
        assert a.time_slot.day == Day.UNASSIGNED
        assert a.duration_minutes == 60
        assert str(catalog.get_section("B").time_slot) == "Di 10:00-11:30"

    def test_duration_from_credits(self, tmp_path):
        text = DATASET.replace("duration: 90", "duration: null").replace(
            '{id: A, course: CS101, teacher: MUE}', '{id: A, course: MA201, teacher: MUE}')
        catalog, _ = import_dataset(write(tmp_path, text))
        assert catalog.get_section("A").duration_minutes == 120

    def test_requirement_kinds(self, tmp_path):
        catalog, _ = import_dataset(write(tmp_path, DATASET))
        kinds = [r.kind for r in catalog.requirements]
        assert kinds == ["section_timeslot", "course_teacher", "course_timeslot"]
        assert catalog.requirements[2].weight == 0.5

    def test_errors_are_collected(self, tmp_path):
        """Alle fehlerhaften Einträge werden gemeinsam gemeldet."""
        text = DATASET + "  - {type: room, course: CS101}\n"
        text = text.replace("teacher: SCH, day: Di", "teacher: XXX, day: Di")
        with pytest.raises(DatasetImportError) as exc_info:
            import_dataset(write(tmp_path, text))
        errors = exc_info.value.errors
        assert any(e.startswith("Section #2") for e in errors)
        assert any(e.startswith("Anforderung #4") for e in errors)

    def test_yaml_syntax_error(self, tmp_path):
        with pytest.raises(DatasetImportError):
            import_dataset(write(tmp_path, "courses: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(DatasetImportError):
            import_dataset(write(tmp_path, "- a\n- b\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            import_dataset(tmp_path / "fehlt.yaml")

    def test_no_sections_warns(self, tmp_path):
        catalog, report = import_dataset(write(tmp_path, "courses: []\n"))
        assert not catalog.sections
        assert report.warnings

    def test_into_existing_catalog(self, tmp_path):
        catalog = Catalog()
        result, _ = import_dataset(write(tmp_path, DATASET), catalog)
        assert result is catalog
        assert len(catalog.sections) == 2
