"""Tests für das Datenmodell: TimeSlot, Section, Schedule, Anforderungen, Catalog."""

import pytest
from pydantic import ValidationError

from models.catalog import Catalog, CatalogError
from models.course import Course
from models.requirement import (
    CourseTeacherPin, CourseTimeSlotPin, RequirementSet, SectionTimeSlotPin, pinned_slot_for,
)
from models.schedule import Schedule
from models.section import Section
from models.teacher import Teacher
from models.timeslot import Day, TimeSlot, format_clock, parse_clock


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def make_section(section_id: str, teacher_id: str = "T1", course_code: str = "CS101",
                 day=Day.MONDAY, start: str = "09:00", duration: int = 60) -> Section:
    return Section(
        id=section_id,
        course_code=course_code,
        teacher_id=teacher_id,
        time_slot=TimeSlot.at(day, start, duration),
    )


def make_catalog() -> Catalog:
    catalog = Catalog()
    catalog.add_course(Course(code="CS101", name="Informatik"))
    catalog.add_course(Course(code="MA201", name="Mathematik", credits=2))
    catalog.add_teacher(Teacher(id="T1", name="Müller, Anna"))
    catalog.add_teacher(Teacher(id="T2", name="Schmidt, Hans"))
    return catalog


# ─── TimeSlot ─────────────────────────────────────────────────────────────────

class TestTimeSlot:
    def test_partial_has_no_day_and_start(self):
        """Ein Slot nur mit Dauer ist unvollständig."""
        slot = TimeSlot.partial(90)
        assert slot.day == Day.UNASSIGNED
        assert not slot.has_start
        assert not slot.is_complete
        assert slot.start_minutes is None
        assert str(slot) == "offen (90 min)"

    def test_at_builds_complete_slot(self):
        slot = TimeSlot.at(Day.MONDAY, "09:00", 60)
        assert slot.is_complete
        assert slot.start_minutes == 540
        assert slot.end_minutes == 600
        assert str(slot) == "Mo 09:00-10:00"

    def test_with_day_and_time_return_new_instances(self):
        """with_day/with_time verändern das Original nicht."""
        slot = TimeSlot.partial(60)
        dated = slot.with_day(Day.TUESDAY)
        timed = dated.with_time(14, 30)
        assert slot.day == Day.UNASSIGNED
        assert str(dated) == "Di (60 min)"
        assert str(timed) == "Di 14:30-15:30"

    def test_start_hour_without_minute_invalid(self):
        with pytest.raises(ValueError):
            TimeSlot(Day.MONDAY, 9, None, 60)

    def test_duration_must_be_positive(self):
        with pytest.raises(ValueError):
            TimeSlot(Day.MONDAY, 9, 0, 0)

    def test_hour_out_of_range(self):
        with pytest.raises(ValueError):
            TimeSlot(Day.MONDAY, 24, 0, 60)

    def test_overlap_same_day(self):
        a = TimeSlot.at(Day.MONDAY, "09:00", 60)
        b = TimeSlot.at(Day.MONDAY, "09:30", 60)
        assert a.overlaps(b)
        assert b.overlaps(a)

    def test_touching_slots_do_not_overlap(self):
        """Halboffene Intervalle: 09–10 und 10–11 überschneiden sich nicht."""
        a = TimeSlot.at(Day.MONDAY, "09:00", 60)
        b = TimeSlot.at(Day.MONDAY, "10:00", 60)
        assert not a.overlaps(b)

    def test_different_days_do_not_overlap(self):
        a = TimeSlot.at(Day.MONDAY, "09:00", 60)
        b = TimeSlot.at(Day.TUESDAY, "09:00", 60)
        assert not a.overlaps(b)

    def test_incomplete_slots_never_overlap(self):
        a = TimeSlot.partial(60)
        b = TimeSlot.at(Day.MONDAY, "09:00", 60)
        assert not a.overlaps(b)
        assert not TimeSlot(Day.MONDAY).overlaps(b)

    def test_usable_as_dict_key(self):
        slots = {TimeSlot.at(Day.MONDAY, "09:00"), TimeSlot.at(Day.MONDAY, "09:00")}
        assert len(slots) == 1


class TestDayAndClock:
    @pytest.mark.parametrize("text,expected", [
        ("Mo", Day.MONDAY),
        ("Dienstag", Day.TUESDAY),
        ("wed", Day.WEDNESDAY),
        ("Thursday", Day.THURSDAY),
        ("Fr", Day.FRIDAY),
        ("offen", Day.UNASSIGNED),
        (2, Day.WEDNESDAY),
    ])
    def test_parse(self, text, expected):
        assert Day.parse(text) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Day.parse("Sonntag")

    def test_clock_round_trip(self):
        assert parse_clock("08:05") == 485
        assert format_clock(485) == "08:05"

    @pytest.mark.parametrize("text", ["8", "25:00", "12:60", "ab:cd"])
    def test_parse_clock_invalid(self, text):
        with pytest.raises(ValueError):
            parse_clock(text)


# ─── Section & Schedule ───────────────────────────────────────────────────────

class TestSection:
    def test_with_time_slot_keeps_id(self):
        """Neuer Section-Wert mit gleicher ID, Original unverändert."""
        original = Section(id="A", course_code="CS101", teacher_id="T1",
                           time_slot=TimeSlot.partial(60))
        placed = original.with_time_slot(TimeSlot.at(Day.FRIDAY, "08:00", 60))
        assert placed.id == "A"
        assert placed.time_slot.day == Day.FRIDAY
        assert original.time_slot.day == Day.UNASSIGNED

    def test_key(self):
        s = make_section("A", day=Day.TUESDAY, start="10:00")
        assert s.key() == ("CS101", "T1", Day.TUESDAY, 600)


class TestSchedule:
    def test_no_conflict_for_different_teachers(self):
        """Gleiche Zeit, verschiedene Lehrkräfte → kein Konflikt."""
        schedule = Schedule(sections=[make_section("A", "T1"), make_section("B", "T2")])
        assert not schedule.has_conflicts()

    def test_conflict_same_teacher_overlapping(self):
        schedule = Schedule(sections=[
            make_section("A", "T1", start="09:00"),
            make_section("B", "T1", start="09:30"),
        ])
        assert schedule.has_conflicts()
        assert schedule.conflicts() == [("A", "B")]

    def test_no_conflict_same_teacher_sequential(self):
        schedule = Schedule(sections=[
            make_section("A", "T1", start="09:00"),
            make_section("B", "T1", start="10:00"),
        ])
        assert not schedule.has_conflicts()

    def test_add_section_ignores_duplicate_id(self):
        schedule = Schedule()
        schedule.add_section(make_section("A"))
        schedule.add_section(make_section("A", start="11:00"))
        assert len(schedule) == 1

    def test_remove_and_replace(self):
        schedule = Schedule(sections=[make_section("A"), make_section("B", "T2")])
        moved = schedule.replace_section(make_section("A", start="13:00"))
        assert moved.get_section("A").time_slot.start_minutes == 13 * 60
        assert schedule.get_section("A").time_slot.start_minutes == 9 * 60
        assert schedule.remove_section("B")
        assert not schedule.remove_section("B")
        assert [s.id for s in schedule] == ["A"]

    def test_sections_for_course_and_teacher(self):
        schedule = Schedule(sections=[
            make_section("A", "T1", "CS101"),
            make_section("B", "T2", "MA201"),
            make_section("C", "T1", "MA201", start="11:00"),
        ])
        assert [s.id for s in schedule.get_sections_for_course("MA201")] == ["B", "C"]
        assert [s.id for s in schedule.get_teacher_sections("T1")] == ["A", "C"]

    def test_equivalence_is_order_independent(self):
        a = Schedule(sections=[make_section("A", "T1"), make_section("B", "T2", start="11:00")])
        b = Schedule(sections=[make_section("B", "T2", start="11:00"), make_section("A", "T1")])
        assert a.is_equivalent(b)
        assert a.signature() == b.signature()

    def test_equivalence_detects_different_start(self):
        a = Schedule(sections=[make_section("A", "T1")])
        b = Schedule(sections=[make_section("A", "T1", start="10:00")])
        assert not a.is_equivalent(b)

    def test_equivalence_requires_same_size(self):
        a = Schedule(sections=[make_section("A", "T1")])
        b = Schedule(sections=[make_section("A", "T1"), make_section("B", "T2")])
        assert not a.is_equivalent(b)


# ─── Anforderungen ────────────────────────────────────────────────────────────

class TestRequirements:
    def test_section_pin_satisfied(self):
        pin = SectionTimeSlotPin(section_id="A", time_slot=TimeSlot.at(Day.MONDAY, "09:00"))
        assert pin.is_satisfied(Schedule(sections=[make_section("A")]))

    def test_section_pin_missing_section(self):
        """Fehlt die Section im Plan, ist der Pin nicht erfüllt."""
        pin = SectionTimeSlotPin(section_id="A", time_slot=TimeSlot.at(Day.MONDAY, "09:00"))
        assert not pin.is_satisfied(Schedule(sections=[make_section("B")]))

    def test_section_pin_wrong_time(self):
        pin = SectionTimeSlotPin(section_id="A", time_slot=TimeSlot.at(Day.MONDAY, "09:00"))
        assert not pin.is_satisfied(Schedule(sections=[make_section("A", start="10:00")]))

    def test_section_pin_day_only_matches_any_time(self):
        pin = SectionTimeSlotPin(section_id="A", time_slot=TimeSlot(Day.MONDAY))
        assert pin.is_satisfied(Schedule(sections=[make_section("A", start="15:00")]))
        assert not pin.is_satisfied(Schedule(sections=[make_section("A", day=Day.FRIDAY)]))

    def test_section_pin_without_day_matches_any_day(self):
        pin = SectionTimeSlotPin(section_id="A", time_slot=TimeSlot.partial(60))
        assert pin.is_satisfied(Schedule(sections=[make_section("A", day=Day.THURSDAY)]))

    def test_course_timeslot_pin(self):
        pin = CourseTimeSlotPin(course_code="CS101", time_slot=TimeSlot(Day.TUESDAY))
        assert pin.is_satisfied(Schedule(sections=[
            make_section("A", day=Day.MONDAY), make_section("B", "T2", day=Day.TUESDAY),
        ]))
        assert not pin.is_satisfied(Schedule(sections=[make_section("A", day=Day.MONDAY)]))

    def test_course_teacher_pin(self):
        pin = CourseTeacherPin(course_code="CS101", teacher_id="T2")
        assert pin.is_satisfied(Schedule(sections=[make_section("A", "T2")]))
        assert not pin.is_satisfied(Schedule(sections=[make_section("A", "T1")]))
        assert not pin.is_satisfied(Schedule(sections=[make_section("A", "T2", "MA201")]))

    def test_descriptions(self):
        pin = SectionTimeSlotPin(section_id="A", time_slot=TimeSlot.at(Day.MONDAY, "09:00"))
        assert pin.get_description() == "Section A muss im Zeitslot Mo 09:00-10:00 liegen"
        teacher_pin = CourseTeacherPin(course_code="CS101", teacher_id="T2")
        assert "CS101" in teacher_pin.description and "T2" in teacher_pin.description

    def test_discriminated_union_from_dict(self):
        """Varianten werden über das Feld `kind` validiert."""
        rs = RequirementSet.model_validate({"requirements": [
            {"kind": "course_teacher", "course_code": "CS101", "teacher_id": "T1"},
            {"kind": "section_timeslot", "section_id": "A",
             "time_slot": {"day": 0, "start_hour": 9, "start_minute": 0, "duration_minutes": 60}},
        ]})
        assert isinstance(rs.requirements[0], CourseTeacherPin)
        assert isinstance(rs.requirements[1], SectionTimeSlotPin)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            RequirementSet.model_validate({"requirements": [{"kind": "room", "course_code": "X"}]})

    def test_pinned_slot_for(self):
        slot = TimeSlot.at(Day.MONDAY, "09:00")
        reqs = [
            CourseTeacherPin(course_code="CS101", teacher_id="T1"),
            SectionTimeSlotPin(section_id="A", time_slot=slot),
        ]
        assert pinned_slot_for("A", reqs) == slot
        assert pinned_slot_for("B", reqs) is None


# ─── Catalog ──────────────────────────────────────────────────────────────────

class TestCatalog:
    def test_add_section_maintains_back_links(self):
        catalog = make_catalog()
        catalog.add_section(Section(id="A", course_code="CS101", teacher_id="T1",
                                    time_slot=TimeSlot.partial(60)))
        assert catalog.get_course("CS101").section_ids == ["A"]
        assert catalog.get_teacher("T1").course_codes == ["CS101"]

    def test_unknown_course_rejected(self):
        catalog = make_catalog()
        with pytest.raises(CatalogError):
            catalog.add_section(Section(id="A", course_code="XX", teacher_id="T1",
                                        time_slot=TimeSlot.partial(60)))

    def test_unknown_teacher_rejected(self):
        catalog = make_catalog()
        with pytest.raises(CatalogError):
            catalog.add_section(Section(id="A", course_code="CS101", teacher_id="T9",
                                        time_slot=TimeSlot.partial(60)))

    def test_identical_registration_ignored(self):
        catalog = make_catalog()
        catalog.add_course(Course(code="CS101", name="Informatik"))
        assert len(catalog.courses) == 2

    def test_conflicting_duplicate_rejected(self):
        catalog = make_catalog()
        with pytest.raises(CatalogError):
            catalog.add_teacher(Teacher(id="T1", name="Jemand anderes"))
        catalog.add_section(make_section("A"))
        with pytest.raises(CatalogError):
            catalog.add_section(make_section("A", start="11:00"))

    def test_requirement_references_checked(self):
        catalog = make_catalog()
        with pytest.raises(CatalogError):
            catalog.add_requirement(SectionTimeSlotPin(
                section_id="A", time_slot=TimeSlot.at(Day.MONDAY, "09:00")))
        with pytest.raises(CatalogError):
            catalog.add_requirement(CourseTeacherPin(course_code="CS101", teacher_id="T9"))
        catalog.add_requirement(CourseTeacherPin(course_code="CS101", teacher_id="T1"))
        catalog.add_requirement(CourseTeacherPin(course_code="CS101", teacher_id="T1"))
        assert len(catalog.requirements) == 1

    def test_describe_section(self):
        """Kanonisches Label: '<Kurs> (<Lehrername>, <Zeitslot>)'."""
        catalog = make_catalog()
        section = make_section("A")
        assert catalog.describe_section(section) == "CS101 (Müller, Anna, Mo 09:00-10:00)"

    def test_clear(self):
        catalog = make_catalog()
        catalog.add_section(make_section("A"))
        catalog.clear()
        assert not catalog.courses and not catalog.sections
        assert "Sections: 0" in catalog.summary()
