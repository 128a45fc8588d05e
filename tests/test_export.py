"""Tests für die tabellarische Plan-Aufbereitung."""

from export.tui_renderer import render_teacher_rows, render_week_rows
from models.catalog import Catalog
from models.course import Course
from models.schedule import Schedule
from models.section import Section
from models.teacher import Teacher
from models.timeslot import Day, TimeSlot


def make_data() -> tuple[Schedule, Catalog]:
    catalog = Catalog()
    catalog.add_course(Course(code="CS101", name="Informatik"))
    catalog.add_teacher(Teacher(id="T1", name="Müller, Anna"))
    catalog.add_teacher(Teacher(id="T2", name="Schmidt, Hans"))
    schedule = Schedule(sections=[
        Section(id="B", course_code="CS101", teacher_id="T2",
                time_slot=TimeSlot.at(Day.TUESDAY, "08:00")),
        Section(id="A", course_code="CS101", teacher_id="T1",
                time_slot=TimeSlot.at(Day.MONDAY, "09:00")),
    ])
    return schedule, catalog


class TestRenderWeekRows:
    def test_rows_sorted_by_day_and_time(self):
        schedule, catalog = make_data()
        assert render_week_rows(schedule, catalog) == [
            ["Mo", "09:00–10:00", "CS101", "Müller, Anna", "A"],
            ["Di", "08:00–09:00", "CS101", "Schmidt, Hans", "B"],
        ]

    def test_custom_day_names(self):
        schedule, catalog = make_data()
        names = ["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag"]
        rows = render_week_rows(schedule, catalog, names)
        assert [row[0] for row in rows] == ["Montag", "Dienstag"]

    def test_unplaced_section(self):
        _, catalog = make_data()
        schedule = Schedule(sections=[
            Section(id="C", course_code="CS101", teacher_id="T9", time_slot=TimeSlot.partial(45)),
        ])
        assert render_week_rows(schedule, catalog) == [
            ["offen", "(45 min)", "CS101", "T9", "C"],
        ]


class TestRenderTeacherRows:
    def test_grouped_by_teacher(self):
        schedule, catalog = make_data()
        grouped = render_teacher_rows(schedule, catalog)
        assert list(grouped) == ["T1", "T2"]
        assert grouped["T1"] == [["Mo", "09:00–10:00", "CS101", "A"]]

    def test_empty_schedule(self):
        _, catalog = make_data()
        assert render_teacher_rows(Schedule(), catalog) == {}
