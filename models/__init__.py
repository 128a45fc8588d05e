from models.timeslot import Day, TimeSlot
from models.course import Course
from models.teacher import Teacher
from models.section import Section
from models.schedule import Schedule
from models.requirement import (
    CourseTeacherPin,
    CourseTimeSlotPin,
    Requirement,
    SectionTimeSlotPin,
)
from models.catalog import Catalog, CatalogError

__all__ = [
    "Day",
    "TimeSlot",
    "Course",
    "Teacher",
    "Section",
    "Schedule",
    "Requirement",
    "CourseTimeSlotPin",
    "CourseTeacherPin",
    "SectionTimeSlotPin",
    "Catalog",
    "CatalogError",
]
