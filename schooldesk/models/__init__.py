from schooldesk.models.grade import Grade
from schooldesk.models.school_class import SchoolClass
from schooldesk.models.teacher import Teacher
from schooldesk.models.subject import Subject
from schooldesk.models.lesson import Lesson
from schooldesk.models.student import Student
from schooldesk.models.announcement import Announcement
from schooldesk.models.event import Event
from schooldesk.models.report import Report
from schooldesk.models.exam import Exam
from schooldesk.models.assignment import Assignment
from schooldesk.models.result import Result
