from .subjects import Subject, SUBJECT_NAMES
from .students import Student
from .teachers import Teacher
from .classes import SchoolClass, ClassSubject, ClassStudent
