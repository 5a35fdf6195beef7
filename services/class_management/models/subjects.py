# services/class_management/models/subjects.py
import enum


class Subject(str, enum.Enum):
    HINDI = "hindi"
    ENGLISH = "english"
    MATHEMATICS = "mathematics"
    SCIENCE = "science"
    SOCIAL_SCIENCE = "social_science"
    PHYSICS = "physics"
    CHEMISTRY = "chemistry"
    BIOLOGY = "biology"
    COMPUTER_SCIENCE = "computer_science"
    PHYSICAL_EDUCATION = "physical_education"

    @property
    def display_name(self) -> str:
        return SUBJECT_NAMES[self]


SUBJECT_NAMES = {
    Subject.HINDI: "Hindi",
    Subject.ENGLISH: "English",
    Subject.MATHEMATICS: "Mathematics",
    Subject.SCIENCE: "Science",
    Subject.SOCIAL_SCIENCE: "Social Science",
    Subject.PHYSICS: "Physics",
    Subject.CHEMISTRY: "Chemistry",
    Subject.BIOLOGY: "Biology",
    Subject.COMPUTER_SCIENCE: "Computer Science",
    Subject.PHYSICAL_EDUCATION: "Physical Education",
}
