"""Record files for students, faculty, courses and enrolments."""

import threading
from dataclasses import replace
from itertools import islice
from pathlib import Path
from typing import Callable, Generic, Iterator, List, Optional, Type, TypeVar

from courseportal.models import MAX_LIST_SIZE, Course, Faculty, Student, StudentCourse

ADMIN_USER = "admin"
ADMIN_PASSWORD = "password"

DEFAULT_DIRECTORY = "resources"
COURSES_FILE = "courses"
FACULTIES_FILE = "faculties"
STUDENT_COURSES_FILE = "student_courses"
STUDENTS_FILE = "students"

R = TypeVar("R")


class ResourceError(Exception):
    """A request on the stored records could not be carried out."""

    code = 0
    default_message = "resource error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class DuplicateRecordError(ResourceError):
    code = 101
    default_message = "duplicate record has been found"


class RecordNotFoundError(ResourceError):
    code = 102
    default_message = "no such record exist"


class RecordFile(Generic[R]):
    """A file of fixed-size records with an in-memory index of their keys."""

    def __init__(self, path, record_type: Type[R], key: Callable[[R], str]) -> None:
        self.path = Path(path)
        self.record_type = record_type
        self._key = key
        self._lock = threading.RLock()
        self.path.touch(exist_ok=True)
        self._keys: List[str] = [key(record) for record in self._load()]

    def _load(self) -> List[R]:
        data = self.path.read_bytes()
        size = self.record_type.SIZE
        complete = len(data) - len(data) % size
        return [self.record_type.unpack(data[offset:offset + size]) for offset in range(0, complete, size)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def find(self, key: str) -> Optional[int]:
        """Return the index of the record with this key, or None."""
        with self._lock:
            try:
                return self._keys.index(key)
            except ValueError:
                return None

    def append(self, record: R) -> int:
        """Store a new record and return its index."""
        key = self._key(record)
        data = record.pack()
        with self._lock:
            if key in self._keys:
                raise DuplicateRecordError()
            with self.path.open("r+b") as handle:
                handle.seek(len(self._keys) * self.record_type.SIZE)
                handle.write(data)
            self._keys.append(key)
            return len(self._keys) - 1

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._keys):
            raise IndexError(f"record index {index} out of range")

    def read(self, index: int) -> R:
        size = self.record_type.SIZE
        with self._lock:
            self._check_index(index)
            with self.path.open("rb") as handle:
                handle.seek(index * size)
                return self.record_type.unpack(handle.read(size))

    def write(self, index: int, record: R) -> None:
        data = record.pack()
        with self._lock:
            self._check_index(index)
            with self.path.open("r+b") as handle:
                handle.seek(index * self.record_type.SIZE)
                handle.write(data)

    def scan(self) -> Iterator[R]:
        """Iterate over a snapshot of every stored record, in file order."""
        with self._lock:
            records = self._load()
        return iter(records)


def _locate(records: RecordFile, key: str) -> int:
    index = records.find(key)
    if index is None:
        raise RecordNotFoundError()
    return index


def _enrolment_key(student_name: str, course_name: str) -> str:
    return f"{student_name}|{course_name}"


class Resources:
    """All record files of the portal, kept in one directory."""

    def __init__(self, directory=DEFAULT_DIRECTORY) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.students = RecordFile(self.directory / STUDENTS_FILE, Student, lambda s: s.name)
        self.faculties = RecordFile(self.directory / FACULTIES_FILE, Faculty, lambda f: f.name)
        self.student_courses = RecordFile(
            self.directory / STUDENT_COURSES_FILE,
            StudentCourse,
            lambda sc: _enrolment_key(sc.student_name, sc.course_name),
        )
        self.courses = RecordFile(self.directory / COURSES_FILE, Course, lambda c: c.name)

    def add_student(self, student: Student) -> None:
        self.students.append(replace(student, active=1))

    def get_student(self, name: str) -> Student:
        return self.students.read(_locate(self.students, name))

    def update_student(self, student: Student) -> None:
        self.students.write(_locate(self.students, student.name), student)

    def add_faculty(self, faculty: Faculty) -> None:
        self.faculties.append(replace(faculty, active=1))

    def get_faculty(self, name: str) -> Faculty:
        return self.faculties.read(_locate(self.faculties, name))

    def update_faculty(self, faculty: Faculty) -> None:
        self.faculties.write(_locate(self.faculties, faculty.name), faculty)

    def add_student_course(self, student_course: StudentCourse) -> None:
        self.student_courses.append(replace(student_course, denrolled=0))

    def get_student_courses(self, student_name: str) -> List[StudentCourse]:
        """Return the first MAX_LIST_SIZE enrolments of a student, denrolled ones included."""
        matches = (sc for sc in self.student_courses.scan() if sc.student_name == student_name)
        return list(islice(matches, MAX_LIST_SIZE))

    def denroll_student_course(self, student_course: StudentCourse) -> None:
        key = _enrolment_key(student_course.student_name, student_course.course_name)
        self.student_courses.write(_locate(self.student_courses, key), replace(student_course, denrolled=1))

    def add_course(self, course: Course) -> None:
        self.courses.append(replace(course, active=1))

    def get_faculty_courses(self, faculty_name: str) -> List[Course]:
        """Return the first MAX_LIST_SIZE courses of a faculty member, removed ones included."""
        matches = (c for c in self.courses.scan() if c.faculty_name == faculty_name)
        return list(islice(matches, MAX_LIST_SIZE))

    def remove_course(self, course: Course) -> None:
        self.courses.write(_locate(self.courses, course.name), replace(course, active=0))