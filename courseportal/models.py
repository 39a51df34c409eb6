"""Records kept by the portal and their fixed-size binary layout."""

import struct
from dataclasses import dataclass
from typing import ClassVar, Iterable, List, Type, TypeVar

NAME_SIZE = 30
MAX_LIST_SIZE = 10
LIST_RECORD_SIZE = 64

_COUNT = struct.Struct("<i")

R = TypeVar("R")


def _encode_name(value: str, field: str) -> bytes:
    data = value.encode("utf-8")
    if len(data) >= NAME_SIZE:
        raise ValueError(f"{field} must be shorter than {NAME_SIZE} bytes")
    if b"\0" in data:
        raise ValueError(f"{field} must not contain NUL characters")
    return data


def _decode_name(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", "replace")


def _unpack(layout: struct.Struct, data: bytes) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"expected at least {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(data)


@dataclass
class Student:
    """A student account with its grade."""

    name: str
    grade: float
    password: str
    active: int = 1

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<30s2xf30s2xi")
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            _encode_name(self.name, "name"),
            self.grade,
            _encode_name(self.password, "password"),
            self.active,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Student":
        name, grade, password, active = _unpack(cls._LAYOUT, data)
        return cls(_decode_name(name), grade, _decode_name(password), active)


@dataclass
class Faculty:
    """A faculty account with its salary."""

    name: str
    salary: int
    password: str
    active: int = 1

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<30s2xi30s2xi")
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            _encode_name(self.name, "name"),
            self.salary,
            _encode_name(self.password, "password"),
            self.active,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Faculty":
        name, salary, password, active = _unpack(cls._LAYOUT, data)
        return cls(_decode_name(name), salary, _decode_name(password), active)


@dataclass
class Course:
    """A course offered by one faculty member."""

    name: str
    faculty_name: str
    active: int = 1

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<30s30si")
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            _encode_name(self.name, "name"),
            _encode_name(self.faculty_name, "faculty_name"),
            self.active,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Course":
        name, faculty_name, active = _unpack(cls._LAYOUT, data)
        return cls(_decode_name(name), _decode_name(faculty_name), active)


@dataclass
class StudentCourse:
    """The enrolment of a student in a course."""

    student_name: str
    course_name: str
    denrolled: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<30s30si")
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            _encode_name(self.student_name, "student_name"),
            _encode_name(self.course_name, "course_name"),
            self.denrolled,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "StudentCourse":
        student_name, course_name, denrolled = _unpack(cls._LAYOUT, data)
        return cls(_decode_name(student_name), _decode_name(course_name), denrolled)


LIST_SIZE = MAX_LIST_SIZE * LIST_RECORD_SIZE + _COUNT.size


def pack_list(records: Iterable) -> bytes:
    """Pack up to MAX_LIST_SIZE courses or enrolments followed by their count."""
    records = list(records)
    if len(records) > MAX_LIST_SIZE:
        raise ValueError(f"at most {MAX_LIST_SIZE} records fit in a list")
    for record in records:
        if record.SIZE != LIST_RECORD_SIZE:
            raise TypeError(f"{type(record).__name__} records cannot be sent as a list")
    body = b"".join(record.pack() for record in records)
    return body.ljust(MAX_LIST_SIZE * LIST_RECORD_SIZE, b"\0") + _COUNT.pack(len(records))


def unpack_list(record_type: Type[R], data: bytes) -> List[R]:
    """Unpack a list written by pack_list."""
    if record_type.SIZE != LIST_RECORD_SIZE:
        raise TypeError(f"{record_type.__name__} records cannot be read as a list")
    if len(data) < LIST_SIZE:
        raise ValueError(f"expected at least {LIST_SIZE} bytes, got {len(data)}")
    (count,) = _COUNT.unpack_from(data, MAX_LIST_SIZE * LIST_RECORD_SIZE)
    if not 0 <= count <= MAX_LIST_SIZE:
        raise ValueError(f"invalid record count {count}")
    size = LIST_RECORD_SIZE
    return [record_type.unpack(data[offset:offset + size]) for offset in range(0, count * size, size)]