import struct

import pytest

from courseportal.models import (
    LIST_RECORD_SIZE,
    LIST_SIZE,
    MAX_LIST_SIZE,
    NAME_SIZE,
    Course,
    Faculty,
    Student,
    StudentCourse,
    pack_list,
    unpack_list,
)

password = "password"


def test_student_round_trip():
    student = Student("alice", 3.5, password, active=0)
    assert Student.unpack(student.pack()) == student


def test_faculty_round_trip():
    faculty = Faculty("bob", 50000, password)
    assert Faculty.unpack(faculty.pack()) == faculty


def test_course_round_trip():
    course = Course("algebra", "bob", active=0)
    assert Course.unpack(course.pack()) == course


def test_student_course_round_trip():
    enrolment = StudentCourse("alice", "algebra", denrolled=1)
    assert StudentCourse.unpack(enrolment.pack()) == enrolment


def test_record_sizes_follow_struct_layout():
    assert len(Student("alice", 2.0, password).pack()) == 72
    assert len(Faculty("bob", 10, password).pack()) == 72
    assert len(Course("algebra", "bob").pack()) == 64
    assert len(StudentCourse("alice", "algebra").pack()) == 64
    assert LIST_RECORD_SIZE == 64


def test_packed_length_matches_size():
    assert len(Student("a", 1.0, password).pack()) == Student.SIZE
    assert len(Faculty("a", 1, password).pack()) == Faculty.SIZE


def test_name_is_nul_padded():
    packed = Course("algebra", "bob").pack()
    assert packed[:7] == b"algebra"
    assert set(packed[7:NAME_SIZE]) == {0}


def test_faculty_salary_offset():
    packed = Faculty("bob", 1234, password).pack()
    assert struct.unpack_from("<i", packed, 32)[0] == 1234


def test_name_too_long_rejected():
    with pytest.raises(ValueError):
        Student("x" * NAME_SIZE, 1.0, password).pack()


def test_longest_name_accepted():
    name = "y" * (NAME_SIZE - 1)
    assert Course.unpack(Course(name, "bob").pack()).name == name


def test_short_data_rejected():
    with pytest.raises(ValueError):
        Student.unpack(b"\0" * (Student.SIZE - 1))


def test_unpack_accepts_longer_buffer():
    course = Course("algebra", "bob")
    assert Course.unpack(course.pack() + b"\xff" * 10) == course


def test_list_round_trip():
    courses = [Course("algebra", "bob"), Course("physics", "bob", active=0)]
    data = pack_list(courses)
    assert len(data) == LIST_SIZE
    assert unpack_list(Course, data) == courses


def test_empty_list_round_trip():
    assert unpack_list(StudentCourse, pack_list([])) == []


def test_full_list_round_trip():
    enrolments = [StudentCourse("alice", f"c{i}") for i in range(MAX_LIST_SIZE)]
    assert unpack_list(StudentCourse, pack_list(enrolments)) == enrolments


def test_list_too_long_rejected():
    with pytest.raises(ValueError):
        pack_list([Course(f"c{i}", "bob") for i in range(MAX_LIST_SIZE + 1)])


def test_list_wrong_record_type_rejected():
    with pytest.raises(TypeError):
        pack_list([Student("alice", 1.0, password)])


def test_unpack_list_invalid_count():
    data = bytes(MAX_LIST_SIZE * LIST_RECORD_SIZE) + struct.pack("<i", MAX_LIST_SIZE + 1)
    with pytest.raises(ValueError):
        unpack_list(Course, data)