import threading

import pytest

from courseportal.models import MAX_LIST_SIZE, Course, Faculty, Student, StudentCourse
from courseportal.resources import (
    COURSES_FILE,
    FACULTIES_FILE,
    STUDENT_COURSES_FILE,
    STUDENTS_FILE,
    DuplicateRecordError,
    RecordFile,
    RecordNotFoundError,
    ResourceError,
    Resources,
)

password = "password"


@pytest.fixture
def resources(tmp_path):
    return Resources(tmp_path / "data")


def test_files_created(tmp_path):
    Resources(tmp_path / "data")
    names = {p.name for p in (tmp_path / "data").iterdir()}
    assert names == {COURSES_FILE, FACULTIES_FILE, STUDENT_COURSES_FILE, STUDENTS_FILE}


def test_add_and_get_student_forces_active(resources):
    resources.add_student(Student("alice", 3.5, password, active=0))
    assert resources.get_student("alice") == Student("alice", 3.5, password, active=1)


def test_duplicate_student(resources):
    resources.add_student(Student("alice", 3.5, password))
    with pytest.raises(DuplicateRecordError) as info:
        resources.add_student(Student("alice", 1.0, password))
    assert info.value.code == 101
    assert str(info.value) == "duplicate record has been found"


def test_missing_student(resources):
    with pytest.raises(RecordNotFoundError) as info:
        resources.get_student("nobody")
    assert info.value.code == 102
    assert str(info.value) == "no such record exist"


def test_update_student(resources):
    resources.add_student(Student("alice", 3.5, password))
    resources.add_student(Student("bob", 2.5, password))
    updated = Student("alice", 1.5, password, active=0)
    resources.update_student(updated)
    assert resources.get_student("alice") == updated
    assert resources.get_student("bob").grade == 2.5


def test_update_missing_student(resources):
    with pytest.raises(RecordNotFoundError):
        resources.update_student(Student("nobody", 1.0, password))


def test_records_persist(tmp_path):
    first = Resources(tmp_path)
    first.add_student(Student("alice", 3.5, password))
    first.add_faculty(Faculty("bob", 100, password))
    second = Resources(tmp_path)
    assert second.get_student("alice").grade == 3.5
    assert second.get_faculty("bob").salary == 100
    with pytest.raises(DuplicateRecordError):
        second.add_student(Student("alice", 2.0, password))


def test_faculty_lifecycle(resources):
    resources.add_faculty(Faculty("bob", 100, password, active=0))
    assert resources.get_faculty("bob").active == 1
    resources.update_faculty(Faculty("bob", 200, password, active=0))
    assert resources.get_faculty("bob") == Faculty("bob", 200, password, active=0)
    with pytest.raises(DuplicateRecordError):
        resources.add_faculty(Faculty("bob", 1, password))
    with pytest.raises(RecordNotFoundError):
        resources.get_faculty("carol")
    with pytest.raises(ResourceError):
        resources.update_faculty(Faculty("carol", 1, password))


def test_student_courses(resources):
    resources.add_student_course(StudentCourse("alice", "algebra", denrolled=1))
    resources.add_student_course(StudentCourse("bob", "algebra"))
    resources.add_student_course(StudentCourse("alice", "physics"))
    assert resources.get_student_courses("alice") == [
        StudentCourse("alice", "algebra"),
        StudentCourse("alice", "physics"),
    ]
    with pytest.raises(DuplicateRecordError):
        resources.add_student_course(StudentCourse("alice", "physics"))


def test_denroll(resources):
    resources.add_student_course(StudentCourse("alice", "algebra"))
    resources.denroll_student_course(StudentCourse("alice", "algebra"))
    assert resources.get_student_courses("alice") == [StudentCourse("alice", "algebra", denrolled=1)]
    with pytest.raises(RecordNotFoundError):
        resources.denroll_student_course(StudentCourse("alice", "physics"))


def test_student_courses_capped(resources):
    for i in range(MAX_LIST_SIZE + 2):
        resources.add_student_course(StudentCourse("alice", f"c{i}"))
    found = resources.get_student_courses("alice")
    assert [sc.course_name for sc in found] == [f"c{i}" for i in range(MAX_LIST_SIZE)]


def test_courses(resources):
    resources.add_course(Course("algebra", "bob", active=0))
    resources.add_course(Course("physics", "carol"))
    resources.add_course(Course("geometry", "bob"))
    assert resources.get_faculty_courses("bob") == [Course("algebra", "bob"), Course("geometry", "bob")]
    resources.remove_course(Course("algebra", "bob"))
    assert resources.get_faculty_courses("bob")[0] == Course("algebra", "bob", active=0)
    with pytest.raises(DuplicateRecordError):
        resources.add_course(Course("physics", "bob"))
    with pytest.raises(RecordNotFoundError):
        resources.remove_course(Course("history", "bob"))


def test_faculty_without_courses(resources):
    assert resources.get_faculty_courses("nobody") == []


def test_record_file_basics(tmp_path):
    records = RecordFile(tmp_path / "courses", Course, lambda c: c.name)
    assert records.find("algebra") is None
    assert records.append(Course("algebra", "bob")) == 0
    assert records.append(Course("physics", "bob")) == 1
    assert records.find("physics") == 1
    assert len(records) == 2
    assert (tmp_path / "courses").stat().st_size == 2 * Course.SIZE
    records.write(0, Course("algebra", "carol"))
    assert records.read(0) == Course("algebra", "carol")
    assert list(records.scan()) == [Course("algebra", "carol"), Course("physics", "bob")]
    with pytest.raises(IndexError):
        records.read(2)


def test_concurrent_adds(resources):
    def add(i):
        resources.add_course(Course(f"c{i}", "bob"))

    threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    names = {c.name for c in resources.courses.scan()}
    assert names == {f"c{i}" for i in range(20)}
    assert all(resources.courses.find(f"c{i}") is not None for i in range(20))