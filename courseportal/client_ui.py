"""Console prompts and displays used by the portal client."""

from dataclasses import replace
from typing import Iterable

from courseportal.models import NAME_SIZE, Course, Faculty, Student, StudentCourse
from courseportal.protocol import AuthToken, ReqKind, Role

_RULE = "---------------------------"

_ADMIN_MENU = [
    (ReqKind.ADD_STUDENT, "Add a new student (ADD_STUDENT)"),
    (ReqKind.UPDATE_STUDENT, "Update a student's details (UPDATE_STUDENT)"),
    (ReqKind.DISPLAY_STUDENT, "Display a student's details (DISPLAY_STUDENT)"),
    (ReqKind.ADD_FACULTY, "Add a new faculty (ADD_FACULTY)"),
    (ReqKind.UPDATE_FACULTY, "Update a faculty's details (UPDATE_FACULTY)"),
    (ReqKind.DISPLAY_FACULTY, "Display a faculty's details (DISPLAY_FACULTY)"),
    (ReqKind.ADD_STUDENT_COURSE, "Add a student-course association (ADD_STUDENT_COURSE)"),
    (ReqKind.GET_STUDENT_COURSE, "Get all courses for a student (GET_STUDENT_COURSE)"),
    (ReqKind.DENROLL_STUDENT_COURSE, "Denroll a student from a course (DENROLL_STUDENT_COURSE)"),
    (ReqKind.ADD_COURSE, "Add a new course (ADD_COURSE)"),
    (ReqKind.GET_FACULTY_COURSE, "Get all courses taught by a faculty (GET_FACULTY_COURSE)"),
    (ReqKind.REMOVE_COURSE, "Remove a course (REMOVE_COURSE)"),
    (ReqKind.LOGOUT, "Logout (LOGOUT)"),
]

_STUDENT_MENU = [
    (ReqKind.UPDATE_STUDENT, "Update a student's details (UPDATE_STUDENT)"),
    (ReqKind.DISPLAY_STUDENT, "Display a student's details (DISPLAY_STUDENT)"),
    (ReqKind.ADD_STUDENT_COURSE, "Add a student-course association (ADD_STUDENT_COURSE)"),
    (ReqKind.GET_STUDENT_COURSE, "Get all courses for a student (GET_STUDENT_COURSE)"),
    (ReqKind.DENROLL_STUDENT_COURSE, "Denroll a student from a course (DENROLL_STUDENT_COURSE)"),
    (ReqKind.LOGOUT, "Logout (LOGOUT)"),
]

_FACULTY_MENU = [
    (ReqKind.UPDATE_FACULTY, "Update a faculty's details (UPDATE_FACULTY)"),
    (ReqKind.DISPLAY_FACULTY, "Display a faculty's details (DISPLAY_FACULTY)"),
    (ReqKind.ADD_COURSE, "Add a new course (ADD_COURSE)"),
    (ReqKind.GET_FACULTY_COURSE, "Get all courses taught by a faculty (GET_FACULTY_COURSE)"),
    (ReqKind.REMOVE_COURSE, "Remove a course (REMOVE_COURSE)"),
    (ReqKind.LOGOUT, "Logout (LOGOUT)"),
]


def _truncate(text: str) -> str:
    """Cut text so that it fits a name field, keeping room for the terminator."""
    return text.encode("utf-8")[:NAME_SIZE - 1].decode("utf-8", "ignore")


def _read_name(prompt: str) -> str:
    return _truncate(input(prompt))


def _read_int(prompt: str) -> int:
    return int(input(prompt).strip())


def _read_float(prompt: str) -> float:
    return float(input(prompt).strip())


def get_user_credentials(role: Role) -> AuthToken:
    """Ask for a user name and password and return them as a token for role."""
    user_name = _read_name("Enter username(type admin as username for ADMIN): ")
    entered = _read_name("Enter password: ")
    return AuthToken(role, user_name, entered)


def display_help_menu(role: Role) -> None:
    """Print the actions available to role."""
    if role == Role.STUDENT:
        entries = _STUDENT_MENU
    elif role == Role.FACULTY:
        entries = _FACULTY_MENU
    else:
        entries = _ADMIN_MENU
    print("\n--- Help Menu ---")
    print("Enter the corresponding number for the desired action:")
    for kind, description in entries:
        print(f"{int(kind)}. {description}")
    print(_RULE)


def get_user_request() -> int:
    """Read the number of the action the user chose."""
    print("Enter your choice")
    return _read_int("")


def prompt_student() -> Student:
    """Ask for the details of a new student."""
    name = _read_name("Enter student name: ")
    entered = _read_name("Enter student password: ")
    grade = _read_float("Enter student grade: ")
    return Student(name, grade, entered, 1)


def display_student(student: Student) -> None:
    print("\n--- Student Information ---")
    print(f"Name: {student.name}")
    print(f"Grade: {student.grade:.2f}")
    print(f"Password: {student.password}")
    print(f"Active: {student.active}")
    print(_RULE)


def _update_menu(record, kind: str, display, fields) -> object:
    """Run an update menu until the user chooses to exit; return the edited record."""
    while True:
        display(record)
        print(f"\n--- Update {kind} Menu ---")
        for number, (label, _, _) in enumerate(fields, start=1):
            print(f"{number}. Update {label}")
        print(f"{len(fields) + 1}. Exit")
        try:
            choice = _read_int("Enter your choice: ")
        except ValueError:
            choice = None
        if choice == len(fields) + 1:
            print("Exiting update menu.")
            return record
        if choice is None or not 1 <= choice <= len(fields):
            print("Invalid choice. Please try again.")
            continue
        attribute, prompt, read = fields[choice - 1]
        try:
            value = read(prompt)
        except ValueError:
            print("Invalid value. Please try again.")
            continue
        record = replace(record, **{_FIELD_NAMES[attribute]: value})


_FIELD_NAMES = {
    "Grade": "grade",
    "Salary": "salary",
    "Password": "password",
    "Active State": "active",
}


def update_student(student: Student) -> Student:
    """Let the user edit a student's grade, password and active state."""
    fields = [
        ("Grade", "Enter new grade for the student: ", _read_float),
        ("Password", "Enter new password for the student: ", _read_name),
        ("Active State", "Enter new active state (1 for active, 0 for inactive): ", _read_int),
    ]
    return _update_menu(student, "Student", display_student, fields)


def get_student_name() -> str:
    return _read_name("Enter the student's name: ")


def prompt_faculty() -> Faculty:
    """Ask for the details of a new faculty member."""
    name = _read_name("Enter faculty name: ")
    entered = _read_name("Enter faculty password: ")
    salary = _read_int("Enter faculty salary: ")
    return Faculty(name, salary, entered, 1)


def display_faculty(faculty: Faculty) -> None:
    print("\n--- Faculty Information ---")
    print(f"Name: {faculty.name}")
    print(f"Salary: {faculty.salary}")
    print(f"Pass: {faculty.password}")
    print(f"Active: {faculty.active}")
    print(_RULE)


def update_faculty(faculty: Faculty) -> Faculty:
    """Let the user edit a faculty member's salary, password and active state."""
    fields = [
        ("Salary", "Enter new salary for the faculty: ", _read_int),
        ("Password", "Enter new password for the faculty: ", _read_name),
        ("Active State", "Enter new active state (1 for active, 0 for inactive): ", _read_int),
    ]
    return _update_menu(faculty, "Faculty", display_faculty, fields)


def get_faculty_name() -> str:
    return _read_name("Enter the faculty's name: ")


def get_student_course() -> StudentCourse:
    """Ask for a student and a course; the enrolment starts out enrolled."""
    student_name = _read_name("Enter student name: ")
    course_name = _read_name("Enter course name: ")
    return StudentCourse(student_name, course_name, 0)


def display_student_courses(courses: Iterable[StudentCourse], student_name: str) -> None:
    print(f"\n--- Courses for Student: {student_name} ---")
    for enrolment in courses:
        print(f"Course Name: {enrolment.course_name}, Denrolled: {enrolment.denrolled}")
    print(_RULE)


def get_course() -> Course:
    """Ask for a course and the faculty member who teaches it."""
    name = _read_name("Enter course name: ")
    faculty_name = _read_name("Enter faculty name for the course: ")
    return Course(name, faculty_name, 1)


def display_faculty_courses(courses: Iterable[Course], faculty_name: str) -> None:
    print(f"\n--- Courses for Faculty: {faculty_name} ---")
    for course in courses:
        print(f"Course Name: {course.name}, Active: {course.active}")
    print(_RULE)