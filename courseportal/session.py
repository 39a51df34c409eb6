"""Serving one authenticated client: permission checks and request dispatch."""

import socket
from typing import Callable, Dict, Optional

from courseportal.models import Course, Faculty, Student, StudentCourse, pack_list
from courseportal.protocol import (
    MAX_MSG_SIZE,
    AuthToken,
    Message,
    ReqKind,
    Role,
    recv_message,
    recv_token,
    send_message,
)
from courseportal.resources import (
    ADMIN_PASSWORD,
    ADMIN_USER,
    RecordNotFoundError,
    ResourceError,
    Resources,
)


class _NotPermitted(Exception):
    """The client's role does not allow the request."""


def authenticate(resources: Resources, token: AuthToken) -> bool:
    """Check a client's credentials against the stored accounts."""
    try:
        if token.role == Role.STUDENT:
            student = resources.get_student(token.user_name)
            expected = (student.name, student.password)
        elif token.role == Role.FACULTY:
            faculty = resources.get_faculty(token.user_name)
            expected = (faculty.name, faculty.password)
        else:
            expected = (ADMIN_USER, ADMIN_PASSWORD)
    except RecordNotFoundError:
        return False
    return expected == (token.user_name, token.password)


def _record_bytes(message: Message) -> bytes:
    return message.payload.ljust(MAX_MSG_SIZE, b"\0")


class ClientSession:
    """The requests of one logged-in client, answered against the resources."""

    def __init__(self, resources: Resources, token: AuthToken) -> None:
        self.resources = resources
        self.token = token
        self.logged_out = False
        self._handlers: Dict[int, Callable[[Message], Message]] = {
            ReqKind.ADD_STUDENT: self._add_student,
            ReqKind.GET_STUDENT: self._get_student,
            ReqKind.UPDATE_STUDENT: self._update_student,
            ReqKind.ADD_FACULTY: self._add_faculty,
            ReqKind.GET_FACULTY: self._get_faculty,
            ReqKind.UPDATE_FACULTY: self._update_faculty,
            ReqKind.ADD_STUDENT_COURSE: self._add_student_course,
            ReqKind.GET_STUDENT_COURSE: self._get_student_courses,
            ReqKind.DENROLL_STUDENT_COURSE: self._denroll_student_course,
            ReqKind.ADD_COURSE: self._add_course,
            ReqKind.GET_FACULTY_COURSE: self._get_faculty_courses,
            ReqKind.REMOVE_COURSE: self._remove_course,
            ReqKind.LOGOUT: self._logout,
        }

    def handle(self, message: Message) -> Message:
        """Carry out one request and return the reply to send."""
        handler = self._handlers.get(message.kind)
        if handler is None:
            return Message(ReqKind.VOID, "invalid request sent\n")
        try:
            return handler(message)
        except _NotPermitted:
            return Message(ReqKind.NOT_PERMITTED, "you are not priviliged to do this action")
        except ResourceError as exc:
            return Message(ReqKind.REQ_FAIL, str(exc))
        except ValueError as exc:
            return Message(ReqKind.REQ_FAIL, str(exc)[:MAX_MSG_SIZE])

    def _require(self, role: Optional[Role] = None, name: Optional[str] = None) -> None:
        if self.token.role == Role.ADMIN:
            return
        if role is not None and self.token.role == role and self.token.user_name == name:
            return
        raise _NotPermitted()

    def _add_student(self, message: Message) -> Message:
        self._require()
        self.resources.add_student(Student.unpack(_record_bytes(message)))
        return Message(ReqKind.REQ_SUCCESS, "succesfully added student")

    def _get_student(self, message: Message) -> Message:
        name = message.text
        self._require(Role.STUDENT, name)
        return Message(ReqKind.REQ_SUCCESS, self.resources.get_student(name).pack())

    def _update_student(self, message: Message) -> Message:
        student = Student.unpack(_record_bytes(message))
        self._require(Role.STUDENT, student.name)
        self.resources.update_student(student)
        return Message(ReqKind.REQ_SUCCESS, "succesfully updated the student details")

    def _add_faculty(self, message: Message) -> Message:
        self._require()
        self.resources.add_faculty(Faculty.unpack(_record_bytes(message)))
        return Message(ReqKind.REQ_SUCCESS, "Successfully added faculty")

    def _get_faculty(self, message: Message) -> Message:
        name = message.text
        self._require(Role.FACULTY, name)
        return Message(ReqKind.REQ_SUCCESS, self.resources.get_faculty(name).pack())

    def _update_faculty(self, message: Message) -> Message:
        faculty = Faculty.unpack(_record_bytes(message))
        self._require(Role.FACULTY, faculty.name)
        self.resources.update_faculty(faculty)
        return Message(ReqKind.REQ_SUCCESS, "Successfully updated the faculty details")

    def _add_student_course(self, message: Message) -> Message:
        enrolment = StudentCourse.unpack(_record_bytes(message))
        self._require(Role.STUDENT, enrolment.student_name)
        self.resources.add_student_course(enrolment)
        return Message(ReqKind.REQ_SUCCESS, "Successfully added student course")

    def _get_student_courses(self, message: Message) -> Message:
        name = message.text
        self._require(Role.STUDENT, name)
        return Message(ReqKind.REQ_SUCCESS, pack_list(self.resources.get_student_courses(name)))

    def _denroll_student_course(self, message: Message) -> Message:
        enrolment = StudentCourse.unpack(_record_bytes(message))
        self._require(Role.STUDENT, enrolment.student_name)
        self.resources.denroll_student_course(enrolment)
        return Message(ReqKind.REQ_SUCCESS, "Successfully denrolled student from course")

    def _add_course(self, message: Message) -> Message:
        course = Course.unpack(_record_bytes(message))
        self._require(Role.FACULTY, course.faculty_name)
        self.resources.add_course(course)
        return Message(ReqKind.REQ_SUCCESS, "Successfully added course")

    def _get_faculty_courses(self, message: Message) -> Message:
        name = message.text
        self._require(Role.FACULTY, name)
        return Message(ReqKind.REQ_SUCCESS, pack_list(self.resources.get_faculty_courses(name)))

    def _remove_course(self, message: Message) -> Message:
        course = Course.unpack(_record_bytes(message))
        self._require(Role.FACULTY, course.faculty_name)
        self.resources.remove_course(course)
        return Message(ReqKind.REQ_SUCCESS, "Successfully removed course")

    def _logout(self, message: Message) -> Message:
        self.logged_out = True
        return Message(ReqKind.REQ_SUCCESS, "succesfully logged out")


def serve_client(sock: socket.socket, resources: Resources) -> None:
    """Authenticate a connected client and answer its requests until it logs out."""
    with sock:
        try:
            token = recv_token(sock)
            if not authenticate(resources, token):
                send_message(sock, Message(ReqKind.REQ_FAIL, "Authentication failure"))
                return
            send_message(sock, Message(ReqKind.REQ_SUCCESS, "Succesfully authenticated"))
            session = ClientSession(resources, token)
            while not session.logged_out:
                send_message(sock, session.handle(recv_message(sock)))
        except OSError:
            return