"""Wire messages exchanged between the portal server and its clients."""

import socket
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from courseportal.models import NAME_SIZE, _decode_name, _encode_name, _unpack

SERVER_PORT = 9999
BIND_ERROR = 101
LISTEN_ERROR = 102
BACKLOG_SIZE = 5
MAX_CONNECTIONS = 20
MAX_MSG_SIZE = 1000
LOGIN_TRY_LIMIT = 3


class ReqKind(IntEnum):
    SERVER_FULL = 1
    LOGOUT = 2
    REQ_SUCCESS = 3
    REQ_FAIL = 4
    NOT_PERMITTED = 5
    VOID = 9

    ADD_STUDENT = 11
    UPDATE_STUDENT = 12
    GET_STUDENT = 13
    DISPLAY_STUDENT = 14

    ADD_FACULTY = 21
    UPDATE_FACULTY = 22
    GET_FACULTY = 23
    DISPLAY_FACULTY = 24

    ADD_COURSE = 31
    REMOVE_COURSE = 32
    GET_FACULTY_COURSE = 33

    ADD_STUDENT_COURSE = 41
    GET_STUDENT_COURSE = 42
    DENROLL_STUDENT_COURSE = 43


class Role(IntEnum):
    ADMIN = 0
    STUDENT = 1
    FACULTY = 2


class Status(IntEnum):
    OPENED = 0
    CLOSED = 1
    FREE = 2


def _as_enum(enum_type, value: int):
    try:
        return enum_type(value)
    except ValueError:
        return value


@dataclass
class AuthToken:
    """Credentials a client sends right after connecting."""

    role: Role | int
    user_name: str
    password: str

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct(f"<i{NAME_SIZE}s{NAME_SIZE}s")
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            int(self.role),
            _encode_name(self.user_name, "user_name"),
            _encode_name(self.password, "password"),
        )

    @classmethod
    def unpack(cls, data: bytes) -> "AuthToken":
        role, user_name, password = _unpack(cls._LAYOUT, data)
        return cls(_as_enum(Role, role), _decode_name(user_name), _decode_name(password))


@dataclass
class Message:
    """A request or reply: a kind and a fixed-size payload."""

    kind: ReqKind | int
    payload: bytes = b""

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct(f"<i{MAX_MSG_SIZE}s")
    SIZE: ClassVar[int] = _LAYOUT.size

    def __post_init__(self) -> None:
        if isinstance(self.payload, str):
            self.payload = self.payload.encode("utf-8")
        if len(self.payload) > MAX_MSG_SIZE:
            raise ValueError(f"payload must not exceed {MAX_MSG_SIZE} bytes")

    @property
    def text(self) -> str:
        """The payload read as a NUL-terminated string."""
        return _decode_name(self.payload)

    def pack(self) -> bytes:
        return self._LAYOUT.pack(int(self.kind), self.payload)

    @classmethod
    def unpack(cls, data: bytes) -> "Message":
        kind, payload = _unpack(cls._LAYOUT, data)
        return cls(_as_enum(ReqKind, kind), payload)


def recv_exact(sock: socket.socket, size: int) -> bytes:
    """Receive exactly size bytes, raising ConnectionError if the peer closes first."""
    buffer = bytearray()
    while len(buffer) < size:
        chunk = sock.recv(size - len(buffer))
        if not chunk:
            raise ConnectionError("connection closed by peer")
        buffer += chunk
    return bytes(buffer)


def send_message(sock: socket.socket, message: Message) -> None:
    sock.sendall(message.pack())


def recv_message(sock: socket.socket) -> Message:
    return Message.unpack(recv_exact(sock, Message.SIZE))


def send_token(sock: socket.socket, token: AuthToken) -> None:
    sock.sendall(token.pack())


def recv_token(sock: socket.socket) -> AuthToken:
    return AuthToken.unpack(recv_exact(sock, AuthToken.SIZE))