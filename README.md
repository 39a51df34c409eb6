# courseportal

A small course registration portal served over TCP. An administrator manages
student and faculty accounts. Faculty members offer and withdraw courses.
Students enrol in courses and drop out of them. Each connected client is served
on its own thread, so the server handles several clients at once.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
courseportal-server
```

Options:

- `--host` is the address to listen on. The default is all interfaces.
- `--port` is the TCP port. The default is 9999.
- `--directory` is the directory that holds the record files. The default is
  `resources`, relative to the current directory. It is created if it is
  missing.
- `--max-connections` is the number of clients served at once. The default
  is 20.

A client that connects while every slot is taken gets a `SERVER_FULL` message
and is disconnected. Any other client first gets a `REQ_SUCCESS` "connected"
message. The command exits with status 101 if the address cannot be bound and
102 if the socket cannot listen. Stop it with Ctrl-C.

The server can also be run from code:

```python
from courseportal.resources import Resources
from courseportal.server import Server

with Server(Resources("./resources"), "127.0.0.1", 9999, 20) as server:
    print(server.address)
    server.serve_forever()
```

`Server.accept_client(sock)` hands an already connected socket to a free slot,
and `Server.close()` stops `serve_forever`.

## Storage

Records are kept in fixed-size binary files in the resources directory:
`students`, `faculties`, `courses` and `student_courses`. Names and passwords
must be shorter than 30 bytes. Records are never deleted. Removing a course
sets its `active` flag to 0. Dropping a student from a course sets the
enrolment's `denrolled` flag to 1.

The storage layer can be used without the network server:

```python
from courseportal.models import Student
from courseportal.resources import Resources, RecordNotFoundError

resources = Resources("./resources")
resources.add_student(Student("alice", 3.5, "password"))

try:
    student = resources.get_student("alice")
except RecordNotFoundError:
    print("no such student")

for course in resources.get_faculty_courses("bob"):
    print(course.name, course.active)
```

`Resources` raises `DuplicateRecordError` when you add a name that already
exists. An enrolment counts as a duplicate when both the student and the course
match. It raises `RecordNotFoundError` when you look up, update, drop or remove
something it does not know. Both are subclasses of `ResourceError`.
`get_student_courses` and `get_faculty_courses` return at most 10 records,
inactive ones included. `RecordFile` is the single-file store underneath.

## Protocol

`courseportal.protocol` defines the wire format. Every request and reply is a
`Message`: a little-endian 32-bit `ReqKind` followed by a 1000-byte payload.
Right after the "connected" message the client sends an `AuthToken`: a 32-bit
`Role` (`ADMIN`, `STUDENT` or `FACULTY`), a user name and a password. The
helpers `send_message`, `recv_message`, `send_token`, `recv_token` and
`recv_exact` work on a connected socket. Record payloads are packed with the
`pack`/`unpack` methods of the classes in `courseportal.models`. Course and
enrolment lists use `pack_list`/`unpack_list`.

The administrator logs in with user name `admin` and password `password`.
Students and faculty log in with the name and password of their record.

## Roles and permissions

`courseportal.session.ClientSession` answers the requests of a logged-in
client, and `serve_client` runs a whole connection, from log-in to logout.

- **Administrator** can add students and faculty, and can do everything the
  other roles can do, on any account.
- **Student** can view and update their own record. They can also enrol in
  courses, list their courses and drop out of courses, for themselves only.
- **Faculty** can view and update their own record. They can also add, list and
  remove the courses they teach.

A request that the role does not allow gets a `NOT_PERMITTED` reply. A storage
error gets a `REQ_FAIL` reply with the error's message. An unknown request kind
gets a `VOID` reply. A failed log-in gets `REQ_FAIL` and the connection is
closed.

## Terminal prompts

`courseportal.client_ui` holds interactive prompts and displays for a terminal
client: `get_user_credentials(role)`, `display_help_menu`, `get_user_request`,
`prompt_student`, `display_student`, `update_student`, `get_student_name`,
`prompt_faculty`, `display_faculty`, `update_faculty`, `get_faculty_name`,
`get_student_course`, `display_student_courses`, `get_course` and
`display_faculty_courses`. The update functions return an edited copy of the
record.

## What is not included

There is no client program or client command. The prompts above and the
protocol helpers are the pieces for one, but nothing here connects to a server,
logs in and drives the menus for you.