"""The portal server: accepts connections and serves each on its own thread."""

import argparse
import socket
import threading
from typing import List, Optional

from courseportal.protocol import (
    BACKLOG_SIZE,
    BIND_ERROR,
    LISTEN_ERROR,
    MAX_CONNECTIONS,
    SERVER_PORT,
    Message,
    ReqKind,
    send_message,
)
from courseportal.resources import DEFAULT_DIRECTORY, Resources
from courseportal.session import serve_client

_ACCEPT_POLL = 0.2


class _ListenError(OSError):
    """The bound socket could not start listening."""


class Server:
    """A listening socket with a bounded number of client threads."""

    def __init__(self, resources: Resources, host: str = "", port: int = SERVER_PORT,
                 max_connections: int = MAX_CONNECTIONS) -> None:
        self.resources = resources
        self.max_connections = max_connections
        self._free = max_connections
        self._lock = threading.Lock()
        self._closed = threading.Event()
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            listener.bind((host, port))
        except OSError:
            listener.close()
            raise
        try:
            listener.listen(BACKLOG_SIZE)
        except OSError as exc:
            listener.close()
            raise _ListenError(*exc.args) from exc
        listener.settimeout(_ACCEPT_POLL)
        self._socket = listener
        self.address = listener.getsockname()

    @property
    def free_slots(self) -> int:
        with self._lock:
            return self._free

    def accept_client(self, sock: socket.socket) -> bool:
        """Serve a connected client if a slot is free; tell it the server is full otherwise."""
        with self._lock:
            full = self._free == 0
            if not full:
                self._free -= 1
        if full:
            try:
                send_message(sock, Message(ReqKind.SERVER_FULL, "Try again later server currently full"))
            except OSError:
                pass
            finally:
                sock.close()
            return False
        try:
            send_message(sock, Message(ReqKind.REQ_SUCCESS, "you have been succesfully connected to the server"))
        except OSError:
            sock.close()
            self._release()
            return False
        threading.Thread(target=self._run, args=(sock,), daemon=True).start()
        return True

    def _release(self) -> None:
        with self._lock:
            self._free += 1

    def _run(self, sock: socket.socket) -> None:
        try:
            serve_client(sock, self.resources)
        finally:
            self._release()

    def serve_forever(self) -> None:
        """Accept clients until the server is closed."""
        while not self._closed.is_set():
            try:
                client, _ = self._socket.accept()
            except socket.timeout:
                continue
            except OSError:
                if self._closed.is_set():
                    return
                raise
            client.settimeout(None)
            print("connected with a new client")
            self.accept_client(client)

    def close(self) -> None:
        self._closed.set()
        self._socket.close()

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the course registration server.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--directory", default=DEFAULT_DIRECTORY)
    parser.add_argument("--max-connections", type=int, default=MAX_CONNECTIONS)
    args = parser.parse_args(argv)

    resources = Resources(args.directory)
    try:
        server = Server(resources, args.host, args.port, args.max_connections)
    except _ListenError:
        return LISTEN_ERROR
    except OSError:
        return BIND_ERROR
    print("-----------------\nserver listening now\n")
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0