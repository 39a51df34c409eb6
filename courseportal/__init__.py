"""File-backed course registration portal: records, wire protocol, TCP server and console prompts."""

__version__ = "0.1.0"