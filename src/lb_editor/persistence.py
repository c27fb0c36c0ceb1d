"""Loading a file into a document and writing it back."""

from __future__ import annotations

import os
from typing import Iterator

from lb_editor.buffer import DEFAULT_TAB_WIDTH, Document
from lb_editor.runtime import telemetry


class PersistenceError(RuntimeError):
    """Raised when a file cannot be opened, read, or written."""

    def __init__(self, message: str, *, path: str, cause: OSError | None = None):
        super().__init__(message)
        self.path = path
        self.cause = cause

    @property
    def reason(self) -> str:
        if self.cause is not None and self.cause.strerror:
            return self.cause.strerror
        return str(self)


def iter_file_lines(path: str) -> Iterator[bytes]:
    """Yield each line of ``path`` with trailing CR/LF bytes removed."""

    with open(path, "rb") as handle:
        for raw in handle:
            yield raw.rstrip(b"\r\n")


def load_document(path: str, *, tab_width: int = DEFAULT_TAB_WIDTH) -> Document:
    with telemetry.span("file::load", component="persistence", metadata={"path": path}):
        try:
            document = Document.from_lines(iter_file_lines(path), tab_width=tab_width)
        except OSError as exc:
            raise PersistenceError(
                f"Cannot open {path}: {exc.strerror or exc}", path=path, cause=exc
            ) from exc

    telemetry.record_event("file.load", data={"path": path, "lines": len(document)})
    return document


def save_document(path: str, document: Document) -> int:
    """Truncate or create ``path``, write the document, return bytes written."""

    data, length = document.to_flat_bytes()
    with telemetry.span("file::save", component="persistence", metadata={"path": path}):
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                os.ftruncate(fd, length)
                written = os.write(fd, data)
            finally:
                os.close(fd)
        except OSError as exc:
            telemetry.record_event(
                "file.save_failed",
                level="warning",
                data={"path": path, "error": exc.strerror or str(exc)},
            )
            raise PersistenceError(
                f"Cannot save {path}", path=path, cause=exc
            ) from exc

    if written != length:
        raise PersistenceError(f"Short write to {path}", path=path)

    telemetry.record_event("file.save", data={"path": path, "bytes": written})
    return written


__all__ = ["PersistenceError", "iter_file_lines", "load_document", "save_document"]
