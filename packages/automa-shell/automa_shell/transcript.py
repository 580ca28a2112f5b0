"""Session transcript - mirrors raw commands into an append-only file."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import IO, Any


class Transcript:
    """Holds at most one open log file across many commands.

    Each recorded command is written back with its terminator, so a
    transcript can be replayed with LOAD.
    """

    def __init__(self, encoding: str = "utf-8", header: bool = True) -> None:
        self._encoding = encoding
        self._header = header
        self._file: IO[str] | None = None
        self._path: Path | None = None

    @property
    def active(self) -> bool:
        return self._file is not None

    @property
    def path(self) -> Path | None:
        return self._path

    def start(self, path: str | Path) -> None:
        """Open *path* for appending, closing any previous log first.

        Raises OSError if the file cannot be opened; the previous log is
        closed either way.
        """
        self.stop()
        p = Path(path)
        f = p.open("a", encoding=self._encoding)
        self._file = f
        self._path = p
        if self._header:
            f.write(f"; session log started {datetime.now().isoformat(timespec='seconds')}\n")
            f.flush()

    def record(self, command: str) -> None:
        if self._file is None:
            return
        self._file.write(command + ";\n")
        self._file.flush()

    def stop(self) -> None:
        f = self._file
        self._file = None
        self._path = None
        if f is not None:
            f.close()

    def __enter__(self) -> Transcript:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.stop()
