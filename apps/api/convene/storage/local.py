from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from convene.storage.base import RecordStorage


class LocalFileStorage(RecordStorage):
    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_lines(self) -> Iterator[str]:
        with self._path.open("r", encoding="utf-8", newline="") as src:
            for line in src:
                yield line.rstrip("\r\n")

    def replace_lines(self, lines: Iterable[str]) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as out:
                for line in lines:
                    out.write(line)
                    out.write("\n")
                out.flush()
                os.fsync(out.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def exists(self) -> bool:
        return self._path.exists()

    def resolve_uri(self) -> str:
        return f"local://{self._path.as_posix()}"
