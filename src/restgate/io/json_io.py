"""JSON and file persistence helpers built on temp-file-then-rename."""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import IO


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


@contextmanager
def _atomic_target(path: Path, *, temp_prefix: str, temp_suffix: str, mode: str) -> Iterator[IO]:
    """Yield a temp file beside ``path``; rename it over ``path`` on clean exit.

    On any error the temp file is removed and ``path`` keeps its old content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    encoding = "utf-8" if "b" not in mode else None
    handle = tempfile.NamedTemporaryFile(
        mode=mode,
        encoding=encoding,
        dir=path.parent,
        prefix=temp_prefix,
        suffix=temp_suffix,
        delete=False,
    )
    temp_path = Path(handle.name)
    try:
        with handle:
            yield handle
        os.replace(temp_path, path)
    except BaseException:
        with suppress(FileNotFoundError):
            temp_path.unlink()
        raise


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist JSON so readers see either the old or the new document."""
    with _atomic_target(path, temp_prefix=temp_prefix, temp_suffix=temp_suffix, mode="w") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
        handle.write("\n")


def copy_file_atomic(
    source: Path,
    destination: Path,
    *,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Copy ``source`` over ``destination`` without exposing a partial file."""
    with source.open("rb") as reader:
        with _atomic_target(destination, temp_prefix=temp_prefix, temp_suffix=temp_suffix, mode="wb") as handle:
            shutil.copyfileobj(reader, handle)
    shutil.copystat(source, destination)
