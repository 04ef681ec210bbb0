"""Reading Rex source files from disk."""

from __future__ import annotations

from pathlib import Path

from rex.errors import SourceFileError

COMPILE_EXTENSION = "rx"
RUN_EXTENSION = "rxi"


def read_source(path: Path | str, extension: str) -> str:
    """Return the text of the file at path, which must end in ``.extension``.

    Relative paths are resolved against the current directory.
    """
    path = Path.cwd() / Path(path)

    actual = path.suffix.removeprefix(".")
    if actual != extension:
        raise SourceFileError(f"invalid extension: {actual!r}, expected: {extension!r}", path)

    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SourceFileError("file not found", path) from None
    except UnicodeDecodeError as exc:
        raise SourceFileError(f"file is not valid UTF-8 text: {exc.reason}", path) from None
    except OSError as exc:
        raise SourceFileError(f"cannot read file: {exc.strerror}", path) from None
