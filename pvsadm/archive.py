"""Gzip compression and selective tar extraction."""

from __future__ import annotations

import gzip
import os
import re
import shutil
import tarfile

_GZIP_SIGNATURE = b"\x1f\x8b\x08"

_GLOB_PART = re.compile(
    r"\\(.)|(\*)|(\?)|\[(\^?)((?:\\.|[^\]\\])+)\]|(.)", re.DOTALL
)
_CLASS_CHAR = re.compile(r"\\(.)|(.)", re.DOTALL)


def gzip_it(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Compress ``src`` into ``dest``, recording the source file name."""
    name = os.path.basename(os.fspath(src))
    with open(src, "rb") as reader, open(dest, "wb") as writer:
        with gzip.GzipFile(filename=name, mode="wb", fileobj=writer) as archiver:
            shutil.copyfileobj(reader, archiver)


def gunzip_it(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Decompress the gzip file ``src`` into ``dest``."""
    with gzip.open(src, "rb") as archive, open(dest, "wb") as writer:
        shutil.copyfileobj(archive, writer)


def is_gzip(source: str | os.PathLike[str]) -> bool:
    """Return whether ``source`` starts with the gzip signature.

    Raises EOFError for an empty file.
    """
    with open(source, "rb") as file:
        head = file.read(512)
    if not head:
        raise EOFError(f"{os.fspath(source)}: file is empty")
    return head.startswith(_GZIP_SIGNATURE)


def _join(*parts: str) -> str:
    kept = [part for part in parts if part]
    if not kept:
        return ""
    return os.path.normpath(os.sep.join(kept))


def sanitize_extract_path(file_path: str, destination: str) -> None:
    """Raise ValueError if ``file_path`` would land outside ``destination``."""
    dest_path = _join(destination, file_path)
    if not dest_path.startswith(os.path.normpath(destination or ".") + os.sep):
        raise ValueError(f"{file_path}: illegal file path")


def _translate(pattern: str) -> str:
    pieces: list[str] = []
    for match in _GLOB_PART.finditer(pattern):
        escaped, star, question, negate, klass, literal = match.groups()
        if escaped is not None:
            pieces.append(re.escape(escaped))
        elif star:
            pieces.append(r"[^/]*")
        elif question:
            pieces.append(r"[^/]")
        elif klass is not None:
            body = "".join(
                "-" if plain == "-" else re.escape(esc if esc is not None else plain)
                for esc, plain in _CLASS_CHAR.findall(klass)
                for esc in [esc or None]
            )
            pieces.append(f"[{'^' if negate else ''}{body}]")
        elif literal in ("\\", "["):
            raise ValueError(f"syntax error in pattern: {pattern!r}")
        else:
            pieces.append(re.escape(literal))
    return "".join(pieces)


def _match(pattern: str, name: str) -> bool:
    return re.fullmatch(_translate(pattern), name, re.DOTALL) is not None


def untar(
    tarball: str | os.PathLike[str],
    target: str | os.PathLike[str],
    filename: str,
) -> None:
    """Extract the entries of an uncompressed tar that match ``filename``.

    ``filename`` is a shell pattern; once an entry matches, only entries
    with exactly that name are extracted after it.
    """
    target = os.fspath(target)
    pattern = filename
    with tarfile.open(tarball, mode="r:") as archive:
        for member in archive:
            if not _match(pattern, member.name):
                continue
            pattern = member.name
            sanitize_extract_path(member.name, target)
            path = _join(target, member.name)
            mode = member.mode & 0o7777
            if member.isdir():
                os.makedirs(path, mode, exist_ok=True)
                continue
            fd = os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, mode)
            with os.fdopen(fd, "wb") as out:
                content = archive.extractfile(member)
                if content is not None:
                    with content:
                        shutil.copyfileobj(content, out)