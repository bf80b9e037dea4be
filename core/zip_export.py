# core/zip_export.py
import io
import posixpath
import zipfile
from typing import Iterable, Tuple


def _is_bad_member(name: str) -> bool:
    if not name or name.strip() == "":
        return True
    if name.startswith("/") or name.startswith("\\"):
        return True
    return any(p == ".." for p in posixpath.normpath(name).split("/"))


def build_site_zip(folder: str, files: Iterable[Tuple[str, bytes]]) -> bytes:
    """
    Build a deflated zip with every file under `folder/`.

    `files` yields (relative_name, data). Names that would land outside the
    folder are skipped.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files:
            if _is_bad_member(name):
                continue
            zf.writestr(f"{folder}/{name}", data)
    return buf.getvalue()
