# util/functions.py
import hashlib
import time


def file_extension(filename: str) -> str:
    """
    - Lower-cased suffix starting at the LAST dot of `filename` ('.env' -> '.env').
    - Empty string when there is no dot at all.
    """
    idx = filename.rfind(".")
    if idx < 0:
        return ""
    return filename[idx:].lower()


def new_change_marker(userid: str) -> str:
    # Opaque value that changes on every mutation of the user's files.
    raw = f"{userid}:{time.time_ns()}".encode("utf-8")
    return hashlib.sha1(raw).hexdigest()[:16]


def quote_etag(value: str) -> str:
    value = value.strip()
    if value.startswith('"') and value.endswith('"'):
        return value
    return f'"{value}"'
