# core/paths.py
import posixpath
from util.errors import InvalidPathError

SEP = "/"


def namespace_root(username: str) -> str:
    return f"/~{username}/"


def _canonical(path: str) -> str:
    # POSIX-absolute, normalised, no trailing separator (except "/")
    return posixpath.normpath(posixpath.join(SEP, path))


def resolve_storage_key(namespace_root: str, relative_path: str) -> str:
    """
    Confine an untrusted `relative_path` to `namespace_root` and return the storage key.

    Rules, in order:
    - a leading backslash is rejected;
    - any ".." substring is rejected (also hits names like "a..b", accepted);
    - the joined path is normalised and must equal the root or lie below it
      segment-wise ("/~alice" never admits "/~alice2/...").

    The key keeps the root's leading-slash convention. A path resolving to the
    root itself returns the root with its trailing separator.
    """
    if relative_path.startswith("\\"):
        raise InvalidPathError()
    if ".." in relative_path:
        raise InvalidPathError()

    base = _canonical(namespace_root)
    candidate = posixpath.normpath(posixpath.join(base, relative_path))

    if candidate == base:
        resolved = base.rstrip(SEP) + SEP
    elif candidate.startswith(base.rstrip(SEP) + SEP):
        resolved = candidate
    else:
        raise InvalidPathError()

    if not namespace_root.startswith(SEP):
        resolved = resolved.lstrip(SEP)
    return resolved
