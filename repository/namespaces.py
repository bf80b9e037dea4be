# repository/namespaces.py
from typing import Final
from core.paths import namespace_root

MIGRATION_TOKEN: Final[str] = ".migration_token"
VALIDATION_REPORT: Final[str] = "html-validation-report.json"


def user_root(username: str) -> str:
    # Public site files; served by the CDN under /~username/
    return namespace_root(username)


def change_marker_key(userid: str) -> str:
    # Private per-user marker, bumped on every mutation; backs the list ETag.
    return f"/!{userid}/etag"


def validation_report_key(userid: str) -> str:
    return f"/{userid}/{VALIDATION_REPORT}"


def migration_token_key(username: str) -> str:
    return f"{user_root(username)}{MIGRATION_TOKEN}"
