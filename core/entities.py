# core/entities.py
from dataclasses import dataclass, field, asdict
from typing import List, Optional
from util.types import IssueType, RawDirectoryItem


@dataclass(frozen=True)
class UserInfo:
    userid: str
    username: str


@dataclass(frozen=True)
class DirectoryEntry:
    """
    One item of a single-directory listing; `name` is a single path segment.
    """

    name: str
    is_directory: bool
    length: int = 0
    last_changed: Optional[str] = None

    @classmethod
    def from_raw(cls, item: RawDirectoryItem) -> "DirectoryEntry":
        return cls(
            name=str(item.get("ObjectName") or ""),
            is_directory=bool(item.get("IsDirectory", False)),
            length=int(item.get("Length") or 0),
            last_changed=item.get("LastChanged"),
        )


@dataclass(frozen=True)
class FileRecord:
    object_name: str  # relative to the namespace root
    length: int
    last_changed: Optional[str]
    is_directory: bool = False


@dataclass
class LintIssue:
    type: IssueType
    message: str
    line: int
    column: int
    codeSnippet: str = ""


@dataclass
class LintReport:
    valid: bool
    issues: List[LintIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
