# util/types.py
from typing import Literal, TypedDict


# Raw listing item as returned by the storage backend for one directory.
class RawDirectoryItem(TypedDict, total=False):
    ObjectName: str
    IsDirectory: bool
    Length: int
    LastChanged: str


IssueType = Literal["error", "warning"]
