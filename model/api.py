# model/api.py
from typing import List, Literal, Optional
from pydantic import BaseModel
from core.entities import FileRecord


class OkResponse(BaseModel):
    ok: bool = True


class DeleteFileRequest(BaseModel):
    path: Optional[str] = None


class MigrateUsernameRequest(BaseModel):
    old: Optional[str] = None


class MigrateUsernameResponse(BaseModel):
    ok: bool = True
    moved: int


class FileRecordOut(BaseModel):
    # Wire names match the storage backend's listing so clients share one shape.
    ObjectName: str
    Length: int
    LastChanged: Optional[str] = None
    IsDirectory: bool = False

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileRecordOut":
        return cls(
            ObjectName=record.object_name,
            Length=record.length,
            LastChanged=record.last_changed,
            IsDirectory=record.is_directory,
        )


class LintIssueOut(BaseModel):
    type: Literal["error", "warning"]
    message: str
    line: int
    column: int
    codeSnippet: Optional[str] = None


class ValidationReport(BaseModel):
    valid: bool
    issues: List[LintIssueOut]
