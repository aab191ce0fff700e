"""Report lines for recently touched files."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from recentfiles.extraction.commit import ChangedFile
from recentfiles.git.token import OperationToken

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


class FileReport(BaseModel):
    """A surviving file with the commit it was first seen in."""

    timestamp: datetime = Field(..., description="Commit timestamp")
    commit_hash: str = Field(..., description="Abbreviated commit hash")
    file_name: str = Field(..., description="Repository-relative file path")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "timestamp": "2024-01-15T10:30:00+01:00",
                "commit_hash": "abc123d",
                "file_name": "cmd/server/main.go",
            }
        }


def build_reports(files: List[ChangedFile], token: OperationToken) -> List[FileReport]:
    """Resolve each file's commit timestamp.

    Timestamps are looked up through each commit's metadata cache, so files
    sharing a commit cost one git call. All reports are built before any is
    returned; a failure leaves the caller with nothing to print.

    Raises:
        ExternalToolFailure: If a timestamp cannot be fetched
        TimestampParseFailure: If a timestamp cannot be parsed
    """
    return [
        FileReport(
            timestamp=file.commit.commit_time(token),
            commit_hash=file.commit.hash,
            file_name=file.name,
        )
        for file in files
    ]


def format_report_line(report: FileReport) -> str:
    """Render ``<timestamp> <commit-hash> <file-name>``."""
    return f"{report.timestamp.strftime(TIMESTAMP_FORMAT)} {report.commit_hash} {report.file_name}"
