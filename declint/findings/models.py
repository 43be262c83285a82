# Pydantic data models for lint findings: Issue, SourceRange, SourceLocation, Severity, Category.

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Issue severity. Declaration order is the fixed reporting order, most severe first."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    COSMETIC = "cosmetic"

    @classmethod
    def ordered(cls) -> list["Severity"]:
        return list(cls)

    def __str__(self) -> str:
        return self.value


class Category(str, Enum):
    BAD_PRACTICE = "bad practice"
    COMPLEXITY = "complexity"
    NAMING = "naming"
    READABILITY = "readability"
    SIZE = "size"
    UNUSED = "unused"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class SourceLocation(BaseModel):
    """A point in a source file: file identifier plus 1-based line and column."""

    identifier: str
    line: int = Field(..., description="1-based line number; 0 or less for sentinel locations")
    column: int = Field(..., description="1-based column number")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.identifier}:{self.line}:{self.column}"


class SourceRange(BaseModel):
    """Where in the source an issue was reported (start and end location)."""

    start: SourceLocation
    end: SourceLocation

    model_config = {"frozen": True}

    @classmethod
    def between(
        cls,
        identifier: str,
        start_line: int,
        start_column: int,
        end_line: int,
        end_column: int,
    ) -> "SourceRange":
        return cls(
            start=SourceLocation(identifier=identifier, line=start_line, column=start_column),
            end=SourceLocation(identifier=identifier, line=end_line, column=end_column),
        )


# Sentinels for issues that do not point at real source text.
EMPTY_LOCATION = SourceLocation(identifier="", line=0, column=0)
EMPTY_RANGE = SourceRange(start=EMPTY_LOCATION, end=EMPTY_LOCATION)
INVALID_LOCATION = SourceLocation(identifier="<invalid>", line=-1, column=-1)
INVALID_RANGE = SourceRange(start=INVALID_LOCATION, end=INVALID_LOCATION)


class Correction(BaseModel):
    """Optional auto-fix payload attached to an issue; reporters do not render it."""

    suggestion: str
    replacement_range: Optional[SourceRange] = None

    model_config = {"frozen": True}


class Issue(BaseModel):
    """A single violation reported by a rule (e.g. a method that is too long)."""

    rule_identifier: str
    description: str = ""
    category: Category
    severity: Severity
    location: SourceRange
    correction: Optional[Correction] = None

    model_config = {"frozen": True}

    @property
    def file(self) -> str:
        """File component of the issue: the start location's identifier."""
        return self.location.start.identifier
