"""Pydantic schemas for JSON output validation.

All --json output from CLI commands uses these models, which keep the
structure consistent across commands and drop None values on output.

Commands using Pydantic validation:
- show: ItemsResponse | ErrorResponse
- inspect: HeaderResponse | ErrorResponse
- scan: ScanResponse | ErrorResponse
"""

from typing import Optional, List, Literal
from pydantic import BaseModel, Field


# ============================================================================
# Base Response Models
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response for all commands.

    Attributes:
        status: Always "error" for error responses
        error: Machine-readable error code (e.g., "not_found", "oversize")
        message: Human-readable error message
        file: File the error refers to, if any
    """

    status: Literal["error"] = "error"
    error: str = Field(
        description="Machine-readable error code",
        examples=["invalid_input", "not_found", "oversize", "read_failed"],
    )
    message: str = Field(description="Human-readable error description")
    file: Optional[str] = Field(default=None, description="Affected file")


# ============================================================================
# Header Model
# ============================================================================


class HeaderInfo(BaseModel):
    """Decoded header or footer block."""

    offset: int = Field(ge=0, description="Byte offset of the block in the file")
    version: int = Field(ge=0, description="1000 for APEv1, 2000 for APEv2")
    size: int = Field(ge=0, description="Declared tag size in bytes")
    count: int = Field(ge=0, description="Declared item count")
    flags: int = Field(ge=0, description="Global tag flags")
    is_footer: bool = Field(description="Block was read as a footer")


# ============================================================================
# Show Command Response
# ============================================================================


class ItemInfo(BaseModel):
    """One text item."""

    key: str = Field(description="Item key (date aliases folded into 'date')")
    value: str = Field(description="Value decoded as UTF-8")


class ItemsResponse(BaseModel):
    """Response for `apetag show`.

    Attributes:
        status: Always "success"
        file: Path to the file
        declared_count: Item count stated in the header
        items: Items that could be parsed
    """

    status: Literal["success"] = "success"
    file: str = Field(description="Path to the file")
    declared_count: int = Field(ge=0, description="Item count stated in the header")
    items: List[ItemInfo] = Field(description="Parsed text items")


# ============================================================================
# Inspect Command Response
# ============================================================================


class HeaderResponse(BaseModel):
    """Response for `apetag inspect`."""

    status: Literal["success"] = "success"
    file: str = Field(description="Path to the file")
    file_size: int = Field(ge=0, description="File size in bytes")
    header: HeaderInfo


# ============================================================================
# Scan Command Response
# ============================================================================


class ScanEntry(BaseModel):
    """A file that carries an APE tag."""

    file: str = Field(description="Path to the file")
    version: int = Field(ge=0, description="Tag version")
    declared_count: int = Field(ge=0, description="Item count stated in the header")
    items: int = Field(ge=0, description="Text items that could be parsed")


class ScanResponse(BaseModel):
    """Response for `apetag scan`.

    Attributes:
        status: Always "success"
        directory: Directory that was scanned
        files_scanned: Number of regular files looked at
        tagged: Files with a loadable tag
        failed: Files that could not be opened
    """

    status: Literal["success"] = "success"
    directory: str = Field(description="Scanned directory")
    files_scanned: int = Field(ge=0, description="Regular files looked at")
    failed: int = Field(ge=0, description="Files that could not be opened")
    tagged: List[ScanEntry] = Field(description="Files with a loadable tag")


# ============================================================================
# Type Unions for Each Command
# ============================================================================

ShowResponse = ItemsResponse | ErrorResponse
InspectResponse = HeaderResponse | ErrorResponse
ScanResponseType = ScanResponse | ErrorResponse
