"""Data models for arcstat."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """One archive category (a gaming system) mapped to a subdirectory."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Display name / short code, e.g. 'SNES'")
    relative_path: str = Field(..., description="Subdirectory under the archive root")
    items_are_directories: bool = Field(
        False,
        description="Whether each game is a directory of files rather than a single file",
    )
    color: Optional[str] = Field(None, description="Rich color used when displaying the label")

    # label and color are cosmetic; the aggregator keys on the rest
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return (self.relative_path, self.items_are_directories) == (
            other.relative_path,
            other.items_are_directories,
        )

    def __hash__(self) -> int:
        return hash((self.relative_path, self.items_are_directories))


class ScanResult(BaseModel):
    """Item count and byte total for one category (or the grand total)."""

    model_config = ConfigDict(frozen=True)

    item_count: int = Field(0, ge=0, description="Number of games found")
    total_bytes: int = Field(0, ge=0, description="Sum of all file sizes in bytes")
    median_bytes: Optional[int] = Field(
        None, description="Median file size, only when size tracking is enabled"
    )
    error: Optional[str] = Field(None, description="Error message if the category could not be scanned")


class ReportRow(BaseModel):
    """A category paired with its final scan result."""

    model_config = ConfigDict(frozen=True)

    category: Category
    result: ScanResult


class Report(BaseModel):
    """Per-category results in registry order plus a grand total."""

    model_config = ConfigDict(frozen=True)

    rows: list[ReportRow] = Field(default_factory=list)
    total: ScanResult = Field(default_factory=ScanResult)

    @property
    def failed_rows(self) -> list[ReportRow]:
        """Rows whose category directory could not be scanned."""
        return [r for r in self.rows if r.result.error]

    @property
    def ok(self) -> bool:
        """Whether every category scanned cleanly."""
        return not self.failed_rows
