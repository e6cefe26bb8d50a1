"""
ConversionRecord and ConversionReport — the outcome of a conversion run.

A record describes one source file. The conversion service never raises
for a single file's I/O failure; it returns a failed record and lets the
caller decide whether the run goes on. The report collects the records
of one run, in the order the files were visited.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ConversionRecord(BaseModel):
    """Result of converting a single document."""

    source: str
    target: str
    status: Literal["ok", "failed"] = "ok"
    error: str | None = None
    duration_ms: int = 0
    replaced: bool = False          # source was deleted after conversion

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, source: str, target: str, **kwargs: Any) -> ConversionRecord:
        """Create a success record."""
        return cls(source=source, target=target, status="ok", **kwargs)

    @classmethod
    def failure(
        cls,
        source: str,
        target: str,
        error: str,
        **kwargs: Any,
    ) -> ConversionRecord:
        """Create a failure record."""
        return cls(source=source, target=target, status="failed", error=error, **kwargs)


class ConversionReport(BaseModel):
    """All records from one run over an input tree."""

    input_dir: str
    output_dir: str | None = None
    records: list[ConversionRecord] = Field(default_factory=list)
    aborted: bool = False           # run stopped at the first failure

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def converted(self) -> int:
        return sum(1 for r in self.records if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.records if r.failed)

    @property
    def status(self) -> str:
        """ok, partial, or failed — same vocabulary as operation records."""
        if self.failed == 0:
            return "ok"
        if self.converted == 0:
            return "failed"
        return "partial"

    def add(self, record: ConversionRecord) -> None:
        self.records.append(record)

    def to_dict(self) -> dict:
        return {
            "input_dir": self.input_dir,
            "output_dir": self.output_dir,
            "status": self.status,
            "aborted": self.aborted,
            "total": self.total,
            "converted": self.converted,
            "failed": self.failed,
            "records": [r.model_dump() for r in self.records],
        }
