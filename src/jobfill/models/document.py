"""Stored document (resume / cover letter) models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DocumentRef(BaseModel):
    """Document metadata without the payload bytes."""

    id: str
    label: str = ""
    version: str = ""
    mime: str = "application/octet-stream"
    sha256: str
    tags: list[str] = Field(default_factory=list)
    pages: int | None = None
    created_at: str
    updated_at: str


class DocumentRecord(DocumentRef):
    """A document together with its bytes (serialized under ``bytes``)."""

    model_config = ConfigDict(populate_by_name=True)

    content: bytes = Field(default=b"", alias="bytes")

    def ref(self) -> DocumentRef:
        """Drop the payload and return only the metadata."""
        return DocumentRef.model_validate(self.model_dump(exclude={"content"}))
