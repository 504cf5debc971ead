from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FolderNamesRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    names: List[str] = Field(default_factory=list)


class ConversionItem(BaseModel):
    original: str
    converted: str
    changed: bool
    is_directory_hint: bool


class ConvertResponse(BaseModel):
    items: List[ConversionItem] = Field(default_factory=list)
    changed_count: int = 0


class SortResponse(BaseModel):
    names: List[str] = Field(default_factory=list)
    keys: List[str] = Field(default_factory=list)


class FolderEntryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str
    path: Optional[str] = None
    file: Optional[str] = None
    is_file: bool = False
    is_collections_entry: bool = False


class LabelsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entries: List[FolderEntryPayload] = Field(default_factory=list)


class LabelsResponse(BaseModel):
    labels: List[str] = Field(default_factory=list)
