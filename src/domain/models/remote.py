"""Pydantic models for LOJ API payloads."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileKind(str, Enum):
    """Kinds of per-problem files served by `downloadProblemFiles`."""

    TEST_DATA = "TestData"
    ADDITIONAL_FILE = "AdditionalFile"

    @property
    def folder(self) -> str:
        """Output sub-folder for this kind of file."""
        return "testData" if self is FileKind.TEST_DATA else "additionalFile"


class ProblemMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    display_id: int = Field(alias="displayId")


class RemoteProblem(BaseModel):
    """
    One problem as returned by `getProblem`.

    Only `meta` is validated strictly. Content sections, samples and tags are
    kept as loose JSON and checked field by field by the record transformer.
    """

    model_config = ConfigDict(populate_by_name=True)

    meta: ProblemMeta
    localized_contents: dict[str, Any] = Field(
        default_factory=dict, alias="localizedContentsOfLocale"
    )
    judge_info: Any = Field(default=None, alias="judgeInfo")
    samples: Any = None
    tags: Any = Field(default=None, alias="tagsOfLocale")

    @field_validator("localized_contents", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def id(self) -> int:
        return self.meta.id

    @property
    def display_id(self) -> int:
        return self.meta.display_id

    @property
    def title(self) -> str:
        title = self.localized_contents.get("title")
        return title if isinstance(title, str) else ""

    @property
    def content_sections(self) -> Any:
        return self.localized_contents.get("contentSections")

    def section_texts(self) -> list[str]:
        """Bodies of every well-formed content section, in order."""
        sections = self.content_sections
        if not isinstance(sections, list):
            return []
        texts = []
        for section in sections:
            if isinstance(section, dict) and isinstance(section.get("text"), str):
                texts.append(section["text"])
        return texts


class DownloadInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    download_url: str = Field(alias="downloadUrl")


class DownloadFilesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    download_info: list[DownloadInfo] = Field(default_factory=list, alias="downloadInfo")
