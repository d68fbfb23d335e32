"""Transformer from LOJ problem payloads to archive records."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from domain.models import RemoteProblem, TransformedProblem
from domain.parsers.asset_scanner import rewrite_references

DEFAULT_DIFFICULTY = 2


@dataclass(frozen=True)
class SectionTitles:
    """Acceptable content section titles for each free-text field, in priority order."""

    description: tuple[str, ...] = ("题目描述",)
    input_format: tuple[str, ...] = ("输入格式",)
    sample_note: tuple[str, ...] = ("样例", "样例 1")
    scoring: tuple[str, ...] = ("评分标准",)
    hint: tuple[str, ...] = ("数据范围与提示", "提示说明")


def format_multiline(text: str) -> str:
    """Normalize line endings to LF and strip surrounding whitespace."""
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


class RecordTransformer:
    """Builds `TransformedProblem` records. Never raises on malformed payload fields."""

    def __init__(
        self,
        section_titles: SectionTitles | None = None,
        difficulty: int = DEFAULT_DIFFICULTY,
    ):
        self.section_titles = section_titles or SectionTitles()
        self.difficulty = difficulty

    def transform(
        self, problem: RemoteProblem, asset_map: Mapping[str, str] | None = None
    ) -> TransformedProblem:
        """
        Convert one fetched problem into the archive schema.

        Args:
            problem: Problem payload as returned by the API
            asset_map: Reference to local path mapping computed for this same problem

        Returns:
            Immutable archive record
        """
        display_id = problem.display_id
        sections = problem.content_sections
        titles = self.section_titles

        def text_field(raw: str) -> str:
            return rewrite_references(format_multiline(raw), asset_map)

        def section(candidates: tuple[str, ...]) -> str:
            return text_field(self.extract_section(sections, candidates, display_id))

        return TransformedProblem(
            id=str(display_id),
            title=problem.title,
            difficulty=self.difficulty,
            tags=tuple(self.extract_tags(problem.tags, display_id)),
            description=section(titles.description),
            input_format=section(titles.input_format),
            sample_input=text_field(self.extract_sample(problem.samples, "inputData", display_id)),
            sample_output=text_field(self.extract_sample(problem.samples, "outputData", display_id)),
            sample_note=section(titles.sample_note),
            scoring=section(titles.scoring),
            hint=section(titles.hint),
        )

    @staticmethod
    def extract_tags(tags: Any, display_id: int | None = None) -> list[str]:
        """Names of well-formed tag descriptors."""
        if not isinstance(tags, list):
            logger.warning(f"[{display_id}] Tags payload is not a list, using no tags")
            return []
        names = []
        for tag in tags:
            if not isinstance(tag, dict):
                continue
            name = tag.get("name")
            if isinstance(name, str):
                names.append(name)
        return names

    @staticmethod
    def extract_section(
        sections: Any, candidates: tuple[str, ...], display_id: int | None = None
    ) -> str:
        """Text of the first section whose title exactly matches one of candidates."""
        if not isinstance(sections, list):
            logger.warning(f"[{display_id}] Content sections are not a list (wanted {candidates})")
            return ""

        for section in sections:
            if not isinstance(section, dict):
                continue
            title = section.get("sectionTitle")
            if not isinstance(title, str) or title not in candidates:
                continue
            text = section.get("text")
            return text if isinstance(text, str) else ""

        logger.warning(f"[{display_id}] No section titled {list(candidates)}")
        return ""

    @staticmethod
    def extract_sample(samples: Any, key: str, display_id: int | None = None) -> str:
        """Field `key` of the first sample."""
        if not isinstance(samples, list) or not samples:
            logger.warning(f"[{display_id}] Samples are empty or malformed")
            return ""
        first = samples[0]
        if not isinstance(first, dict):
            logger.warning(f"[{display_id}] First sample is not an object")
            return ""
        value = first.get(key)
        return value if isinstance(value, str) else ""
