"""Output records written to the problem archive."""

from dataclasses import dataclass, field

DOCUMENT_VERSION = "1.0"


@dataclass(frozen=True)
class TransformedProblem:
    """One problem in the archive schema."""

    id: str
    title: str
    difficulty: int
    tags: tuple[str, ...]
    description: str = ""
    input_format: str = ""
    sample_input: str = ""
    sample_output: str = ""
    sample_note: str = ""
    scoring: str = ""
    hint: str = ""


@dataclass
class OutputDocument:
    """Versioned, ordered collection of transformed problems."""

    problems: list[TransformedProblem] = field(default_factory=list)
    version: str = DOCUMENT_VERSION
