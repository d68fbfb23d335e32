"""
Hand-written YAML rendering of the archive document.

Multi-line fields are always emitted as `|-` literal blocks, including empty
ones, so the output keeps a fixed shape regardless of content.
"""

import json
import re

from domain.models import OutputDocument, TransformedProblem

ITEM_INDENT = "  "
FIELD_INDENT = "    "
BLOCK_INDENT = "      "

# (archive key, TransformedProblem attribute)
LITERAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("问题描述", "description"),
    ("输入形式", "input_format"),
    ("样例输入", "sample_input"),
    ("样例输出", "sample_output"),
    ("样例说明", "sample_note"),
    ("评分标准", "scoring"),
    ("提示说明", "hint"),
)

# Leading digits, signs, `=` and `<` cover YAML 1.1 ints, floats, sexagesimals, dates and merge keys.
_PLAIN_UNSAFE_START = re.compile(r"""^[-?:,\[\]{}#&*!|>'"%@`\s\d+=<.]""")
_PLAIN_UNSAFE_INNER = re.compile(r":\s|\s#|:$|[\x00-\x1f\x7f]")
_RESERVED_SCALAR = re.compile(
    r"^(?:~|null|true|false|yes|no|on|off|y|n|[-+]?(?:\d[\d_]*)?\.?\d+(?:[eE][-+]?\d+)?|\.inf|\.nan)$",
    re.IGNORECASE,
)


def _scalar(value: str) -> str:
    """Plain scalar when YAML would read it back unchanged as a string, else double-quoted."""
    if (
        not value
        or value != value.strip()
        or _PLAIN_UNSAFE_START.search(value)
        or _PLAIN_UNSAFE_INNER.search(value)
        or _RESERVED_SCALAR.match(value)
    ):
        # JSON strings are valid YAML double-quoted scalars.
        return json.dumps(value, ensure_ascii=False)
    return value


def render_literal_field(name: str, content: str, indent: str = FIELD_INDENT) -> str:
    """Render `name: |-` followed by content indented one level deeper."""
    block_indent = indent + "  "
    header = "|-"
    if content[:1].isspace():
        header = "|2-"

    lines = [f"{indent}{name}: {header}"]
    if not content:
        lines.append(block_indent)
    else:
        lines.extend(f"{block_indent}{line}" for line in content.split("\n"))
    return "\n".join(lines) + "\n"


def _render_problem(problem: TransformedProblem) -> str:
    parts = [
        f"{ITEM_INDENT}- id: {problem.id}\n",
        f"{FIELD_INDENT}标题: {_scalar(problem.title)}\n",
        f"{FIELD_INDENT}难度: {problem.difficulty}\n",
    ]
    if problem.tags:
        parts.append(f"{FIELD_INDENT}标签:\n")
        parts.extend(f"{BLOCK_INDENT}- {_scalar(tag)}\n" for tag in problem.tags)
    else:
        parts.append(f"{FIELD_INDENT}标签: []\n")

    for name, attribute in LITERAL_FIELDS:
        parts.append(render_literal_field(name, getattr(problem, attribute)))
    return "".join(parts)


def build_yaml(document: OutputDocument) -> str:
    """Render the whole document. Problems keep the order they have in the document."""
    parts = [f"version: {json.dumps(document.version)}\n"]
    if not document.problems:
        parts.append("problems: []\n")
        return "".join(parts)

    parts.append("problems:\n")
    parts.extend(_render_problem(problem) for problem in document.problems)
    return "".join(parts)
