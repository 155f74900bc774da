"""Example and property extraction for component detail pages.

Component pages list one ``### Heading`` per documented variant, each
followed by fenced code samples. ``extract_examples`` turns a page into
ExampleBlocks in a single pass over its lines; ``format_examples`` renders the
blocks for one target format.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from desymcp.models.catalog import CodeFormat, ExampleBlock
from desymcp.text import normalise

NO_EXAMPLES_FOUND = "No code examples found for this component in the requested format."

# "### Primario", "### Primario #", "### Primario ¶", "### Primario [#](#primario)",
# "### Primario {#primario}"
_EXAMPLE_HEADING_RE = re.compile(
    r"^###\s+(?P<title>.+?)(?:\s*(?:\[#\]\([^)]*\)|\{#[^}]*\}|¶)|\s+#+)?\s*$"
)
_FENCE_RE = re.compile(r"^(?P<fence>```|~~~)\s*(?P<lang>[\w+-]*)")

_FENCE_FORMATS: dict[str, CodeFormat] = {
    "html": CodeFormat.HTML,
    "htm": CodeFormat.HTML,
    "xml": CodeFormat.HTML,
    "nunjucks": CodeFormat.NUNJUCKS,
    "njk": CodeFormat.NUNJUCKS,
    "jinja": CodeFormat.NUNJUCKS,
    "js": CodeFormat.NUNJUCKS,
    "javascript": CodeFormat.NUNJUCKS,
    "angular": CodeFormat.ANGULAR,
    "ts": CodeFormat.ANGULAR,
    "typescript": CodeFormat.ANGULAR,
}

_LANGUAGE_TAGS: dict[CodeFormat, str] = {
    CodeFormat.HTML: "html",
    CodeFormat.NUNJUCKS: "nunjucks",
    CodeFormat.ANGULAR: "typescript",
}


@dataclass
class _Fence:
    marker: str  # "```" or "~~~"
    code_format: CodeFormat | None  # None: a language we do not collect
    lines: list[str]


def extract_examples(content: str) -> list[ExampleBlock]:
    """Split a component page into titled example blocks.

    Only the last fence of each format under a heading is kept. Blocks
    without any code, code that appears before the first heading, and
    fences left open at the end of the page are dropped.
    """
    examples: list[ExampleBlock] = []
    title: str | None = None
    codes: dict[CodeFormat, str] = {}
    fence: _Fence | None = None

    def flush() -> None:
        if title is not None and codes:
            examples.append(
                ExampleBlock(
                    title=title,
                    html=codes.get(CodeFormat.HTML),
                    nunjucks=codes.get(CodeFormat.NUNJUCKS),
                    angular=codes.get(CodeFormat.ANGULAR),
                )
            )

    for line in content.splitlines():
        stripped = line.strip()

        # Inside a fence: collect until a bare closing fence.
        if fence is not None:
            if stripped == fence.marker:
                if fence.code_format is not None and title is not None:
                    code = "\n".join(fence.lines).strip()
                    if code:
                        codes[fence.code_format] = code
                fence = None
            else:
                fence.lines.append(line)
            continue

        fence_match = _FENCE_RE.match(stripped)
        if fence_match is not None:
            lang = fence_match.group("lang").lower()
            fence = _Fence(
                marker=fence_match.group("fence"),
                code_format=_FENCE_FORMATS.get(lang),
                lines=[],
            )
            continue

        heading = _EXAMPLE_HEADING_RE.match(stripped)
        if heading is not None:
            flush()
            title = heading.group("title").strip()
            codes = {}

    flush()
    return examples


def filter_examples(examples: list[ExampleBlock], variant: str | None) -> list[ExampleBlock]:
    """Keep blocks whose title matches ``variant``; all of them if none does."""
    needle = normalise(variant)
    if not needle:
        return examples
    selected = [
        example
        for example in examples
        if needle in normalise(example.title) or normalise(example.title) in needle
    ]
    return selected or examples


def format_examples(
    examples: list[ExampleBlock],
    target_format: CodeFormat,
    variant: str | None = None,
) -> str:
    """Render the examples that carry code for ``target_format``.

    Returns NO_EXAMPLES_FOUND when none do.
    """
    language = _LANGUAGE_TAGS[target_format]
    sections: list[str] = []
    for example in filter_examples(examples, variant):
        code = example.code_for(target_format)
        if code is None:
            continue
        sections.append(f"### {example.title}\n\n```{language}\n{code}\n```")

    if not sections:
        return NO_EXAMPLES_FOUND
    return "\n\n".join(sections)


# ---------------------------------------------------------------------------
# Props tables
# ---------------------------------------------------------------------------

_TABLE_SEPARATOR_RE = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$")


def _split_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def parse_props_table(content: str) -> list[dict[str, str]]:
    """Read the first markdown pipe table of a props page.

    Returns one dict per row keyed by the header cells. Rows with a different
    number of cells than the header are skipped. Returns an empty list when
    the page has no table.
    """
    lines = content.splitlines()
    for idx in range(len(lines) - 1):
        header_line = lines[idx].strip()
        if not header_line.startswith("|") or not _TABLE_SEPARATOR_RE.match(lines[idx + 1].strip()):
            continue

        header = _split_row(header_line)
        rows: list[dict[str, str]] = []
        for row_line in lines[idx + 2 :]:
            row_line = row_line.strip()
            if not row_line.startswith("|"):
                break
            cells = _split_row(row_line)
            if len(cells) != len(header):
                continue
            rows.append(dict(zip(header, cells, strict=True)))
        return rows

    return []
