"""Turns a free-text business plan completion into named sections.

The model is only asked to follow the outline, so its answer may carry
markdown leftovers, mixed bullet markers and numbered or bare headers.
Headers are matched line by line against the outline; anything that is
not a header is content for whichever section is open.
"""
import logging
import re
from typing import List

from .outline import DEFAULT_OUTLINE, PlanOutline
from .schemas import PlanSection

logger = logging.getLogger(__name__)

_BOLD = re.compile(r"\*\*")
_ASTERISK = re.compile(r"\*")
# [^\S\n] is any whitespace except a newline
_MD_HEADER = re.compile(r"^[^\S\n]*(?:#{1,6}[^\S\n]+)+", re.MULTILINE)
_BULLET = re.compile(r"^[^\S\n]*[-•][^\S\n]", re.MULTILINE)
_LEADING_WS = re.compile(r"^[^\S\n]+", re.MULTILINE)
_BLANK_RUN = re.compile(r"\n{3,}")
_NUMBERED = re.compile(r"^\d+\.", re.ASCII)


def clean_text(raw: str) -> str:
    """Global cleanup applied to the whole completion before scanning."""
    text = (raw or "").replace("\r\n", "\n").replace("\r", "\n")
    text = _BOLD.sub("", text)
    text = _ASTERISK.sub("", text)
    text = _MD_HEADER.sub("", text)
    text = _BULLET.sub("• ", text)
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


def format_section_content(content: str) -> str:
    """Normalize one section body. Safe to apply more than once."""
    text = _BOLD.sub("", content)
    text = _ASTERISK.sub("", text)
    # leading whitespace goes before the blank-line collapse so that
    # whitespace-only lines cannot leave a fresh run of newlines behind
    text = _LEADING_WS.sub("", text)
    text = _BULLET.sub("• ", text)
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


class Sectionizer:
    def __init__(self, outline: PlanOutline = DEFAULT_OUTLINE):
        self.outline = outline
        self._lowered = [(name, name.lower()) for name in outline.sections]

    def match_header(self, line: str):
        """Return the outline name this line introduces, or None.

        A header is either exactly a section name, or a numbered line
        ("3. Market Analysis - Q1") that mentions one.
        """
        stripped = line.strip().lower()
        if not stripped:
            return None
        numbered = _NUMBERED.match(stripped) is not None
        for name, lowered in self._lowered:
            if stripped == lowered or (numbered and lowered in stripped):
                return name
        return None

    def sectionize(self, raw: str) -> List[PlanSection]:
        cleaned = clean_text(raw)
        sections: List[PlanSection] = []
        current_title = ""
        current_content = ""

        def flush():
            if current_title and current_content.strip():
                sections.append(PlanSection(
                    title=current_title,
                    content=format_section_content(current_content.strip()),
                ))

        for line in cleaned.split("\n"):
            header = self.match_header(line)
            if header:
                flush()
                current_title = header
                current_content = ""
            else:
                # text before the first header has no section and is dropped
                current_content += line + "\n"
        flush()

        if not sections:
            logger.warning("No outline headers found in %d chars of text, using a single section", len(cleaned))
            sections.append(PlanSection(
                title=self.outline.fallback_title,
                content=format_section_content(cleaned),
            ))
        else:
            logger.info("Sectionized plan into %d sections", len(sections))
        return sections


default_sectionizer = Sectionizer()


def sectionize(raw: str) -> List[PlanSection]:
    return default_sectionizer.sectionize(raw)
