"""Plain-text reduction, heading outline and quality scoring."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from seo_extractor.services.extractors.base import Heading

SHORT_CONTENT_WORDS = 150
SHORT_CONTENT_WARNING = (
    "Extracted content is very short. Page may be JS-rendered or blocked."
)

# (minimum word count, score), highest threshold first
SCORE_STEPS: tuple[tuple[int, int], ...] = (
    (1200, 100),
    (600, 85),
    (300, 70),
    (150, 50),
)
MIN_SCORE = 25

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Elements whose boundaries separate words; inline runs join without a gap
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "caption", "dd", "div",
    "dl", "dt", "figcaption", "figure", "footer", "header", "hr", "li", "main",
    "nav", "ol", "p", "pre", "section", "table", "tbody", "td", "tfoot", "th",
    "thead", "tr", "ul", *HEADING_TAGS,
]


@dataclass(frozen=True)
class PostProcessResult:
    """Derived fields for a sanitized content fragment."""

    headings: list[Heading]
    content_text: str
    word_count: int
    quality_score: int
    warnings: list[str] = field(default_factory=list)


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split())


def score_content(word_count: int) -> int:
    """Map a word count onto the 25/50/70/85/100 quality scale."""
    for threshold, score in SCORE_STEPS:
        if word_count >= threshold:
            return score
    return MIN_SCORE


def block_soup(html: str) -> BeautifulSoup:
    """Parse HTML with a space inserted at every block boundary.

    Script and style elements are dropped. Afterwards ``get_text()`` with no
    separator keeps ``Hel<b>lo</b>`` as one word while ``<p>a</p><p>b</p>``
    still reads as two.
    """
    soup = BeautifulSoup(html, "lxml")
    for element in soup.find_all(["script", "style"]):
        element.decompose()
    for element in soup.find_all(BLOCK_TAGS):
        if element.name == "br":
            element.replace_with(" ")
            continue
        element.insert_before(" ")
        element.insert_after(" ")
    return soup


def element_text(element) -> str:
    """Text of a parsed element with whitespace runs collapsed."""
    return " ".join(element.get_text().split())


def text_from_html(html: str) -> str:
    """Strip markup and collapse whitespace runs to single spaces."""
    return element_text(block_soup(html))


def extract_headings(html: str) -> list[Heading]:
    """Return non-empty h1-h6 headings in document order."""
    soup = block_soup(html)
    headings: list[Heading] = []
    for element in soup.find_all(HEADING_TAGS):
        text = element_text(element)
        if text:
            headings.append(Heading(tag=element.name, text=text))
    return headings


def post_process(content_html: str) -> PostProcessResult:
    """Derive text, outline, word count, score and warnings from safe HTML."""
    content_text = text_from_html(content_html) if content_html else ""
    word_count = count_words(content_text)

    warnings: list[str] = []
    if word_count < SHORT_CONTENT_WORDS:
        warnings.append(SHORT_CONTENT_WARNING)

    return PostProcessResult(
        headings=extract_headings(content_html) if content_html else [],
        content_text=content_text,
        word_count=word_count,
        quality_score=score_content(word_count),
        warnings=warnings,
    )
