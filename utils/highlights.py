"""
Locate theme quotes inside the original submission so the report page can
highlight them.
"""
import re
from typing import Iterator, List, Optional, Sequence, Tuple

from app.schemas.report import QuoteHighlight, ThemeEntry

_QUOTE_CHARS = '"\'“”‘’ \t\n'


def _occurrences(quote: str, source_text: str) -> Iterator[Tuple[int, int]]:
    for match in re.finditer(re.escape(quote), source_text, flags=re.IGNORECASE):
        yield match.start(), match.end()


def find_quote_highlights(
    themes: Sequence[ThemeEntry],
    source_text: Optional[str],
) -> List[QuoteHighlight]:
    """
    Find the character spans of each theme quote in the source text.

    Every non-overlapping, case-insensitive occurrence of a quote is returned.
    Quotes the model paraphrased (not present in the text) are skipped, and a
    span overlapping one already claimed by an earlier theme is dropped.

    Args:
        themes: Themes from the stored report, in report order
        source_text: Original submission

    Returns:
        Highlights sorted by start offset
    """
    if not source_text:
        return []

    highlights: List[QuoteHighlight] = []
    for index, theme in enumerate(themes):
        quote = (theme.quote or '').strip(_QUOTE_CHARS)
        if not quote:
            continue
        for start, end in _occurrences(quote, source_text):
            if any(start < h.end and h.start < end for h in highlights):
                continue
            highlights.append(QuoteHighlight(start=start, end=end, theme_index=index))

    return sorted(highlights, key=lambda h: h.start)
