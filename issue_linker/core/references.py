"""Issue reference extraction.

Finds ``(#123)`` style references inside comment text. Whitespace is
allowed inside the parentheses, so ``(# 42 )`` is a reference to 42 too.
"""

import re
from typing import Iterator

from issue_linker.core.models import CommentSpan, IssueMatch


# Pattern to match issue references
ISSUE_REFERENCE_PATTERN = re.compile(r"\(\s*#([0-9]+)\s*\)")


def extract_references(comment_text: str) -> Iterator[IssueMatch]:
    """
    Extract issue references from a piece of comment text.

    Matches are found left to right and never overlap; scanning resumes
    right after the previous match, so ``(#1)(#2)`` yields both.

    Args:
        comment_text: Comment text to scan

    Yields:
        IssueMatch with offsets relative to ``comment_text``
    """
    for match in ISSUE_REFERENCE_PATTERN.finditer(comment_text):
        yield IssueMatch(
            issue_number=match.group(1),
            local_start=match.start(),
            local_end=match.end(),
        )


def extract_from_span(span: CommentSpan) -> Iterator[tuple[IssueMatch, int, int]]:
    """Extract references from a span, pairing each with its document offsets."""
    for issue in extract_references(span.text):
        yield (
            issue,
            span.start_offset + issue.local_start,
            span.start_offset + issue.local_end,
        )
