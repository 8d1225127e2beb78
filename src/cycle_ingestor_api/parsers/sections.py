"""
Section splitting

Slices plan text into per-week and per-workout substrings using header
matches from the shared grammar.
"""

import logging
from typing import List

from .models import HeaderMatch, Section, WeekSplit

logger = logging.getLogger(__name__)


def split_weeks(text: str, week_headers: List[HeaderMatch]) -> WeekSplit:
    """
    Find the cycle length and the week-1 substring.

    Cycle length is the highest week number seen (1 when there are no week
    headers). With two or more headers, week 1 runs from the first header up
    to the second one; otherwise the whole text is week 1.
    """
    total_weeks = max((h.number for h in week_headers), default=1)
    total_weeks = max(total_weeks, 1)

    if len(week_headers) > 1:
        week_one = text[week_headers[0].offset:week_headers[1].offset]
        logger.debug(f"Week 1 section spans {week_headers[0].offset}..{week_headers[1].offset}")
    else:
        week_one = text
        logger.debug("Single week or no week headers, using full text as week 1")

    return WeekSplit(total_weeks=total_weeks, week_headers=week_headers, week_one=week_one)


def split_workouts(week_text: str, workout_headers: List[HeaderMatch]) -> List[Section]:
    """Each workout section runs from its header to the next one (or the end)"""
    sections = []
    for i, header in enumerate(workout_headers):
        end = workout_headers[i + 1].offset if i + 1 < len(workout_headers) else len(week_text)
        sections.append(Section(
            header=header,
            start=header.offset,
            end=end,
            text=week_text[header.offset:end].strip(),
        ))
    return sections


def locate_week(text: str, week_headers: List[HeaderMatch], week: int) -> str:
    """
    Substring for ``week``: from its first header up to the first header for
    ``week + 1`` that follows it, or to the end of the text.

    Returns an empty string when the week has no header.
    """
    start_header = next((h for h in week_headers if h.number == week), None)
    if start_header is None:
        return ""

    end = next(
        (h.offset for h in week_headers if h.number == week + 1 and h.offset > start_header.offset),
        len(text),
    )
    return text[start_header.offset:end]
