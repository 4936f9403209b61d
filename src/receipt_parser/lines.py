"""Line preprocessing shared by every extractor."""

from typing import List


def split_lines(text: str) -> List[str]:
    """
    Split receipt text into trimmed lines.

    Empty lines are kept: positional lookups count them.
    """
    if not text:
        return []
    return [line.strip() for line in text.split('\n')]
