"""Inline hashtag parsing for todo titles.

    "Buy milk #shopping #urgent" -> ("Buy milk", ["shopping", "urgent"])
"""

import re

# "#" followed by one or more ASCII word characters [A-Za-z0-9_]
TAG_PATTERN = re.compile(r"#(\w+)", re.ASCII)


def extract_tags(title: str) -> tuple[str, list[str]]:
    """
    Split a raw title into the cleaned title and the tag names it mentions.

    Tag names keep their order of appearance and may repeat. Only the
    ``#word`` tokens are removed; the remaining text is stripped at both ends.
    Never fails: a title without tags comes back unchanged (stripped) with ``[]``.
    """
    tags = TAG_PATTERN.findall(title)
    cleaned = TAG_PATTERN.sub("", title).strip()
    return cleaned, tags
