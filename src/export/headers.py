"""Strip title lines that echo a snippet's title, date or author.

Pages written in the snippet database often start with a line such as
"# Daily Snippet - 2024-01-01 - a@x.com", or just the author's email or the
date. Those lines duplicate metadata that the upload already carries, so they
are removed from the top of the exported body.
"""

import re

HEADING_PREFIX = r"(?:#{1,6}\s*)?"
SEPARATOR = r"\s*[-–—]\s*"


def title_echo_patterns(date: str, identity: str, title: str) -> list[re.Pattern[str]]:
    """Patterns for lines that only repeat the snippet's metadata.

    Accepted forms (case-insensitive, optional markdown heading prefix):
        "<title> - <date> - <identity>" with -, en dash or em dash separators
        "<identity>"
        "<date>"
    """
    candidates = [
        re.escape(title) + SEPARATOR + re.escape(date) + SEPARATOR + re.escape(identity),
        re.escape(identity),
        re.escape(date),
    ]
    return [
        re.compile(rf"^\s*{HEADING_PREFIX}{candidate}\s*$", re.IGNORECASE)
        for candidate in candidates
        if candidate
    ]


def strip_title_echo(body: str, date: str, identity: str, title: str = "Daily Snippet") -> str:
    """Remove leading lines that echo the snippet title, date or identity.

    Matching lines are removed from the top repeatedly, together with any
    blank lines that directly follow them.
    Running this twice gives the same result as running it once.

    Args:
        body: Extracted page text
        date: Snippet date (YYYY-MM-DD)
        identity: Author email
        title: Title used in "title - date - identity" lines

    Returns:
        Trimmed body without the echoed header lines

    Example:
        >>> strip_title_echo("# Daily Snippet - 2024-01-01 - a@x.com\\n\\nhello", "2024-01-01", "a@x.com")
        'hello'
    """
    patterns = title_echo_patterns(date, identity, title)
    lines = body.strip().split("\n")

    while lines and any(p.match(lines[0]) for p in patterns):
        lines.pop(0)
        while lines and not lines[0].strip():
            lines.pop(0)

    return "\n".join(lines).strip()
