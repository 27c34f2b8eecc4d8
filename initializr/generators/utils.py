"""Name helpers shared by the generators and templates."""
import re


def to_title(name: str) -> str:
    """Title-case every word, treating dashes and underscores as spaces."""
    words = re.split(r'[\s_-]+', name.strip())
    return " ".join(word[:1].upper() + word[1:] for word in words if word)


def go_package_name(name: str) -> str:
    """Go package identifiers may not contain dashes or dots."""
    cleaned = re.sub(r'[^a-z0-9]', '', name.lower())
    if not cleaned or cleaned[0].isdigit():
        cleaned = "pkg" + cleaned
    return cleaned
