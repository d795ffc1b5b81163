import re
import unicodedata


def slugify(text: str, separator: str = "-") -> str:
    """Lowercase ASCII slug; runs of anything else collapse into one separator."""
    text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode()
    text = text.replace("_", separator)
    slug = re.sub(r"[^a-z0-9]+", separator, text.strip().lower())
    return slug.strip(separator)
