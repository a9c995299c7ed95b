"""Text helpers for scraped page content and error messages."""


def clean_text(text: str) -> str:
    """
    Trim surrounding whitespace from scraped text.

    Returns an empty string for None/empty input so callers can apply
    fallbacks with a plain ``or``.
    """
    if not text:
        return ""
    return text.strip()


def truncate(text: str, max_length: int) -> str:
    """
    Cut text to at most ``max_length`` characters.

    Args:
        text: String to truncate
        max_length: Maximum number of characters to keep

    Returns:
        The first ``max_length`` characters of ``text``
    """
    if max_length < 0:
        raise ValueError("max_length must be non-negative")
    return text[:max_length]
