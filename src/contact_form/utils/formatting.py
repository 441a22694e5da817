"""Text formatting helpers."""
import re

from markupsafe import Markup, escape

# Letters and digits, with apostrophes allowed inside a word ("o'clock")
WORD_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


def title_case_word(word: str) -> str:
    """
    Title-case a single word, leaving all-uppercase words (acronyms) untouched.

    Args:
        word (str): The word to format.

    Returns:
        str: The formatted word.
    """
    if not word or (word.isupper() and len(word) > 1):
        return word
    return word[:1].upper() + word[1:].lower()


def format_topic(topic: str) -> str:
    """
    Format a topic key for display, e.g. "general-enquiry" -> "General Enquiry".

    Hyphens become spaces and every word is title-cased. Words are runs of letters
    and digits, so punctuation such as "/" or "(" also starts a new word, and
    whitespace is kept as submitted.

    Args:
        topic (str): The topic key as submitted by the form.

    Returns:
        str: The formatted topic.
    """
    return WORD_PATTERN.sub(lambda match: title_case_word(match.group(0)), topic.replace("-", " "))


def nl2br(value: str) -> Markup:
    """
    Escape text for HTML and turn each line break into a <br> tag.

    Args:
        value (str): The plain text, e.g. a submitted message.

    Returns:
        Markup: The escaped text, safe to embed in an autoescaped template.
    """
    lines = str(value).replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return Markup("<br>\n").join(escape(line) for line in lines)
