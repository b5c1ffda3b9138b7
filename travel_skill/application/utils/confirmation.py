from __future__ import annotations

import re

AFFIRMATIVE = (
    "yes",
    "yeah",
    "yep",
    "y",
    "sure",
    "ok",
    "okay",
    "confirm",
    "correct",
    "right",
    "si",
    "sí",
    "claro",
    "vale",
)

NEGATIVE = (
    "no",
    "nope",
    "nah",
    "n",
    "wrong",
    "incorrect",
)

# whole answers that start with a misleading token or carry no leading yes/no
AFFIRMATIVE_PHRASES = (
    "book it",
    "keep it",
    "no problem",
    "sounds good",
    "that's right",
    "that's correct",
)

NEGATIVE_PHRASES = (
    "not correct",
    "not right",
    "that's wrong",
    "that's not right",
    "that's not correct",
    "don't book it",
)


def recognize_confirmation(text: str | None) -> bool | None:
    """
    Yes/no answer. Returns True, False, or None when the text is neither.

    Only a known whole answer or the leading word counts, so "I'm not sure"
    or "why not" stay unanswered instead of reading as a no.
    """
    if not text:
        return None
    words = re.sub(r"[^\w\s']", " ", text.lower()).split()
    if not words:
        return None
    phrase = " ".join(words)

    if phrase in AFFIRMATIVE_PHRASES:
        return True
    if phrase in NEGATIVE_PHRASES:
        return False
    if words[0] in NEGATIVE:
        return False
    if words[0] in AFFIRMATIVE:
        return True
    return None
