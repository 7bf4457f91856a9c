"""Key helpers: unquoting key source text and suggesting near-miss keys.

Suggestions normalise keys across naming conventions (camelCase, PascalCase,
snake_case, kebab-case) before comparing them with a Levenshtein similarity,
so ``.userName`` on a document holding ``user_name`` produces the hint
"did you mean .user_name?".
"""

from __future__ import annotations

import json
import re

# Matches snake_case and kebab-case separators (underscores and hyphens)
_SEP = re.compile(r"[_\-]+")

# camelCase boundary: "camelCase" -> "camel Case"
_UPPER_LOWER = re.compile(r"([a-z])([A-Z])")

# Acronym runs: "URLParser" -> "URL Parser"
_UPPER_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")


def unquote(text: str) -> str:
    """Return the key denoted by a (possibly quoted) scalar's source text.

    Double-quoted text is decoded with JSON escaping; YAML single-quoted
    text has its doubled quotes collapsed.  Plain text is returned unchanged.
    """
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            decoded = json.loads(text)
        except ValueError:
            return text[1:-1]
        return decoded if isinstance(decoded, str) else text[1:-1]
    if len(text) >= 2 and text[0] == text[-1] == "'":
        return text[1:-1].replace("''", "'")
    return text


def normalize_key(key: str) -> str:
    """Normalize a key to lowercase space-separated words.

    Example::

        normalize_key("userName")   # "user name"
        normalize_key("APIKey")     # "api key"
    """
    s = _SEP.sub(" ", key)
    s = _UPPER_LOWER.sub(r"\1 \2", s)
    s = _UPPER_RUN.sub(r"\1 \2", s)
    return " ".join(s.lower().split())


def _levenshtein_distance(a: str, b: str) -> int:
    """Space-optimised rolling-row edit distance."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if len(b) == 0:
        return len(a)

    prev_row = list(range(len(b) + 1))
    for i, ch_a in enumerate(a):
        curr_row = [i + 1] + [0] * len(b)
        for j, ch_b in enumerate(b):
            insert_cost = curr_row[j] + 1
            delete_cost = prev_row[j + 1] + 1
            replace_cost = prev_row[j] + (0 if ch_a == ch_b else 1)
            curr_row[j + 1] = min(insert_cost, delete_cost, replace_cost)
        prev_row = curr_row

    return prev_row[len(b)]


def key_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1] of two keys after normalisation."""
    norm_a = normalize_key(a)
    norm_b = normalize_key(b)
    distance = _levenshtein_distance(norm_a, norm_b)
    return 1.0 - distance / max(len(norm_a), len(norm_b), 1)


def suggest_keys(missing: str, candidates: list[str], threshold: float = 0.6) -> list[str]:
    """Candidates similar to ``missing``, most similar first.

    Exact matches are excluded: a candidate equal to ``missing`` would have
    been found in the first place.
    """
    scored = [
        (key_similarity(missing, c), c) for c in dict.fromkeys(candidates) if c != missing
    ]
    return [c for score, c in sorted(scored, key=lambda sc: -sc[0]) if score >= threshold]
