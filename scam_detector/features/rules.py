import re
from collections import namedtuple

from .lexicon import LEXICON

UPPERCASE_LIMIT = 20
EXCLAMATION_LIMIT = 5
GRAMMAR_ISSUES_CAP = 5.0

UPPER_RE = re.compile(r"[^A-Z]")

NormalizedText = namedtuple("NormalizedText", ["original", "text"])


def normalize(subject, body):
    """Join subject and body with one space; keep the original-case copy too."""
    original = (subject or "") + " " + (body or "")
    return NormalizedText(original, original.lower())


def _density(hits, total):
    if not total:
        return 0.0
    return hits / total * 2.0


def keyword_score(text, lexicon=LEXICON):
    if not text:
        return 0.0
    t = text.lower()
    count = 0
    for kw in lexicon.keywords:
        if kw.lower() in t:
            count += 1
    return _density(count, len(lexicon.keywords))


def pattern_score(text, lexicon=LEXICON):
    if not text:
        return 0.0
    t = text.lower()
    count = sum(1 for p in lexicon.patterns if p.search(t))
    return _density(count, len(lexicon.patterns))


def urgency_score(text, lexicon=LEXICON):
    if not text:
        return 0.0
    t = text.lower()
    count = 0
    for phrase in lexicon.urgency:
        if phrase.lower() in t:
            count += 1
    return _density(count, len(lexicon.urgency))


def grammar_score(text, original=None, lexicon=LEXICON):
    """Shallow style heuristics.

    Shouting is judged on ``original`` since the lowercase text has lost
    its capitals; when it is not given, ``text`` itself is inspected.
    """
    text = text or ""
    original = text if original is None else original
    issues = 0
    if len(UPPER_RE.sub("", original)) > UPPERCASE_LIMIT:
        issues += 1
    if text.count("!") > EXCLAMATION_LIMIT:
        issues += 1
    t = text.lower()
    for mistake in lexicon.grammar:
        if mistake.lower() in t:
            issues += 1
    return min(1.0, issues / GRAMMAR_ISSUES_CAP)


def basic_rules(subject, body, lexicon=LEXICON):
    n = normalize(subject, body)
    return {
        "keyword": keyword_score(n.text, lexicon),
        "pattern": pattern_score(n.text, lexicon),
        "urgency": urgency_score(n.text, lexicon),
        "grammar": grammar_score(n.text, n.original, lexicon),
    }
