import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..config import LEXICON_PATH

logger = logging.getLogger(__name__)

SCAM_KEYWORDS = (
    "urgent", "million dollars", "lottery", "winner", "inheritance",
    "bank transfer", "foreign prince", "claim your prize", "wire transfer",
    "confidential", "business proposal", "investment opportunity", "unclaimed",
    "congratulations", "lucky winner", "offshore", "account details",
)

# (source, case-insensitive)
SUSPICIOUS_PATTERNS = (
    # links to anything but a handful of well-known hosts
    (r"https?://(?!www\.(google|yahoo|microsoft|apple|amazon)\.com)[^\s]+", False),
    # bank details requests
    (r"bank\s+(?:account|details|information|routing)", True),
    # personal information requests
    (r"send\s+(?:your|ur)\s+(?:password|credit card|ssn|social security)", True),
)

URGENCY_PHRASES = (
    "urgent", "immediate", "act now", "limited time", "expires soon",
    "today only", "last chance", "deadline", "quickly", "hurry",
)

GRAMMAR_MISTAKES = (
    "your the", "you is", "we is", "they is", "i is",
    "kindly do the needful", "revert back", "please to",
)

FEATURE_WEIGHTS = {"keyword": 0.4, "pattern": 0.3, "urgency": 0.2, "grammar": 0.1}

SAFE_SENDER_RE = r".*@(gmail|yahoo|outlook|hotmail|aol)\.com"


class LexiconConfigError(ValueError):
    """Raised when a lexicon or weight table cannot be built."""


@dataclass(frozen=True)
class Lexicon:
    keywords: tuple
    patterns: tuple
    urgency: tuple
    grammar: tuple
    weights: MappingProxyType
    safe_sender: re.Pattern


def _compile(source, ignore_case):
    try:
        return re.compile(source, re.IGNORECASE if ignore_case else 0)
    except (re.error, TypeError) as e:
        raise LexiconConfigError(f"invalid pattern {source!r}: {e}")


def _phrases(name, values, allow_empty=False):
    if not isinstance(values, (list, tuple)) or not all(isinstance(v, str) for v in values):
        raise LexiconConfigError(f"{name} must be a list of strings")
    out = tuple(values)
    if not out and not allow_empty:
        raise LexiconConfigError(f"{name} must not be empty")
    return out


def check_weights(weights):
    if not isinstance(weights, Mapping):
        raise LexiconConfigError("weights must be a mapping")
    if set(weights) != set(FEATURE_WEIGHTS):
        raise LexiconConfigError(
            "weights must name exactly: " + ", ".join(sorted(FEATURE_WEIGHTS))
        )
    for name, w in weights.items():
        if isinstance(w, bool) or not isinstance(w, (int, float)) or w < 0:
            raise LexiconConfigError(f"weight {name!r} must be a non-negative number")
    total = sum(weights.values())
    if not math.isclose(total, 1.0, rel_tol=0, abs_tol=1e-9):
        raise LexiconConfigError(f"weights must sum to 1.0, got {total}")
    return MappingProxyType(dict(weights))


def build_lexicon(keywords=SCAM_KEYWORDS, patterns=SUSPICIOUS_PATTERNS,
                  urgency=URGENCY_PHRASES, grammar=GRAMMAR_MISTAKES,
                  weights=None, safe_sender=SAFE_SENDER_RE):
    """Validate and freeze one lexicon.

    ``patterns`` holds ``(source, ignore_case)`` pairs or bare sources,
    bare sources being case-sensitive. Every problem surfaces here as a
    ``LexiconConfigError`` so that scoring itself never has to fail.
    """
    if not isinstance(patterns, (list, tuple)):
        raise LexiconConfigError("patterns must be a list")
    compiled = []
    for p in patterns:
        if isinstance(p, (list, tuple)) and len(p) == 2:
            compiled.append(_compile(p[0], bool(p[1])))
        else:
            compiled.append(_compile(p, False))
    if not compiled:
        raise LexiconConfigError("patterns must not be empty")
    return Lexicon(
        keywords=_phrases("keywords", keywords),
        patterns=tuple(compiled),
        urgency=_phrases("urgency", urgency),
        grammar=_phrases("grammar", grammar, allow_empty=True),
        weights=check_weights(FEATURE_WEIGHTS if weights is None else weights),
        safe_sender=_compile(safe_sender, False),
    )


def load_lexicon(path=None):
    """Build the lexicon, applying overrides from a JSON file when given.

    The file may hold any of ``keywords``, ``patterns``, ``urgency``,
    ``grammar`` and ``weights``; missing keys keep the built-in values.
    """
    path = path if path is not None else LEXICON_PATH
    if not path:
        return build_lexicon()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise LexiconConfigError(f"cannot read lexicon file {path}: {e}")
    if not isinstance(data, dict):
        raise LexiconConfigError("lexicon file must hold a JSON object")
    logger.info("loading lexicon overrides from %s: %s", path, ", ".join(sorted(data)))
    return build_lexicon(
        keywords=data.get("keywords", SCAM_KEYWORDS),
        patterns=data.get("patterns", SUSPICIOUS_PATTERNS),
        urgency=data.get("urgency", URGENCY_PHRASES),
        grammar=data.get("grammar", GRAMMAR_MISTAKES),
        weights=data.get("weights"),
    )


LEXICON = load_lexicon()
