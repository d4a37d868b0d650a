import logging

from ..features.lexicon import LEXICON
from ..features.rules import basic_rules, normalize
from ..services.advice import get_advice

logger = logging.getLogger(__name__)

SAFE = "SAFE"
SUSPICIOUS = "SUSPICIOUS"
DANGEROUS = "DANGEROUS"

SUSPICIOUS_FROM = 0.3
DANGEROUS_FROM = 0.7


def aggregate(features, lexicon=LEXICON):
    weighted = sum(features[name] * w for name, w in lexicon.weights.items())
    return min(1.0, weighted)


def analyze(subject, body, sender=None, lexicon=LEXICON):
    """Scam probability of an email in [0, 1].

    ``sender`` plays no part in the score; it is accepted so callers can
    hand the same triple to ``analyze`` and ``explain``.
    """
    return aggregate(basic_rules(subject, body, lexicon), lexicon)


def classify(score):
    if score < SUSPICIOUS_FROM:
        return SAFE
    if score < DANGEROUS_FROM:
        return SUSPICIOUS
    return DANGEROUS


def explain(subject, body, sender, lexicon=LEXICON):
    indicators = []
    t = normalize(subject, body).text
    for kw in lexicon.keywords:
        if kw.lower() in t:
            indicators.append(f"Contains suspicious keyword: {kw}")
    for p in lexicon.patterns:
        m = p.search(t)
        if m:
            indicators.append(f"Contains suspicious pattern: {m.group(0)}")
    sender = sender or ""
    if not lexicon.safe_sender.fullmatch(sender):
        indicators.append(f"Sender domain may be suspicious: {sender}")
    return indicators


def compute_risk(subject, body, sender, lexicon=LEXICON):
    features = basic_rules(subject, body, lexicon)
    contributions = {name: features[name] * w for name, w in lexicon.weights.items()}
    score = aggregate(features, lexicon)
    level = classify(score)
    indicators = explain(subject, body, sender, lexicon)
    summary = "keyword:{} pattern:{} urgency:{} grammar:{} score:{}".format(
        round(features["keyword"], 2), round(features["pattern"], 2),
        round(features["urgency"], 2), round(features["grammar"], 2), round(score, 2),
    )
    logger.debug("scored email from %r: %.3f (%s)", sender, score, level)
    return {
        "score": score,
        "level": level,
        "features": features,
        "weights": dict(lexicon.weights),
        "contributions": contributions,
        "indicators": indicators,
        "summary": summary,
        "advice": get_advice(level),
    }
