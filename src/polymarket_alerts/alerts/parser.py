"""
Natural-language alert parsing.

Turns free-text requests into structured `Condition`s. Supported phrasings include:

- "Alert me when Trump election odds exceed 60%"
- "Notify when Bitcoin ETF approval drops below 30%"
- "Tell me if Trump wins probability goes above 55%"
- "Watch when No hits 40% on AI regulation"
- "Alert when the price of Yes on election is over 70 cents"
- "If recession likelihood falls under 25%, let me know"
- "Alert when Trump > 60% AND Biden < 40%" (via `parse_many`)

Parsed conditions are not bound to a market: `market_id` is left empty and resolved
separately with `extract_keywords` plus a market search.

Everything in this module is pure: no I/O, and identical input always produces an
identical result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Protocol

from polymarket_alerts.alerts.conditions import Condition, Direction

OUTCOME_YES = "Yes"
OUTCOME_NO = "No"

# Whole words only, so subjects such as "Dropbox" or "diplomatic" carry no cue.
# Checked before ABOVE_CUES, so a fragment containing cues of both kinds reads as "below".
BELOW_CUES: tuple[str, ...] = (
    "below",
    "under",
    "less than",
    "lower than",
    "fall",
    "falls",
    "falling",
    "fell",
    "drop",
    "drops",
    "dropped",
    "dropping",
    "dip",
    "dips",
    "dipped",
    "dipping",
    "sink",
    "sinks",
    "sinking",
    "sank",
    "decline",
    "declines",
    "declined",
    "declining",
    "<",
)

ABOVE_CUES: tuple[str, ...] = (
    "exceed",
    "exceeds",
    "exceeded",
    "above",
    "over",
    "greater than",
    "more than",
    "higher than",
    "reach",
    "reaches",
    "reached",
    "hit",
    "hits",
    "gets to",
    "rise",
    "rises",
    "rose",
    "climb",
    "climbs",
    "climbed",
    "surpass",
    "surpasses",
    "passes",
    "breaks",
    "tops",
    ">",
)


def _cue_pattern(cues: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = (
        rf"\b{re.escape(cue)}\b" if cue[0].isalpha() else re.escape(cue) for cue in cues
    )
    return re.compile("|".join(alternatives), re.IGNORECASE)


_BELOW_PATTERN = _cue_pattern(BELOW_CUES)
_ABOVE_PATTERN = _cue_pattern(ABOVE_CUES)

_EXPLICIT_NO = re.compile(r"""(?:"no"|'no'|\bno\b)""", re.IGNORECASE)
_NEGATIVE_CUES = re.compile(
    r"\b(?:false|won't|wont|fails?|failed|rejects?|rejected|loses?|lost|doesn't)\b",
    re.IGNORECASE,
)
_POSITIVE_CUES = re.compile(
    r"\b(?:yes|true|will|pass(?:es)?|approves?|approved|wins?|happens?)\b",
    re.IGNORECASE,
)

_NUMBER = r"(?:\d+(?:\.\d+)?|\.\d+)"
_AMOUNT = rf"(?P<value>{_NUMBER})\s*(?P<unit>%|percent\b|cents?\b)?"

# Fallback threshold formats in priority order: (pattern, value is a 0-1 fraction).
_THRESHOLD_FORMATS: tuple[tuple[re.Pattern[str], bool], ...] = (
    (re.compile(rf"({_NUMBER})\s*%"), False),
    (re.compile(rf"({_NUMBER})\s*percent\b", re.IGNORECASE), False),
    # Cents on a $1 contract equal percentage points.
    (re.compile(rf"({_NUMBER})\s*cents?\b", re.IGNORECASE), False),
    (re.compile(r"(?<![\d.])(0\.\d+)"), True),
    (re.compile(r"(?<![\d.])(\.\d+)"), True),
)

# "&" and "|" split only when not joined to a word, so "S&P" and "AT&T" stay whole.
_SEGMENT_DELIMITERS = re.compile(
    r"\s*,\s*|\s+(?:and|or)\s+|(?<!\w)\s*[&|]\s*(?!\w)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Matched:
    """An interpreter produced a condition."""

    condition: Condition


@dataclass(frozen=True)
class NoMatch:
    """An interpreter did not produce a condition."""

    reason: str = ""


ParseResult = Matched | NoMatch


class Interpreter(Protocol):
    """One candidate reading of a request."""

    name: str

    def attempt(self, text: str, notify_url: str) -> ParseResult:
        """Try to read `text` as a condition."""
        ...


def detect_direction(fragment: str) -> Direction | None:
    """Direction cued by `fragment`, or None when no cue is present."""
    if _BELOW_PATTERN.search(fragment):
        return Direction.BELOW
    if _ABOVE_PATTERN.search(fragment):
        return Direction.ABOVE
    return None


def detect_outcome(fragment: str) -> str:
    """Outcome side cued by `fragment`; defaults to the positive outcome."""
    if _EXPLICIT_NO.search(fragment):
        return OUTCOME_NO
    if _NEGATIVE_CUES.search(fragment):
        return OUTCOME_NO
    if _POSITIVE_CUES.search(fragment):
        return OUTCOME_YES
    return OUTCOME_YES


def _as_percent(raw: str, *, fraction: bool) -> float | None:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    if fraction:
        value *= 100
    percent = float(value)
    if not 0.0 <= percent <= 100.0:
        return None
    return percent


def extract_threshold(text: str) -> float | None:
    """
    Threshold (0-100 scale) stated anywhere in `text`.

    The first matching format decides both the value and its conversion:
    `60%`, `60 percent` and `60 cents` are taken as is; `0.60` and `.60` are
    fractions and are scaled by 100.
    """
    for pattern, fraction in _THRESHOLD_FORMATS:
        match = pattern.search(text)
        if match:
            return _as_percent(match.group(1), fraction=fraction)
    return None


def _amount_to_percent(value: str, unit: str | None) -> float | None:
    """Threshold of a structured match: unitless fractions below 1 are decimal odds."""
    fraction = not unit and "." in value and Decimal(value) < 1
    return _as_percent(value, fraction=fraction)


@dataclass(frozen=True)
class PatternInterpreter:
    """
    Regex-driven interpreter.

    The pattern must define `subject`, `value` and `unit` groups. Direction comes from
    the `verb` group via `detect_direction` unless `direction` is fixed.
    """

    name: str
    pattern: re.Pattern[str]
    direction: Direction | None = None

    def attempt(self, text: str, notify_url: str) -> ParseResult:
        match = self.pattern.search(text)
        if match is None:
            return NoMatch("pattern")

        threshold = _amount_to_percent(match["value"], match["unit"])
        if threshold is None:
            return NoMatch("threshold")

        direction = self.direction or detect_direction(match["verb"])
        if direction is None:
            return NoMatch("direction")

        return Matched(
            Condition(
                market_id="",
                outcome=detect_outcome(match["subject"]),
                threshold=threshold,
                direction=direction,
                notify_url=notify_url,
            )
        )


@dataclass(frozen=True)
class FallbackInterpreter:
    """Independently extracts a threshold and a direction from the whole text."""

    name: str = "fallback"

    def attempt(self, text: str, notify_url: str) -> ParseResult:
        threshold = extract_threshold(text)
        if threshold is None:
            return NoMatch("threshold")
        direction = detect_direction(text)
        if direction is None:
            return NoMatch("direction")
        return Matched(
            Condition(
                market_id="",
                outcome=detect_outcome(text),
                threshold=threshold,
                direction=direction,
                notify_url=notify_url,
            )
        )


# Most specific phrasing first; the first determinate match wins.
INTERPRETERS: tuple[Interpreter, ...] = (
    PatternInterpreter(
        name="odds",
        pattern=re.compile(
            r"\b(?:when|if|once)\s+(?P<subject>.+?)\s+"
            r"(?:odds?|probability|chance|likelihood)\b\s+(?:to\s+)?"
            rf"(?P<verb>\w+(?:\s+\w+)*?)\s+{_AMOUNT}",
            re.IGNORECASE,
        ),
    ),
    PatternInterpreter(
        name="movement",
        pattern=re.compile(
            r"\b(?:when|if|once)\s+(?P<subject>.+?)\s+"
            r"(?P<verb>exceeds?|goes?\s+(?:above|below)|rises?\s+(?:to|above)"
            r"|climbs?\s+(?:to|above)|drops?\s+(?:to|below|under)"
            r"|falls?\s+(?:to|below|under)|dips?\s+(?:to|below|under))"
            rf"\s+{_AMOUNT}",
            re.IGNORECASE,
        ),
    ),
    PatternInterpreter(
        name="comparison",
        pattern=re.compile(rf"(?P<subject>.+?)\s*(?P<verb>[<>])=?\s*{_AMOUNT}"),
    ),
    PatternInterpreter(
        name="relational",
        pattern=re.compile(
            rf"(?P<subject>.+?)\s+(?P<verb>hits?|reaches?|at|to)\s+{_AMOUNT}",
            re.IGNORECASE,
        ),
        direction=Direction.ABOVE,
    ),
)

_FALLBACK = FallbackInterpreter()


def parse_one(text: str, notify_url: str) -> Condition | None:
    """
    Parse a single alert request.

    Returns:
        The condition (with an empty `market_id`), or None when the text is ambiguous
        or underspecified. Nothing is guessed.
    """
    for interpreter in (*INTERPRETERS, _FALLBACK):
        result = interpreter.attempt(text, notify_url)
        if isinstance(result, Matched):
            return result.condition
    return None


def split_segments(text: str) -> list[str]:
    """Split a request on `and`, `or`, `,`, `&` and `|`."""
    return [part.strip() for part in _SEGMENT_DELIMITERS.split(text) if part and part.strip()]


def parse_many(text: str, notify_url: str) -> list[Condition]:
    """
    Parse a request that may hold several conditions.

    Segments that do not parse are dropped.
    """
    conditions: list[Condition] = []
    for segment in split_segments(text):
        condition = parse_one(segment, notify_url)
        if condition is not None:
            conditions.append(condition)
    return conditions


# ---------------------------------------------------------------------------
# Search keywords
# ---------------------------------------------------------------------------

_INTENT_PREFIX = re.compile(
    r"^\s*(?:alert|notify|tell|watch|let\s+me\s+know|ping\s+me|message\s+me|inform\s+me)\b"
    r"\s*(?:(?:me|us)\b)?\s*(?:(?:when|if|once)\b)?\s*",
    re.IGNORECASE,
)
_THRESHOLD_PHRASE = re.compile(
    r"\b(?:exceeds?|above|over|below|under|reaches|hits|drops?|falls?|goes?|rises?"
    r"|climbs?|dips?|declines?|sinks?)\b(?:\s+(?:above|below|under|over|to))?"
    rf"\s*{_NUMBER}\s*(?:%|percent\b|cents?\b)?"
    rf"|[<>]=?\s*{_NUMBER}\s*(?:%|percent\b|cents?\b)?",
    re.IGNORECASE,
)
_TRAILING_INTENT = re.compile(
    r"\s*,?\s*(?:let\s+me\s+know|notify\s+me|alert\s+me|tell\s+me).*$",
    re.IGNORECASE,
)
_ENTITY = re.compile(r"\b[A-Z][a-zA-Z]+(?:\s+[A-Z][a-zA-Z]+)*\b")
_NON_ENTITY_WORDS = frozenset(
    {
        "alert",
        "notify",
        "tell",
        "watch",
        "when",
        "if",
        "once",
        "will",
        "the",
        "yes",
        "no",
        "let",
        "ping",
        "message",
        "inform",
        "me",
        "us",
    }
)
_ODDS_WORDS = frozenset({"odds", "probability", "chance", "likelihood", "price"})
_TOPIC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"\b(?:about|on|for|regarding)\s+(.+?)(?:\s+(?:odds|probability|chance|market)\b|$)",
        re.IGNORECASE,
    ),
    re.compile(r"^(.+?)\s+(?:election|approval|outcome|decision|vote|result)\b", re.IGNORECASE),
    re.compile(r"\b(?:will|if)\s+(.+?)\s+(?:win|pass|happen|be\s+approved)\b", re.IGNORECASE),
)
_WORD = re.compile(r"[A-Za-z0-9']+")
_MAX_FALLBACK_KEYWORDS = 3


def extract_subject(text: str) -> str:
    """Strip alert intent and threshold phrasing, leaving what the alert is about."""
    cleaned = _INTENT_PREFIX.sub("", text)
    cleaned = _THRESHOLD_PHRASE.sub(" ", cleaned)
    cleaned = _TRAILING_INTENT.sub("", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned or text


def _named_entities(subject: str) -> list[str]:
    entities: list[str] = []
    for match in _ENTITY.finditer(subject):
        run: list[str] = []
        for word in match.group(0).split():
            if word.lower() in _NON_ENTITY_WORDS:
                if run:
                    entities.append(" ".join(run))
                run = []
            else:
                run.append(word)
        if run:
            entities.append(" ".join(run))
    return entities


def _topic_phrases(subject: str) -> list[str]:
    phrases: list[str] = []
    for pattern in _TOPIC_PATTERNS:
        match = pattern.search(subject)
        if match and match.group(1).strip():
            phrases.append(match.group(1).strip())
    return phrases


def extract_keywords(text: str) -> set[str]:
    """
    Search terms for resolving the market of an alert request.

    Prefers capitalized named entities, then topic phrases ("about X", "X election"),
    then the three longest words of the cleaned subject.
    """
    subject = extract_subject(text)

    entities = _named_entities(subject)
    if entities:
        return set(entities)

    topics = _topic_phrases(subject)
    if topics:
        return set(topics)

    words = [
        w
        for w in _WORD.findall(subject)
        if len(w) > 3 and w.lower() not in _NON_ENTITY_WORDS | _ODDS_WORDS
    ]
    words.sort(key=len, reverse=True)
    return set(words[:_MAX_FALLBACK_KEYWORDS])
