"""
Social content engagement analyzer

- Accepts extracted plain text (PDF text layer or OCR output)
- Extracts features:
  Hashtags, Mentions, Call-to-action, Length, Readability, Sentiment, Emojis
- Produces an engagement score (0-100) + letter grade, ordered suggestions
  and an optimized rewrite of the post

Notes:
- Word lists are matched by substring, not word boundary ("watch" also hits "watchful").
- Sentence and word splitting is regex based (good enough for short social copy).
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_HASHTAG_RE = re.compile(r"#\w+", re.ASCII)
_MENTION_RE = re.compile(r"@\w+", re.ASCII)
_SENT_SPLIT_RE = re.compile(r"[.!?]+")
_EMOJI_RE = re.compile(
    "[\U0001F300-\U0001F6FF\U0001F900-\U0001F9FF\u2600-\u26FF\u2700-\u27BF]"
)

_CTA_WORDS = (
    "click", "buy", "shop", "download", "subscribe", "follow", "share",
    "like", "comment", "join", "sign up", "get started", "learn more",
    "discover", "explore", "try", "watch", "read", "visit", "check out",
)

_POSITIVE_WORDS = (
    "great", "awesome", "amazing", "excellent", "fantastic", "love", "best",
    "perfect", "wonderful", "incredible", "outstanding", "brilliant",
)

_NEGATIVE_WORDS = (
    "bad", "terrible", "awful", "hate", "worst", "horrible", "disappointing",
    "failed", "broken", "useless",
)

_ENGAGEMENT_WORDS = (
    "new", "exciting", "innovative", "revolutionary", "breakthrough",
    "exclusive", "limited", "special", "unique", "trending",
)

GENERIC_HASHTAGS = ("#content", "#engagement", "#socialmedia")
GENERIC_CTA = "What are your thoughts? Share in the comments! 👇"

BASE_SCORE = 50
EMPTY_TEXT_MESSAGE = "No text content found to analyze"

GRADE_BANDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)


# ----------------- feature records -----------------
@dataclass(frozen=True)
class HashtagFeature:
    found: int
    recommended: int
    list: Tuple[str, ...]
    density: float


@dataclass(frozen=True)
class MentionFeature:
    found: int
    recommended: int
    list: Tuple[str, ...]


@dataclass(frozen=True)
class CallToActionFeature:
    found: bool
    strength: str  # none | weak | medium | strong
    words: Tuple[str, ...]
    count: int


@dataclass(frozen=True)
class LengthFeature:
    characters: int
    words: int
    platform: str  # twitter | linkedin | general
    optimal: str
    status: str  # good | too_short | too_long


@dataclass(frozen=True)
class ReadabilityFeature:
    score: int
    level: str  # excellent | moderate | difficult | too_short
    avg_words_per_sentence: float
    sentences: int
    complexity: str  # low | medium | high


@dataclass(frozen=True)
class SentimentFeature:
    tone: str  # positive | negative | neutral
    engagement: str  # low | medium | high
    positive_words: int
    negative_words: int
    engagement_words: int


@dataclass(frozen=True)
class EmojiFeature:
    found: int
    list: Tuple[str, ...]
    density: float


@dataclass(frozen=True)
class EngagementAnalysis:
    hashtags: HashtagFeature
    mentions: MentionFeature
    call_to_action: CallToActionFeature
    length: LengthFeature
    readability: ReadabilityFeature
    sentiment: SentimentFeature
    emojis: EmojiFeature


@dataclass(frozen=True)
class Suggestion:
    type: str
    priority: str  # high | medium | low
    icon: str
    title: str
    description: str
    example: str


@dataclass(frozen=True)
class AnalysisResult:
    score: int
    grade: str
    suggestions: Tuple[Suggestion, ...]
    analysis: EngagementAnalysis
    optimized_content: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


# ----------------- text splitting -----------------
def tokens(text: str) -> List[str]:
    return text.split()

def split_sentences(text: str) -> List[str]:
    return [s for s in _SENT_SPLIT_RE.split(text) if s.strip()]

def _density(found: int, token_count: int) -> float:
    if token_count == 0:
        return 0.0
    return found / token_count * 100.0

def _lexicon_hits(text: str, lexicon: Tuple[str, ...]) -> List[str]:
    lower = text.lower()
    return [w for w in lexicon if w in lower]

def _round_half_up(value: float, ndigits: int) -> float:
    # halves go up (2.25 -> 2.3), never to the nearest even digit
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


# ----------------- feature extractors -----------------
def analyze_hashtags(text: str) -> HashtagFeature:
    tags = _HASHTAG_RE.findall(text)
    return HashtagFeature(
        found=len(tags),
        recommended=max(len(tags), 3),
        list=tuple(tags),
        density=_density(len(tags), len(tokens(text))),
    )

def analyze_mentions(text: str) -> MentionFeature:
    mentions = _MENTION_RE.findall(text)
    return MentionFeature(
        found=len(mentions),
        recommended=max(len(mentions), 2),
        list=tuple(mentions),
    )

def analyze_call_to_action(text: str) -> CallToActionFeature:
    hits = _lexicon_hits(text, _CTA_WORDS)
    n = len(hits)
    if n >= 3:
        strength = "strong"
    elif n >= 2:
        strength = "medium"
    elif n >= 1:
        strength = "weak"
    else:
        strength = "none"
    return CallToActionFeature(found=n > 0, strength=strength, words=tuple(hits), count=n)

def analyze_length(text: str) -> LengthFeature:
    chars = len(text)
    # Long posts are judged against LinkedIn norms, short ones against Twitter/X.
    if chars > 280:
        platform, optimal = "linkedin", "100-300"
        status = "too_long" if chars > 500 else "good"
    else:
        platform, optimal = "twitter", "140-280"
        status = "too_short" if chars < 100 else "good"
    return LengthFeature(
        characters=chars,
        words=len(tokens(text)),
        platform=platform,
        optimal=optimal,
        status=status,
    )

def analyze_readability(text: str) -> ReadabilityFeature:
    n_sent = len(split_sentences(text))
    n_words = len(tokens(text))
    avg = n_words / n_sent if n_sent else 0.0

    score = 100
    if avg > 20:
        score -= 30
        level = "difficult"
    elif avg > 15:
        score -= 15
        level = "moderate"
    else:
        level = "excellent"

    # very short content overrides the sentence-length level
    if n_words < 10:
        score -= 20
        level = "too_short"

    if avg > 15:
        complexity = "high"
    elif avg > 10:
        complexity = "medium"
    else:
        complexity = "low"

    return ReadabilityFeature(
        score=max(0, min(100, score)),
        level=level,
        avg_words_per_sentence=_round_half_up(avg, 1),
        sentences=n_sent,
        complexity=complexity,
    )

def analyze_sentiment(text: str) -> SentimentFeature:
    pos = len(_lexicon_hits(text, _POSITIVE_WORDS))
    neg = len(_lexicon_hits(text, _NEGATIVE_WORDS))
    eng = len(_lexicon_hits(text, _ENGAGEMENT_WORDS))

    if pos > neg:
        tone = "positive"
    elif neg > pos:
        tone = "negative"
    else:
        tone = "neutral"

    if eng >= 3:
        engagement = "high"
    elif eng >= 1:
        engagement = "medium"
    else:
        engagement = "low"

    return SentimentFeature(
        tone=tone,
        engagement=engagement,
        positive_words=pos,
        negative_words=neg,
        engagement_words=eng,
    )

def analyze_emojis(text: str) -> EmojiFeature:
    found = _EMOJI_RE.findall(text)
    return EmojiFeature(
        found=len(found),
        list=tuple(dict.fromkeys(found)),
        density=_density(len(found), len(tokens(text))),
    )

def extract_features(text: str) -> EngagementAnalysis:
    return EngagementAnalysis(
        hashtags=analyze_hashtags(text),
        mentions=analyze_mentions(text),
        call_to_action=analyze_call_to_action(text),
        length=analyze_length(text),
        readability=analyze_readability(text),
        sentiment=analyze_sentiment(text),
        emojis=analyze_emojis(text),
    )


# ----------------- scoring -----------------
def score_breakdown(analysis: EngagementAnalysis) -> Dict[str, int]:
    """Per-dimension adjustments applied on top of BASE_SCORE, in scoring order."""
    n_tags = analysis.hashtags.found
    if 2 <= n_tags <= 5:
        s_tags = 15
    elif n_tags >= 1:
        s_tags = 10
    else:
        s_tags = -10

    s_cta = {"strong": 20, "medium": 15, "weak": 10}.get(analysis.call_to_action.strength, -15)
    s_len = {"good": 15, "too_long": -5, "too_short": -10}.get(analysis.length.status, 0)
    s_read = int(round(analysis.readability.score * 0.2))
    s_sent = {"high": 15, "medium": 10}.get(analysis.sentiment.engagement, -5)

    n_mentions = analysis.mentions.found
    if 1 <= n_mentions <= 3:
        s_mentions = 10
    elif n_mentions > 3:
        s_mentions = -5
    else:
        s_mentions = 0

    s_emojis = 5 if 1 <= analysis.emojis.found <= 3 else 0

    return {
        "hashtags": s_tags,
        "call_to_action": s_cta,
        "length": s_len,
        "readability": s_read,
        "sentiment": s_sent,
        "mentions": s_mentions,
        "emojis": s_emojis,
    }

def calculate_score(analysis: EngagementAnalysis) -> int:
    total = BASE_SCORE + sum(score_breakdown(analysis).values())
    return max(0, min(100, int(round(total))))

def engagement_grade(score: int) -> str:
    for cutoff, grade in GRADE_BANDS:
        if score >= cutoff:
            return grade
    return "F"


# ----------------- suggestions -----------------
def _hashtag_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if a.hashtags.found == 0:
        return Suggestion(
            type="hashtags",
            priority="high",
            icon="🏷️",
            title="Add Hashtags for Discoverability",
            description="Include 2-3 relevant hashtags to increase reach and engagement",
            example="#innovation #tech #socialmedia",
        )
    if a.hashtags.found > 5:
        return Suggestion(
            type="hashtags",
            priority="medium",
            icon="⚠️",
            title="Reduce Hashtag Count",
            description="Too many hashtags can appear spammy. Keep it to 3-5 relevant ones",
            example="Focus on your top 3 most relevant hashtags",
        )
    return None

def _cta_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if not a.call_to_action.found:
        return Suggestion(
            type="cta",
            priority="high",
            icon="👆",
            title="Include a Clear Call-to-Action",
            description="Add a specific action you want your audience to take",
            example='"What do you think? Share your thoughts in comments!"',
        )
    if a.call_to_action.strength == "weak":
        return Suggestion(
            type="cta",
            priority="medium",
            icon="💪",
            title="Strengthen Your Call-to-Action",
            description="Make your call-to-action more compelling and specific",
            example='Use stronger verbs like "discover", "explore", or "join"',
        )
    return None

def _length_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if a.length.status == "too_long":
        return Suggestion(
            type="length",
            priority="medium",
            icon="✂️",
            title="Shorten Your Content",
            description="Consider breaking long content into multiple posts or key points",
            example="Aim for 140-280 characters for better engagement",
        )
    if a.length.status == "too_short":
        return Suggestion(
            type="length",
            priority="low",
            icon="📝",
            title="Add More Context",
            description="Provide more details or context to engage your audience better",
            example="Add background information or personal insights",
        )
    return None

def _mention_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if a.mentions.found == 0:
        return Suggestion(
            type="mentions",
            priority="medium",
            icon="👥",
            title="Tag Relevant People or Brands",
            description="Mention relevant accounts to increase visibility and engagement",
            example="@company @influencer or industry leaders",
        )
    return None

def _emoji_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if a.emojis.found == 0:
        return Suggestion(
            type="emojis",
            priority="low",
            icon="😊",
            title="Add Emojis for Visual Appeal",
            description="Emojis can increase engagement and make content more approachable",
            example="🚀 ✨ 💡 for tech content",
        )
    return None

def _readability_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if a.readability.level == "difficult":
        return Suggestion(
            type="readability",
            priority="high",
            icon="📚",
            title="Improve Readability",
            description="Break long sentences into shorter, more digestible chunks",
            example="Keep sentences under 15-20 words for better engagement",
        )
    return None

def _engagement_rule(a: EngagementAnalysis) -> Optional[Suggestion]:
    if a.sentiment.engagement == "low":
        return Suggestion(
            type="engagement",
            priority="medium",
            icon="🔥",
            title="Use More Engaging Language",
            description="Add excitement and energy to capture attention",
            example='Use words like "amazing", "breakthrough", "exclusive"',
        )
    return None

# Order matters: it is the order suggestions are shown to the user.
SUGGESTION_RULES: Tuple[Callable[[EngagementAnalysis], Optional[Suggestion]], ...] = (
    _hashtag_rule,
    _cta_rule,
    _length_rule,
    _mention_rule,
    _emoji_rule,
    _readability_rule,
    _engagement_rule,
)

def build_suggestions(analysis: EngagementAnalysis) -> Tuple[Suggestion, ...]:
    out = []
    for rule in SUGGESTION_RULES:
        s = rule(analysis)
        if s is not None:
            out.append(s)
    return tuple(out)


# ----------------- optimized rewrite -----------------
def optimize_content(text: str, analysis: EngagementAnalysis) -> str:
    optimized = text.strip()
    if analysis.hashtags.found == 0:
        optimized += "\n\n" + " ".join(GENERIC_HASHTAGS)
    if not analysis.call_to_action.found:
        optimized += "\n\n" + GENERIC_CTA
    return optimized


# ----------------- facade -----------------
def empty_analysis() -> EngagementAnalysis:
    return EngagementAnalysis(
        hashtags=HashtagFeature(found=0, recommended=3, list=(), density=0.0),
        mentions=MentionFeature(found=0, recommended=2, list=()),
        call_to_action=CallToActionFeature(found=False, strength="none", words=(), count=0),
        length=LengthFeature(characters=0, words=0, platform="general", optimal="140-280", status="too_short"),
        readability=ReadabilityFeature(score=0, level="too_short", avg_words_per_sentence=0.0, sentences=0, complexity="low"),
        sentiment=SentimentFeature(tone="neutral", engagement="low", positive_words=0, negative_words=0, engagement_words=0),
        emojis=EmojiFeature(found=0, list=(), density=0.0),
    )

def _empty_result() -> AnalysisResult:
    return AnalysisResult(
        score=0,
        grade="F",
        suggestions=(
            Suggestion(
                type="content",
                priority="high",
                icon="📄",
                title=EMPTY_TEXT_MESSAGE,
                description="The uploaded file did not contain any readable text",
                example="Upload a text-based PDF or a clear, high-contrast image",
            ),
        ),
        analysis=empty_analysis(),
        optimized_content=None,
    )


def analyze(text: str, content_type: str = "unknown") -> AnalysisResult:
    if not text or not text.strip():
        logger.info("No text to analyze for %s content", content_type)
        return _empty_result()

    logger.debug("Analyzing engagement for %s content (%d chars)", content_type, len(text))

    analysis = extract_features(text)
    suggestions = build_suggestions(analysis)
    score = calculate_score(analysis)
    grade = engagement_grade(score)

    logger.info("Engagement analysis complete: %d/100 (%s)", score, grade)

    return AnalysisResult(
        score=score,
        grade=grade,
        suggestions=suggestions,
        analysis=analysis,
        optimized_content=optimize_content(text, analysis),
    )
