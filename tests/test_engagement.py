import dataclasses
import json

import pytest

from engagement import (
    analyze,
    analyze_call_to_action,
    analyze_emojis,
    analyze_hashtags,
    analyze_length,
    analyze_mentions,
    analyze_readability,
    analyze_sentiment,
    build_suggestions,
    calculate_score,
    engagement_grade,
    extract_features,
    optimize_content,
    score_breakdown,
    EMPTY_TEXT_MESSAGE,
    GENERIC_CTA,
)

LONG_PLAIN = ("the quick brown fox jumps over a lazy dog " * 15).strip()


def _grade_for(score):
    if score >= 90: return "A+"
    if score >= 80: return "A"
    if score >= 70: return "B"
    if score >= 60: return "C"
    if score >= 50: return "D"
    return "F"


# ----------------- extractors -----------------
def test_launch_post_features():
    result = analyze("Check out our new product! #launch #tech @company great amazing")
    a = result.analysis
    assert a.hashtags.found == 2
    assert a.hashtags.list == ("#launch", "#tech")
    assert a.mentions.found == 1
    assert a.call_to_action.found is True
    assert "check out" in a.call_to_action.words
    assert a.sentiment.tone == "positive"


def test_hashtags_recommended_and_density():
    h = analyze_hashtags("one #two three #four")
    assert h.found == 2
    assert h.recommended == 3
    assert h.density == pytest.approx(50.0)

    many = analyze_hashtags("#a #b #c #d #e #f")
    assert many.recommended == 6


def test_density_is_zero_without_tokens():
    assert analyze_hashtags("   ").density == 0.0
    assert analyze_emojis("").density == 0.0


def test_mentions_recommended():
    assert analyze_mentions("hi @alice").recommended == 2
    assert analyze_mentions("@a @b @c").recommended == 3


@pytest.mark.parametrize("text,strength,count", [
    ("nothing to see", "none", 0),
    ("please subscribe", "weak", 1),
    ("subscribe and share", "medium", 2),
    ("subscribe, share and sign up today", "strong", 3),
])
def test_call_to_action_strength(text, strength, count):
    cta = analyze_call_to_action(text)
    assert cta.strength == strength
    assert cta.count == count
    assert cta.found is (count > 0)


def test_call_to_action_matches_substrings():
    cta = analyze_call_to_action("A watchful eye")
    assert cta.words == ("watch",)


def test_length_platforms():
    short = analyze_length("hello there")
    assert (short.platform, short.optimal, short.status) == ("twitter", "140-280", "too_short")

    good = analyze_length("x" * 200)
    assert (good.platform, good.status) == ("twitter", "good")

    medium = analyze_length("x" * 400)
    assert (medium.platform, medium.optimal, medium.status) == ("linkedin", "100-300", "good")

    long_ = analyze_length("x" * 501)
    assert long_.status == "too_long"


def test_length_counts_words():
    assert analyze_length("  two   words ").words == 2


def test_readability_short_text_overrides_level():
    r = analyze_readability("Tiny post.")
    assert r.level == "too_short"
    assert r.score == 80
    assert r.sentences == 1


def test_readability_long_sentence_is_difficult():
    # one long sentence of 25 words is difficult
    long_sentence = " ".join(["word"] * 25) + "."
    r = analyze_readability(long_sentence)
    assert r.level == "difficult"
    assert r.score == 70
    assert r.complexity == "high"
    assert r.avg_words_per_sentence == 25.0


def test_readability_moderate():
    text = " ".join(["word"] * 18) + ". " + " ".join(["word"] * 18) + "."
    r = analyze_readability(text)
    assert r.level == "moderate"
    assert r.score == 85
    assert r.sentences == 2


def test_readability_excellent_medium_complexity():
    text = " ".join(["word"] * 12) + "!"
    r = analyze_readability(text)
    assert r.level == "excellent"
    assert r.score == 100
    assert r.complexity == "medium"


@pytest.mark.parametrize("text,avg", [
    ("a b. c d. e f. g h i.", 2.3),  # 9 / 4 = 2.25
    (" ".join(["w"] * 38) + ". a. b. c.", 10.3),  # 41 / 4 = 10.25
])
def test_readability_average_rounds_half_up(text, avg):
    assert analyze_readability(text).avg_words_per_sentence == avg


def test_sentiment_tone_and_engagement():
    neg = analyze_sentiment("This is terrible and awful")
    assert neg.tone == "negative"
    assert neg.engagement == "low"

    neutral = analyze_sentiment("great but terrible")
    assert neutral.tone == "neutral"

    hot = analyze_sentiment("An exclusive, unique and trending drop")
    assert hot.engagement == "high"
    assert hot.engagement_words == 3


def test_emojis_deduplicated():
    e = analyze_emojis("Launch 🚀 🚀 day ✨")
    assert e.found == 3
    assert e.list == ("🚀", "✨")
    assert e.density == pytest.approx(60.0)


# ----------------- scoring -----------------
@pytest.mark.parametrize("score,grade", [
    (100, "A+"), (90, "A+"), (89, "A"), (80, "A"), (79, "B"),
    (70, "B"), (60, "C"), (50, "D"), (49, "F"), (0, "F"),
])
def test_grade_thresholds(score, grade):
    assert engagement_grade(score) == grade


def test_score_breakdown_for_launch_post():
    a = extract_features("Check out our new product! #launch #tech @company great amazing")
    b = score_breakdown(a)
    assert b == {
        "hashtags": 15,
        "call_to_action": 10,
        "length": -10,
        "readability": 20,
        "sentiment": 10,
        "mentions": 10,
        "emojis": 0,
    }
    assert calculate_score(a) == 100


def test_score_for_minimal_text():
    a = extract_features("bad.")
    # 50 - 10 - 15 - 10 + 16 - 5 = 26, still in range
    assert calculate_score(a) == 26


@pytest.mark.parametrize("dimension,text,points", [
    ("hashtags", "plain", -10),
    ("hashtags", "#a", 10),
    ("hashtags", "#a #b", 15),
    ("hashtags", "#a #b #c #d #e", 15),
    ("hashtags", "#a #b #c #d #e #f", 10),
    ("call_to_action", "plain", -15),
    ("call_to_action", "subscribe", 10),
    ("call_to_action", "subscribe and share", 15),
    ("call_to_action", "subscribe, share and sign up", 20),
    ("length", "x", -10),
    ("length", "x" * 200, 15),
    ("length", "x" * 600, -5),
    ("sentiment", "plain", -5),
    ("sentiment", "a new post", 10),
    ("sentiment", "exclusive unique trending", 15),
    ("mentions", "plain", 0),
    ("mentions", "@a", 10),
    ("mentions", "@a @b @c", 10),
    ("mentions", "@a @b @c @d", -5),
    ("emojis", "plain", 0),
    ("emojis", "🚀", 5),
    ("emojis", "🚀 ✨ 🚀", 5),
    ("emojis", "🚀🚀🚀🚀", 0),
])
def test_score_breakdown_branches(dimension, text, points):
    assert score_breakdown(extract_features(text))[dimension] == points


@pytest.mark.parametrize("text,points", [
    ("Tiny post.", 16),  # readability 80
    (" ".join(["word"] * 25) + ".", 14),  # readability 70
    (" ".join(["word"] * 12) + "!", 20),  # readability 100
])
def test_score_breakdown_readability(text, points):
    assert score_breakdown(extract_features(text))["readability"] == points


@pytest.mark.parametrize("text", [
    "",
    "x",
    "Check out our new product! #launch #tech @company great amazing",
    LONG_PLAIN,
    "#a #b #c #d #e #f #g @a @b @c @d @e 🚀🚀🚀🚀",
    "Subscribe, share, follow, join and learn more about our exclusive new unique trending launch! 🚀 #a #b @x",
])
def test_score_in_range_and_grade_consistent(text):
    result = analyze(text)
    assert 0 <= result.score <= 100
    assert result.grade == _grade_for(result.score)


def test_adding_strong_cta_never_lowers_score():
    base = "Our team shipped a thing this week #release @team"
    with_cta = base + " subscribe share sign up"
    assert analyze(with_cta).score >= analyze(base).score


# ----------------- suggestions -----------------
def test_long_plain_text_suggestions():
    text = ("a" * 9 + " ") * 60
    assert len(text) == 600
    result = analyze(text)
    assert result.analysis.length.status == "too_long"
    by_type = {s.type: s for s in result.suggestions}
    assert by_type["hashtags"].priority == "high"
    assert by_type["cta"].priority == "high"
    assert by_type["readability"].priority == "high"


def test_suggestion_order_follows_rule_order():
    result = analyze(LONG_PLAIN)
    types = [s.type for s in result.suggestions]
    assert types == ["hashtags", "cta", "length", "mentions", "emojis", "readability", "engagement"]


def test_pairs_fire_at_most_once():
    a = extract_features("#a #b #c #d #e #f please subscribe")
    s = build_suggestions(a)
    hashtag_titles = [x.title for x in s if x.type == "hashtags"]
    assert hashtag_titles == ["Reduce Hashtag Count"]
    cta = [x for x in s if x.type == "cta"]
    assert len(cta) == 1
    assert cta[0].priority == "medium"


def test_no_suggestions_for_complete_post():
    text = ("Discover, explore and join our exclusive new breakthrough launch today! "
            "We kept every sentence short. It reads well. Come along 🚀 #launch #tech @team")
    assert analyze(text).suggestions == ()


# ----------------- optimizer -----------------
def test_optimizer_appends_hashtags_and_cta():
    text = "  Plain words here  "
    a = extract_features(text)
    out = optimize_content(text, a)
    assert out == "Plain words here\n\n#content #engagement #socialmedia\n\n" + GENERIC_CTA


def test_optimizer_leaves_complete_text_alone():
    text = "  Learn more about our launch #news  "
    result = analyze(text)
    assert result.optimized_content == text.strip()


# ----------------- facade -----------------
@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_empty_text(text):
    result = analyze(text, "pdf")
    assert result.score == 0
    assert result.grade == "F"
    assert [s.title for s in result.suggestions] == [EMPTY_TEXT_MESSAGE]
    assert result.optimized_content is None
    assert result.analysis.hashtags.found == 0
    assert result.analysis.call_to_action.strength == "none"
    assert result.analysis.emojis.list == ()


def test_analyze_is_idempotent_and_serializable():
    text = "Check out our new product! 🚀 #launch #tech @company great amazing"
    first = json.dumps(analyze(text, "image").to_dict(), sort_keys=True)
    second = json.dumps(analyze(text, "image").to_dict(), sort_keys=True)
    assert first == second
    assert json.loads(first)["analysis"]["readability"]["avg_words_per_sentence"] == 5.5


def test_result_is_immutable():
    result = analyze("Check out #launch @co")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.score = 500
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.analysis.hashtags.found = 9
    with pytest.raises(AttributeError):
        result.analysis.hashtags.list.append("#injected")
    with pytest.raises(AttributeError):
        result.suggestions.append(result.suggestions[0])
    assert result.analysis.hashtags.list == ("#launch",)
    assert result.to_dict()["analysis"]["hashtags"]["list"] == ("#launch",)
