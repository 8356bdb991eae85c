"""Heuristic prompt-quality scorer.

Scores a prompt against the user's goal on three independent 0-100 axes and
builds an improved prompt by appending whatever the prompt is missing:

- Clarity: how many tone/style/format-type keywords the prompt names.
- Detail: word count + average sentence length + specificity markers.
- Relevance: share of the goal's keywords that appear in the prompt.

This is the fallback of record for the model-backed analyzer and never fails.
Feedback wording is picked at random among equivalent phrasings; pass a seeded
``random.Random`` as ``rng`` for repeatable text. Scores never depend on it.
"""

import random
import re

from promptsmith.schemas.analysis import CategoryScore, QualityAnalysis
from promptsmith.utils.text import count_sentences, count_words, round_half_up

CLARITY_KEYWORDS = (
    "tone",
    "style",
    "format",
    "audience",
    "purpose",
    "voice",
    "perspective",
    "mood",
)

STOP_WORDS = frozenset(
    {"the", "and", "for", "that", "with", "this", "have", "from", "your", "will", "about"}
)

SPECIFICITY_PATTERNS = (
    re.compile(r"\d+"),
    re.compile(r"specific|particular", re.IGNORECASE),
    re.compile(r"example", re.IGNORECASE),
    re.compile(r"color|colour|red|blue|green|yellow|black|white", re.IGNORECASE),
    re.compile(r"size|large|small|tiny|huge|big", re.IGNORECASE),
    re.compile(r"first|second|third|next|then|after", re.IGNORECASE),
)

# Below this a category gets a clause in the improved prompt
IMPROVEMENT_THRESHOLD = 70

# (goal pattern, marker already in prompt, clause, improvement tag)
_TONE_RULES = (
    (
        re.compile(r"creative|innovative|unique|original|novel", re.IGNORECASE),
        "creative",
        "Use a creative and innovative approach.",
        "creative tone",
    ),
    (
        re.compile(r"formal|professional|business|academic", re.IGNORECASE),
        "formal",
        "Maintain a formal and professional tone.",
        "formal tone",
    ),
    (
        re.compile(r"funny|humorous|comedic|joke|amusing", re.IGNORECASE),
        "funny",
        "Use a humorous and entertaining style.",
        "humorous tone",
    ),
    (
        re.compile(r"detailed|comprehensive|thorough|complete", re.IGNORECASE),
        "detail",
        "Include detailed descriptions and thorough explanations.",
        "detailed approach",
    ),
    (
        re.compile(r"simple|brief|concise|short", re.IGNORECASE),
        "simple",
        "Keep it simple, concise and to the point.",
        "concise approach",
    ),
)

_CLARITY_CLAUSES = (
    "Be specific about tone and style.",
    "Use a clear and engaging voice.",
    "Ensure the content is well-structured and focused.",
)

_DETAIL_CLAUSES = (
    "Include specific examples and descriptive language.",
    "Provide concrete details and vivid descriptions.",
    "Use precise language and illustrative examples.",
)

_ENHANCEMENT_CLAUSES = (
    "For best results, specify your target audience and desired outcome.",
    "Consider adding context about how the output will be used.",
    "To further improve, mention any constraints or preferences you have.",
)


def extract_goal_keywords(goal: str) -> list[str]:
    """Lower-cased goal words longer than 3 chars that are not stop words.

    Duplicates are dropped, first occurrence wins.
    """
    words = (w for w in goal.lower().split() if len(w) > 3 and w not in STOP_WORDS)
    return list(dict.fromkeys(words))


def score_clarity(prompt: str, rng: random.Random | None = None) -> CategoryScore:
    rng = rng or random
    lowered = prompt.lower()
    matches = [k for k in CLARITY_KEYWORDS if k in lowered]
    score = min(100, len(matches) * 25 + 25)

    if score >= 75:
        named = " and ".join(matches)
        options = (
            f"Great job specifying {named} in your prompt!",
            f"Your prompt clearly communicates {named}, which helps guide the AI.",
            f"The AI will understand what you want because you specified {named}.",
        )
    elif score >= 50:
        missing = [k for k in CLARITY_KEYWORDS if k not in matches][:2]
        options = (
            f"Consider adding {' or '.join(missing)} to make your prompt clearer.",
            f"Your prompt could be clearer if you specified {' or '.join(missing)}.",
            f"To improve clarity, try mentioning {' and/or '.join(missing)} in your prompt.",
        )
    else:
        options = (
            "Your prompt lacks clarity. Try specifying tone, style, or audience.",
            "The AI might struggle to understand exactly what you want. "
            "Consider adding details about tone and style.",
            "To get better results, clearly state the tone, style, and format you're looking for.",
        )
    return CategoryScore(score=score, feedback=rng.choice(options))


def _word_count_points(word_count: int) -> int:
    if word_count >= 30:
        return 40
    if word_count >= 20:
        return 30
    if word_count >= 10:
        return 20
    if word_count >= 5:
        return 10
    return 0


def _sentence_points(avg_words_per_sentence: float) -> int:
    if avg_words_per_sentence >= 12:
        return 30
    if avg_words_per_sentence >= 8:
        return 20
    if avg_words_per_sentence >= 5:
        return 10
    return 0


def _specificity_points(prompt: str) -> int:
    hits = sum(1 for pattern in SPECIFICITY_PATTERNS if pattern.search(prompt))
    return min(30, hits * 10)


def score_detail(prompt: str, rng: random.Random | None = None) -> CategoryScore:
    rng = rng or random
    word_count = count_words(prompt)
    sentence_count = count_sentences(prompt)
    avg_words = word_count / sentence_count if sentence_count > 0 else 0

    score = _word_count_points(word_count) + _sentence_points(avg_words) + _specificity_points(prompt)
    score = max(0, min(100, score))

    if score >= 80:
        options = (
            f"Your prompt has excellent detail with {word_count} words and specific elements.",
            "Great job providing specific details! The AI has plenty to work with.",
            "Your detailed prompt gives the AI clear direction with specific elements to include.",
        )
    elif score >= 50:
        options = (
            "Your prompt has decent detail, but could benefit from more specific examples.",
            "Consider adding more specific details like numbers, colors, or examples.",
            "The level of detail is good, but adding more specifics would help the AI understand better.",
        )
    else:
        options = (
            "Your prompt lacks sufficient detail. Try adding specific examples or descriptions.",
            "Add more specific details to help the AI understand exactly what you want.",
            "To improve results, include specific examples, numbers, or descriptive elements.",
        )
    return CategoryScore(score=score, feedback=rng.choice(options))


def score_relevance(prompt: str, goal: str, rng: random.Random | None = None) -> CategoryScore:
    rng = rng or random
    lowered = prompt.lower()
    keywords = extract_goal_keywords(goal)
    matched = [k for k in keywords if k in lowered]
    score = min(100, round_half_up(100 * len(matched) / max(1, len(keywords))))

    if score >= 80:
        options = (
            "Your prompt aligns very well with your goal, "
            f"mentioning key elements like {', '.join(matched[:3])}.",
            "Excellent job keeping your prompt relevant to your goal! "
            "The AI will understand what you're trying to achieve.",
            "The prompt clearly addresses your goal with relevant keywords and context.",
        )
    elif score >= 50:
        missing = [k for k in keywords if k not in matched][:3]
        options = (
            f"Your prompt is somewhat relevant but misses key elements like {', '.join(missing)}.",
            f"Consider including more keywords from your goal such as {', '.join(missing)}.",
            f"To improve relevance, make sure to address {' and '.join(missing)} from your goal.",
        )
    else:
        options = (
            "Your prompt doesn't seem to address your goal. Try including key elements from your goal.",
            "There's a disconnect between your goal and prompt. "
            "Make sure to include relevant keywords from your goal.",
            "To get better results, align your prompt more closely with your stated goal.",
        )
    return CategoryScore(score=score, feedback=rng.choice(options))


def _append_clause(text: str, clause: str) -> str:
    """Close the current sentence and add ``clause`` after it."""
    text = text.rstrip()
    if not text:
        return clause
    if text.endswith(("!", "?")):
        return f"{text} {clause}"
    return f"{text.removesuffix('.')}. {clause}"


def generate_improved_prompt(
    prompt: str,
    goal: str,
    *,
    clarity: int,
    detail: int,
    relevance: int,
    rng: random.Random | None = None,
) -> str:
    """Extend ``prompt`` with clauses for every category scoring below 70.

    The result always ends in ``.``, ``!`` or ``?``.
    """
    rng = rng or random
    suggestion = prompt
    improvements: list[str] = []

    if clarity < IMPROVEMENT_THRESHOLD:
        for pattern, marker, clause, tag in _TONE_RULES:
            if pattern.search(goal) and marker not in suggestion.lower():
                suggestion = _append_clause(suggestion, clause)
                improvements.append(tag)
                break
        else:
            suggestion = _append_clause(suggestion, rng.choice(_CLARITY_CLAUSES))
            improvements.append("clarity")

    if detail < IMPROVEMENT_THRESHOLD and "detailed approach" not in improvements:
        suggestion = _append_clause(suggestion, rng.choice(_DETAIL_CLAUSES))
        improvements.append("detail")

    if relevance < IMPROVEMENT_THRESHOLD:
        lowered = suggestion.lower()
        missing = [k for k in extract_goal_keywords(goal) if k not in lowered][:3]
        if missing:
            suggestion = _append_clause(
                suggestion,
                f"Make sure to address these key elements from the goal: {', '.join(missing)}.",
            )
            improvements.append("relevance")

    if not improvements and (clarity + detail + relevance) / 3 >= IMPROVEMENT_THRESHOLD:
        suggestion = _append_clause(suggestion, rng.choice(_ENHANCEMENT_CLAUSES))

    suggestion = suggestion.rstrip()
    if not suggestion.endswith((".", "!", "?")):
        suggestion += "."
    return suggestion


def analyze_prompt(prompt: str, goal: str, *, rng: random.Random | None = None) -> QualityAnalysis:
    """Score ``prompt`` against ``goal`` and propose an improved prompt."""
    clarity = score_clarity(prompt, rng)
    detail = score_detail(prompt, rng)
    relevance = score_relevance(prompt, goal, rng)
    improved = generate_improved_prompt(
        prompt,
        goal,
        clarity=clarity.score,
        detail=detail.score,
        relevance=relevance.score,
        rng=rng,
    )
    return QualityAnalysis(
        clarity=clarity,
        detail=detail,
        relevance=relevance,
        improved_prompt=improved,
    )
