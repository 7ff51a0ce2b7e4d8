"""
Theme extractor.

Matches an ordered table of (pattern, theme, sentiment) rules against the
lower-cased note of every check-in that has one. A note can trigger several
themes. A theme is only "recurring" once it shows up in at least two notes;
the top five are returned by frequency, ties going to whichever rule comes
first in THEME_RULES.

Also mines plain keywords from notes: words from low-mood notes are likely
triggers, words from high-mood notes are likely coping strategies.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import CheckInEntry, RecurringTheme, Sentiment

NEGATIVE = Sentiment.NEGATIVE
POSITIVE = Sentiment.POSITIVE
NEUTRAL = Sentiment.NEUTRAL

# Order matters: earlier rules win frequency ties.
THEME_RULES: list[tuple[re.Pattern, str, Sentiment]] = [
    # Work / productivity
    (re.compile(r"work|job|boss|coworker|office|deadline|project|meeting"), "work stress", NEGATIVE),
    (re.compile(r"productive|accomplished|finished|completed|done"), "productivity wins", POSITIVE),
    (re.compile(r"procrastinat|avoid|putting off|can't start"), "procrastination", NEGATIVE),
    (re.compile(r"overwhelm|too much|swamp|buried"), "feeling overwhelmed", NEGATIVE),
    (re.compile(r"focus|concentrate|distract"), "focus challenges", NEGATIVE),
    # Emotional
    (re.compile(r"anxi|worry|nervous|stress"), "anxiety", NEGATIVE),
    (re.compile(r"sad|depress|down|low|hopeless"), "low mood", NEGATIVE),
    (re.compile(r"happy|joy|excit|great|amazing"), "positive emotions", POSITIVE),
    (re.compile(r"frustrat|angry|annoyed|irritat"), "frustration", NEGATIVE),
    (re.compile(r"reject|rsd|sensitive|hurt"), "rejection sensitivity", NEGATIVE),
    # Physical / self-care
    (re.compile(r"tired|exhaust|fatigue|sleep|insomnia"), "fatigue/sleep issues", NEGATIVE),
    (re.compile(r"exercise|workout|gym|run|walk"), "physical activity", POSITIVE),
    (re.compile(r"eat|food|meal|hungry"), "eating patterns", NEUTRAL),
    (re.compile(r"medic|pill|dose|forgot.*med"), "medication", NEUTRAL),
    # Relationships
    (re.compile(r"friend|social|family|partner|relationship"), "relationships", NEUTRAL),
    (re.compile(r"alone|lonely|isolat"), "loneliness", NEGATIVE),
    (re.compile(r"support|help|understood"), "feeling supported", POSITIVE),
    # ADHD-specific
    (re.compile(r"hyperfocus|in the zone|flow"), "hyperfocus", POSITIVE),
    (re.compile(r"forget|forgot|memory|remember"), "memory issues", NEGATIVE),
    (re.compile(r"late|time blind|running behind"), "time management", NEGATIVE),
    (re.compile(r"impuls|bought|spent|decision"), "impulsivity", NEGATIVE),
]

STOP_WORDS = frozenset({
    "this", "that", "with", "have", "been", "were", "they", "their", "about",
    "would", "could", "should", "really", "today", "feeling", "felt", "just",
    "like", "some", "more", "very", "much", "what", "when", "where", "which", "while",
})


@dataclass
class _ThemeTally:
    order: int
    sentiment: Sentiment
    count: int
    last_mentioned: datetime


def match_themes(note: str) -> list[tuple[str, Sentiment]]:
    """Themes triggered by a single note, in rule order."""
    text = note.lower()
    return [(theme, sentiment) for pattern, theme, sentiment in THEME_RULES if pattern.search(text)]


def extract_recurring_themes(
    entries: Sequence[CheckInEntry], config: InsightsConfig | None = None
) -> list[RecurringTheme]:
    cfg = (config or InsightsConfig()).themes
    order = {theme: i for i, (_, theme, _) in enumerate(THEME_RULES)}
    tallies: dict[str, _ThemeTally] = {}

    for entry in entries:
        if not entry.has_note:
            continue
        for theme, sentiment in match_themes(entry.note):
            tally = tallies.get(theme)
            if tally is None:
                tallies[theme] = _ThemeTally(order[theme], sentiment, 1, entry.created_at)
                continue
            tally.count += 1
            if entry.created_at > tally.last_mentioned:
                tally.last_mentioned = entry.created_at

    recurring = [(theme, t) for theme, t in tallies.items() if t.count >= cfg.min_frequency]
    recurring.sort(key=lambda item: (-item[1].count, item[1].order))

    return [
        RecurringTheme(
            theme=theme,
            frequency=t.count,
            sentiment=t.sentiment,
            last_mentioned=t.last_mentioned,
        )
        for theme, t in recurring[: cfg.max_themes]
    ]


def extract_keywords(notes: Sequence[str], config: InsightsConfig | None = None) -> list[str]:
    """Most repeated non-stop-words across the notes."""
    cfg = (config or InsightsConfig()).keywords
    text = " ".join(notes).lower()
    words = re.findall(rf"\b[a-z]{{{cfg.min_length},}}\b", text)

    # Counter keeps first-seen order, so most_common() is stable on ties
    counts = Counter(w for w in words if w not in STOP_WORDS)
    return [word for word, count in counts.most_common() if count >= cfg.min_count][: cfg.max_keywords]


def triggers_and_coping(
    entries: Sequence[CheckInEntry], config: InsightsConfig | None = None
) -> tuple[list[str], list[str]]:
    """(triggers from low-mood notes, coping strategies from high-mood notes)."""
    config = config or InsightsConfig()
    low_notes = [e.note for e in entries if e.has_note and e.score <= config.pattern.low_threshold]
    high_notes = [e.note for e in entries if e.has_note and e.score >= config.pattern.high_threshold]
    return extract_keywords(low_notes, config), extract_keywords(high_notes, config)


__all__ = [
    "STOP_WORDS",
    "THEME_RULES",
    "extract_keywords",
    "extract_recurring_themes",
    "match_themes",
    "triggers_and_coping",
]
