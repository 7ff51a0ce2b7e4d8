"""Tests for moodsense/insights/theme_extractor.py

Key behaviors:
- A theme mentioned in a single note is never "recurring"
- Frequency counts notes; lastMentioned is the newest match
- Ties go to the earlier rule in THEME_RULES, not alphabetical order
- Keyword mining drops stop words and one-off words
"""

from datetime import timedelta

from moodsense.insights.models import Sentiment
from moodsense.insights.theme_extractor import (
    THEME_RULES,
    extract_keywords,
    extract_recurring_themes,
    match_themes,
    triggers_and_coping,
)


class TestMatchThemes:
    def test_case_insensitive(self):
        assert ("work stress", Sentiment.NEGATIVE) in match_themes("My BOSS again")

    def test_one_note_many_themes(self):
        themes = [theme for theme, _ in match_themes("so tired and anxious about the deadline")]

        assert "work stress" in themes
        assert "anxiety" in themes
        assert "fatigue/sleep issues" in themes

    def test_themes_in_rule_order(self):
        themes = [theme for theme, _ in match_themes("anxious about the deadline")]
        assert themes.index("work stress") < themes.index("anxiety")


class TestRecurringThemes:
    def test_single_mention_is_not_reported(self, make_entries):
        entries = make_entries([5, 5, 5], notes=["my boss", "quiet", "nothing much"])

        assert extract_recurring_themes(entries) == []

    def test_two_mentions_reported_with_latest_time(self, make_entries):
        entries = make_entries([5, 5, 5], notes=["deadline at the office", None, "meeting ran long"])
        themes = extract_recurring_themes(entries)

        assert len(themes) == 1
        assert themes[0].theme == "work stress"
        assert themes[0].frequency == 2
        assert themes[0].sentiment == Sentiment.NEGATIVE
        assert themes[0].last_mentioned == entries[0].created_at

    def test_last_mentioned_independent_of_input_order(self, make_entries):
        entries = make_entries([5, 5], notes=["boss", "boss"])
        themes = extract_recurring_themes(list(reversed(entries)))

        assert themes[0].last_mentioned == entries[0].created_at

    def test_sorted_by_frequency(self, make_entries):
        notes = ["boss", "so tired", "so tired", "boss", "so tired"]
        themes = extract_recurring_themes(make_entries([5] * 5, notes=notes))

        assert [t.theme for t in themes] == ["fatigue/sleep issues", "work stress"]
        assert [t.frequency for t in themes] == [3, 2]

    def test_ties_follow_rule_order(self, make_entries):
        # fatigue is seen first, but the work rule comes first in the table
        notes = ["so tired", "so tired", "boss", "boss"]
        themes = extract_recurring_themes(make_entries([5] * 4, notes=notes))

        assert [t.theme for t in themes] == ["work stress", "fatigue/sleep issues"]

    def test_top_five_only(self, make_entries):
        note = "boss, procrastinating, overwhelmed, distracted, anxious, hopeless"
        themes = extract_recurring_themes(make_entries([5, 5], notes=[note, note]))

        assert len(themes) == 5
        expected = [theme for _, theme, _ in THEME_RULES if theme in {t.theme for t in themes}]
        assert [t.theme for t in themes] == expected

    def test_blank_notes_ignored(self, make_entries):
        entries = make_entries([5, 5, 5], notes=["   ", "", None])
        assert extract_recurring_themes(entries) == []


class TestKeywords:
    def test_repeated_words_only(self):
        notes = ["gardening today really", "gardening helps", "more gardening"]
        assert extract_keywords(notes) == ["gardening"]

    def test_stop_words_dropped(self):
        notes = ["really really feeling feeling"]
        assert extract_keywords(notes) == []

    def test_short_words_dropped(self):
        assert extract_keywords(["ran ran ran"]) == []

    def test_ties_keep_first_seen_order(self):
        notes = ["walking painting", "painting walking"]
        assert extract_keywords(notes) == ["walking", "painting"]

    def test_triggers_and_coping_split_by_score(self, make_entries):
        entries = make_entries(
            [2, 3, 8, 9, 5],
            notes=["commute chaos", "commute again", "climbing gym", "climbing outside", "commute"],
            step=timedelta(hours=6),
        )
        triggers, coping = triggers_and_coping(entries)

        assert triggers == ["commute"]
        assert coping == ["climbing"]
