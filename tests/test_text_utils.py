"""
Tests for text_utils.py - normalization and whole-word matching.
"""

import re

import pytest

from featurematch.text_utils import (
    alternation_pattern,
    has_whole_word,
    matches_alternation,
    normalize_task,
    whole_word_pattern,
)


class TestNormalizeTask:
    """Test the task text normalizer."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_task("Build a React Dashboard!") == "build a react dashboard"

    def test_keeps_hyphens(self):
        assert normalize_task("Set up a full-stack, real-time app.") == "set up a full-stack real-time app"

    def test_collapses_whitespace(self):
        assert normalize_task("  fix   the\tlogin\n\nbug  ") == "fix the login bug"

    def test_punctuation_becomes_space(self):
        assert normalize_task("react/vue") == "react vue"
        assert normalize_task("api(v2)") == "api v2"

    def test_keeps_underscores_and_digits(self):
        assert normalize_task("Migrate user_table to Postgres 16") == "migrate user_table to postgres 16"

    def test_empty_string(self):
        assert normalize_task("") == ""
        assert normalize_task("?!...") == ""

    def test_idempotent(self):
        once = normalize_task("Refactor the Auth-Service: cleanup & tests")
        assert normalize_task(once) == once


class TestWholeWordMatching:
    """Test whole-word matching of catalog keywords."""

    def test_rejects_substring_matches(self):
        assert not has_whole_word("build a rapid prototype", "api")
        assert not has_whole_word("add authentication", "auth")

    def test_accepts_whole_words(self):
        assert has_whole_word("call the api from the client", "api")
        assert has_whole_word("api", "api")

    def test_case_insensitive(self):
        assert has_whole_word("Deploy with Docker", "docker")

    def test_multi_word_phrases(self):
        assert has_whole_word("open a pull request", "pull request")
        assert not has_whole_word("pull the request", "pull request")

    def test_hyphen_counts_as_boundary(self):
        assert has_whole_word("a real-time dashboard", "real-time")
        assert has_whole_word("a real-time dashboard", "real")

    def test_special_characters_are_literal(self):
        assert has_whole_word("edit claude.md today", "claude.md")
        assert not has_whole_word("edit claudexmd today", "claude.md")

    def test_empty_word_never_matches(self):
        assert not has_whole_word("anything", "")

    def test_patterns_are_cached(self):
        assert whole_word_pattern("react") is whole_word_pattern("react")


class TestAlternationMatching:
    """Test matching of task pattern alternations."""

    def test_matches_any_alternative(self):
        assert matches_alternation("please debug this", "fix|debug|resolve")
        assert matches_alternation("resolve the issue", "fix|debug|resolve")

    def test_alternatives_need_word_boundaries(self):
        assert not matches_alternation("a prefix to add", "fix|debug")
        assert not matches_alternation("rebuild", "build")

    def test_character_classes_are_allowed(self):
        assert matches_alternation("analyse the logs", "analy[sz]e")
        assert matches_alternation("analyze the logs", "analy[sz]e")

    def test_invalid_pattern_raises(self):
        with pytest.raises(re.error):
            alternation_pattern("build|(")
