"""Tests for key unquoting, normalisation and "did you mean" suggestions."""

from __future__ import annotations

import pytest

from json_tree_nav.tree.keys import key_similarity, normalize_key, suggest_keys, unquote


class TestUnquote:
    def test_plain_text_unchanged(self) -> None:
        assert unquote("name") == "name"

    def test_double_quotes_use_json_escapes(self) -> None:
        assert unquote('"a\\nb"') == "a\nb"
        assert unquote('"\\u00e9"') == "é"

    def test_single_quotes_collapse_doubled_quotes(self) -> None:
        assert unquote("'it''s'") == "it's"

    def test_lone_quote_unchanged(self) -> None:
        assert unquote('"') == '"'


class TestNormalizeKey:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("userName", "user name"),
            ("UserName", "user name"),
            ("user_name", "user name"),
            ("user-name", "user name"),
            ("APIKey", "api key"),
            ("name", "name"),
        ],
    )
    def test_conventions_collapse(self, key: str, expected: str) -> None:
        assert normalize_key(key) == expected


class TestSuggestKeys:
    def test_identical_after_normalisation_scores_one(self) -> None:
        assert key_similarity("userName", "user_name") == pytest.approx(1.0)

    def test_unrelated_keys_score_low(self) -> None:
        assert key_similarity("abi", "metadata") < 0.5

    def test_typo_is_suggested(self) -> None:
        assert suggest_keys("abj", ["abi", "meta"]) == ["abi"]

    def test_convention_mismatch_is_suggested_first(self) -> None:
        hints = suggest_keys("userName", ["user_names", "user_name", "id"])
        assert hints[0] == "user_name"
        assert "id" not in hints

    def test_exact_match_is_excluded(self) -> None:
        assert suggest_keys("abi", ["abi"]) == []

    def test_threshold_is_respected(self) -> None:
        assert suggest_keys("abj", ["abi"], threshold=1.0) == []
