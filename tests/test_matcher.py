"""
Unit tests for the keyword-overlap matcher.
"""

import pytest

from src.core.catalog import EmptyQuery, parse_catalog, rank


class TestRank:
    """Tests for rank()."""

    def test_all_query_words_matched_scores_100(self):
        """Word order does not matter."""
        catalog = parse_catalog([{"title": "Biology", "items": [{"label": "MTG", "key": "k"}]}])

        results = rank("mtg biology", catalog)

        assert len(results) == 1
        assert results[0].rank == 100
        assert results[0].item.key == "k"
        assert results[0].category_title == "Biology"

    def test_partial_match_is_rounded_percentage(self, catalog):
        results = rank("mtg chemistry physics", catalog)

        ranks = {r.item.key: r.rank for r in results}
        # "mtg" + "physics" out of 3 words
        assert ranks["mtg_phy_pyq"] == 67
        assert ranks["mtg_bio_fingertips"] == 33
        assert ranks["hcv_1"] == 33

    def test_items_without_overlap_are_excluded(self, catalog):
        results = rank("verma", catalog)

        assert [r.item.key for r in results] == ["hcv_1"]
        assert all(r.rank > 0 for r in results)

    def test_sorted_descending_and_stable_on_ties(self, catalog):
        results = rank("mtg physics", catalog)

        assert [r.item.key for r in results] == ["mtg_phy_pyq", "mtg_bio_fingertips", "hcv_1"]
        assert [r.rank for r in results] == [100, 50, 50]

    def test_case_insensitive(self, catalog):
        assert rank("NCERT", catalog)[0].item.key == "ncert_bio"

    def test_no_matches_returns_empty_list(self, catalog):
        assert rank("astronomy", catalog) == []

    def test_repeated_query_words_count_once(self, catalog):
        results = rank("mtg mtg", catalog)

        assert {r.rank for r in results} == {100}

    def test_deterministic(self, catalog):
        assert rank("mtg notes physics", catalog) == rank("mtg notes physics", catalog)

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_empty_query_raises(self, catalog, query):
        with pytest.raises(EmptyQuery):
            rank(query, catalog)
