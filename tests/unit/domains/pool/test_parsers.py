"""탐색 API 응답 파서 단위 테스트"""

import pytest

from app.domains.pool.parsers import (
    SortRef,
    coerce_id,
    extract_content_ids,
    parse_icon_urls,
    parse_sorts,
    select_sorts,
)


class TestCoerceId:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (123, 123),
            ("456", 456),
            (" 789 ", 789),
            (0, None),
            (-5, None),
            (True, None),
            ("abc", None),
            (None, None),
            (1.5, None),
        ],
    )
    def test_coerce_id(self, value, expected):
        assert coerce_id(value) == expected


class TestExtractContentIds:
    """응답 구조별 ID 추출 테스트"""

    def test_top_level_list(self):
        assert extract_content_ids([{"universeId": 1}, {"id": "2"}]) == [1, 2]

    def test_flat_field(self):
        data = {"games": [{"universeId": 10, "placeId": 100}, {"universeId": 11}]}

        assert extract_content_ids(data) == [10, 11]

    def test_universe_id_is_preferred_over_place_id(self):
        assert extract_content_ids({"experiences": [{"placeId": 9, "universeId": 3}]}) == [3]

    def test_nested_sorts(self):
        data = {
            "sorts": [
                {"experiences": [{"universeId": 1}, {"universeId": 2}]},
                {"games": [{"universeId": 2}, {"universeId": 3}]},
            ]
        }

        assert extract_content_ids(data) == [1, 2, 3]

    def test_recommendation_list_keeps_only_games(self):
        data = {
            "recommendationList": [
                {"contentType": "Game", "contentId": 5},
                {"contentType": "Ad", "contentId": 6},
                {"contentType": "Game", "contentId": "7"},
            ]
        }

        assert extract_content_ids(data) == [5, 7]

    def test_duplicates_removed_in_order(self):
        data = {"data": [{"id": 3}, {"id": 1}, {"id": 3}]}

        assert extract_content_ids(data) == [3, 1]

    def test_first_non_empty_shape_wins(self):
        """먼저 결과를 낸 구조만 사용"""
        data = {
            "games": [{"universeId": 1}],
            "sorts": [{"games": [{"universeId": 2}]}],
        }

        assert extract_content_ids(data) == [1]

    @pytest.mark.parametrize(
        "data",
        [None, "html", {}, {"games": "oops"}, {"sorts": [None, 1]}, [None, {"name": "x"}]],
    )
    def test_unrecognized_shapes_return_empty(self, data):
        assert extract_content_ids(data) == []


class TestSorts:
    """정렬 목록 테스트"""

    def test_parse_sorts_field_fallbacks(self):
        data = {
            "sorts": [
                {"topicId": 100, "topic": "Popular"},
                {"sortId": "top-rated", "sortDisplayName": "Top Rated"},
                {"token": "abc"},
                {"name": "no id"},
                "bogus",
            ]
        }

        assert parse_sorts(data) == [
            SortRef("100", "Popular"),
            SortRef("top-rated", "Top Rated"),
            SortRef("abc", "abc"),
        ]

    def test_select_sorts_prefers_tokens(self):
        sorts = [
            SortRef("a", "Fun With Friends"),
            SortRef("b", "Top Rated"),
            SortRef("c", "Popular"),
            SortRef("d", "Up And Coming"),
        ]

        chosen = select_sorts(sorts, ("Popular", "TopRated", "Top Rated"), limit=3)

        assert chosen == [sorts[2], sorts[1], sorts[0]]

    def test_select_sorts_limit(self):
        sorts = [SortRef(str(i), f"Sort {i}") for i in range(10)]

        assert len(select_sorts(sorts, (), limit=5)) == 5


class TestParseIconUrls:
    def test_only_completed_icons(self):
        data = {
            "data": [
                {"targetId": 1, "state": "Completed", "imageUrl": "https://a/1.png"},
                {"targetId": 2, "state": "Pending", "imageUrl": "https://a/2.png"},
                {"targetId": 3, "state": "Completed", "imageUrl": None},
                {"targetId": "4", "state": "Completed", "imageUrl": "https://a/4.png"},
            ]
        }

        assert parse_icon_urls(data) == {1: "https://a/1.png", 4: "https://a/4.png"}
