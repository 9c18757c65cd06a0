"""Unit tests for the cooking agent reply parser."""

import pytest

from src.models.models import QueryType
from src.workflow.parsing import (
    extract_approx_method,
    extract_candidates,
    find_header,
    parse_analyzer_output,
)


class TestHeaderExtraction:
    """Tests for the first-line JSON header."""

    def test_single_dish_header(self):
        """Exact header line yields single type, one dish and no detailed dish."""
        result = parse_analyzer_output('{"type":"single","dishes":["红烧肉"],"detailed":null}\n## Recipe')
        assert result.query_type == QueryType.SINGLE
        assert result.dishes == ["红烧肉"]
        assert result.detailed_dish is None
        assert result.json_found is True

    def test_combination_header_with_detailed(self):
        result = parse_analyzer_output('{"type": "combination", "dishes": ["菜A", "菜B"], "detailed": "菜A"}')
        assert result.query_type == QueryType.COMBINATION
        assert result.dishes == ["菜A", "菜B"]
        assert result.detailed_dish == "菜A"

    def test_header_after_blank_and_comment_lines(self):
        text = '\n\n// metadata\n# header\n{"type":"single","dishes":["麻婆豆腐"],"detailed":"麻婆豆腐"}'
        result = parse_analyzer_output(text)
        assert result.dishes == ["麻婆豆腐"]
        assert result.detailed_dish == "麻婆豆腐"

    def test_header_with_byte_order_mark(self):
        result = parse_analyzer_output('\ufeff{"type":"single","dishes":["鱼香肉丝"],"detailed":null}')
        assert result.dishes == ["鱼香肉丝"]

    def test_header_beyond_scan_window_is_ignored(self):
        text = "\n".join(["intro"] * 5 + ['{"type":"single","dishes":["红烧肉"],"detailed":null}'])
        result = parse_analyzer_output(text)
        assert result.dishes == []
        assert result.json_found is False

    def test_custom_scan_window(self):
        text = "\n".join(["intro"] * 5 + ['{"type":"single","dishes":["红烧肉"],"detailed":null}'])
        assert parse_analyzer_output(text, scan_lines=6).dishes == ["红烧肉"]

    def test_invalid_line_is_skipped_and_next_valid_line_used(self):
        text = '{"type": broken\n{"type":"combination","dishes":["菜A"],"detailed":"菜A"}'
        result = parse_analyzer_output(text)
        assert result.query_type == QueryType.COMBINATION
        assert result.dishes == ["菜A"]

    def test_unknown_type_defaults_to_single(self):
        result = parse_analyzer_output('{"type":"menu","dishes":["菜A"],"detailed":null}')
        assert result.query_type == QueryType.SINGLE
        assert result.dishes == ["菜A"]

    def test_non_list_dishes_defaults_to_empty(self):
        result = parse_analyzer_output('{"type":"single","dishes":"红烧肉","detailed":null}')
        assert result.dishes == []
        assert result.json_found is True

    def test_empty_and_non_string_dishes_are_dropped(self):
        result = parse_analyzer_output('{"type":"single","dishes":["", null, 3, " 红烧肉 "],"detailed":""}')
        assert result.dishes == ["红烧肉"]
        assert result.detailed_dish is None

    def test_detailed_not_in_dishes_is_kept(self):
        """Detailed dish outside the dish list is trusted as produced, not rewritten."""
        result = parse_analyzer_output('{"type":"combination","dishes":["菜A"],"detailed":"菜Z"}')
        assert result.detailed_dish == "菜Z"

    def test_find_header_requires_type_key(self):
        assert find_header('{"dishes":["菜A"]}') is None

    def test_find_header_ignores_json_array(self):
        assert find_header('["type"]') is None


class TestMalformedOutput:
    """Malformed replies fall back to defaults without raising."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   \n\t\n",
            "Here is your recipe!\nStep 1...",
            '{"type": "single", "dishes": [',
            "{ stray } braces { everywhere }",
            '{"type"}\n{"type":}\n{"type"::1}\n{\n}',
            None,
        ],
    )
    def test_fallback_defaults(self, text):
        result = parse_analyzer_output(text)
        assert result.query_type == QueryType.SINGLE
        assert result.dishes == []
        assert result.detailed_dish is None
        assert result.json_found is False


class TestCandidates:
    """Tests for the ## CANDIDATES section."""

    def test_pipe_separated_candidates(self):
        assert extract_candidates("text\n## CANDIDATES\n菜A | 菜B | 菜C") == ["菜A", "菜B", "菜C"]

    def test_no_section_gives_empty_list(self):
        assert extract_candidates("## Recipe\nnothing else") == []

    def test_header_is_case_insensitive_and_crlf_tolerant(self):
        assert extract_candidates("## candidates\r\n菜A|菜B\r\n") == ["菜A", "菜B"]

    def test_empty_names_are_dropped(self):
        assert extract_candidates("## CANDIDATES\n菜A || 菜B |") == ["菜A", "菜B"]

    def test_candidates_found_independently_of_header(self):
        result = parse_analyzer_output("no json here\n## CANDIDATES\n菜A | 菜B")
        assert result.json_found is False
        assert result.candidates == ["菜A", "菜B"]


class TestApproxMethod:
    """Tests for the ## APPROX_METHOD section."""

    def test_bullets_and_numbers_are_stripped(self):
        text = "## APPROX_METHOD\n- Wash the greens\n* Heat the wok\n1. Add garlic\n2. Stir-fry"
        assert extract_approx_method(text) == "Wash the greens\nHeat the wok\nAdd garlic\nStir-fry"

    def test_block_ends_at_next_section(self):
        text = "## APPROX_METHOD\n- Boil water\n- Add noodles\n## CANDIDATES\n菜A | 菜B"
        assert extract_approx_method(text) == "Boil water\nAdd noodles"

    def test_absent_section(self):
        assert extract_approx_method("## NO_RECIPE_FOUND\nnothing") is None

    def test_only_extracted_when_no_dishes(self):
        with_dish = '{"type":"single","dishes":["菜A"],"detailed":null}\n## APPROX_METHOD\n- step'
        without_dish = '{"type":"single","dishes":[],"detailed":null}\n## APPROX_METHOD\n- step'
        assert parse_analyzer_output(with_dish).approx_method is None
        assert parse_analyzer_output(without_dish).approx_method == "step"
