from processor.output_parser import DEFAULT_IMPACT_REASON, RankingOutputParser
from tests.conftest import rankings_json


parser = RankingOutputParser()


def test_parse_plain_json():
    parsed = parser.parse(rankings_json((0, 7, "Supply shock"), (2, 4.5, "Minor")), item_count=3)

    assert parsed.structured
    assert [(e.index, e.risk_score, e.impact_reason) for e in parsed.entries] == [
        (0, 7.0, "Supply shock"),
        (2, 4.5, "Minor"),
    ]
    assert parsed.parse_errors == []


def test_parse_markdown_code_block():
    output = "Here you go:\n```json\n" + rankings_json((1, 6, "Tariffs")) + "\n```"
    parsed = parser.parse(output, item_count=2)

    assert parsed.structured
    assert parsed.entries[0].index == 1


def test_parse_fixes_trailing_commas():
    output = '{"rankings": [{"id": 0, "riskScore": 5, "impactReason": "x"},],}'
    parsed = parser.parse(output, item_count=1)

    assert parsed.structured
    assert len(parsed.entries) == 1


def test_non_json_is_malformed():
    parsed = parser.parse("I cannot rank these articles.", item_count=3)

    assert not parsed.structured
    assert parsed.entries == []
    assert parsed.parse_errors


def test_missing_rankings_is_malformed():
    assert not parser.parse('{"articles": []}', item_count=3).structured
    assert not parser.parse('{"rankings": "none"}', item_count=3).structured
    assert not parser.parse(None, item_count=3).structured


def test_invalid_entries_are_skipped():
    output = """{"rankings": [
        {"id": 5, "riskScore": 7, "impactReason": "out of range"},
        {"id": 0, "riskScore": true, "impactReason": "bool score"},
        {"id": 0, "riskScore": "high", "impactReason": "text score"},
        {"id": "1", "riskScore": 6, "impactReason": "string id"},
        {"id": 1, "riskScore": 9, "impactReason": "duplicate"},
        {"id": 2.0, "riskScore": 3},
        "not an object"
    ]}"""
    parsed = parser.parse(output, item_count=3)

    assert parsed.structured
    assert [(e.index, e.risk_score) for e in parsed.entries] == [(1, 6.0), (2, 3.0)]
    assert parsed.entries[1].impact_reason == DEFAULT_IMPACT_REASON
    assert len(parsed.parse_errors) == 5


def test_empty_rankings_list_is_structured():
    parsed = parser.parse('{"rankings": []}', item_count=3)

    assert parsed.structured
    assert parsed.entries == []


def test_oversized_score_is_skipped_not_raised():
    output = '{"rankings": [{"id": 0, "riskScore": ' + "9" * 400 + ', "impactReason": "x"}, ' \
             '{"id": 1, "riskScore": 1e400, "impactReason": "y"}, ' \
             '{"id": 2, "riskScore": 6, "impactReason": "z"}]}'
    parsed = parser.parse(output, item_count=3)

    assert parsed.structured
    assert [e.index for e in parsed.entries] == [2]
    assert len(parsed.parse_errors) == 2


def test_number_beyond_interpreter_limit_is_malformed():
    output = '{"rankings": [{"id": 0, "riskScore": ' + "9" * 5000 + ', "impactReason": "x"}]}'
    parsed = parser.parse(output, item_count=1)

    assert not parsed.structured
    assert parsed.entries == []


def test_deeply_nested_output_is_malformed():
    parsed = parser.parse('{"rankings": ' + "[" * 100000 + "]" * 100000 + "}", item_count=1)

    assert not parsed.structured


def test_oversized_string_id_is_skipped():
    output = '{"rankings": [{"id": "' + "7" * 5000 + '", "riskScore": 5}]}'
    parsed = parser.parse(output, item_count=1)

    assert parsed.structured
    assert parsed.entries == []
