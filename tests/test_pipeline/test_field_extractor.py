"""
Tests for code/amount extraction over reconstructed lines.
"""

import pytest

from app.models.enums import RecordStatus
from app.pipeline.field_extractor import (
    MSG_AMOUNT_NOT_FOUND,
    MSG_CODES_NOT_FOUND,
    extract_records,
    fatal_record,
    line_starts_with_code,
    normalize_line,
)

CODES = ["5952", "1162", "1708"]


class TestNormalizeLine:

    def test_collapses_whitespace(self):
        assert normalize_line("  1162\t IRRF   9.952,00 ") == "1162 IRRF 9.952,00"


class TestLineStartsWithCode:

    def test_code_then_text(self):
        assert line_starts_with_code("1162 Retenção 9.952,00", "1162")

    def test_longer_number_rejected(self):
        assert not line_starts_with_code("11621 9952,00", "1162")

    def test_code_mid_line_rejected(self):
        assert not line_starts_with_code("Ref 1162 9.952,00", "1162")

    def test_code_alone(self):
        assert line_starts_with_code("1708", "1708")

    def test_punctuation_boundary(self):
        assert line_starts_with_code("1708-IRRF 10,00", "1708")


class TestExtractRecords:

    def test_success(self):
        records = extract_records("a.pdf", ["1162 Retenção 9.952,00"], CODES)
        assert len(records) == 1
        r = records[0]
        assert r.status == RecordStatus.SUCCESS
        assert r.code == "1162"
        assert r.value == pytest.approx(9952.00)
        assert r.raw_line == "1162 Retenção 9.952,00"
        assert r.filename == "a.pdf"
        assert r.message is None

    def test_boundary_violation_is_no_match(self):
        records = extract_records("a.pdf", ["11621 9952,00"], CODES)
        assert len(records) == 1
        assert records[0].status == RecordStatus.ERROR

    def test_rightmost_amount_is_total(self):
        records = extract_records("a.pdf", ["1162 ref 10,00 total 2.500,00"], CODES)
        assert records[0].value == pytest.approx(2500.00)

    def test_raw_line_is_normalized(self):
        records = extract_records("a.pdf", ["1162   IRRF    100,00"], CODES)
        assert records[0].raw_line == "1162 IRRF 100,00"

    def test_missing_amount_is_warning(self):
        lines = ["header", "1708 IRRF sem valor"]
        records = extract_records("a.pdf", lines, CODES)
        assert len(records) == 1
        r = records[0]
        assert r.status == RecordStatus.WARNING
        assert r.value == 0
        assert r.message == MSG_AMOUNT_NOT_FOUND
        assert r.raw_line == "1708 IRRF sem valor"
        assert r.debug_text == lines

    def test_no_match_single_error(self):
        lines = ["nothing", "here 100,00", "x 1162 5,00"]
        records = extract_records("a.pdf", lines, CODES)
        assert len(records) == 1
        r = records[0]
        assert r.status == RecordStatus.ERROR
        assert r.code == "N/A"
        assert r.message == MSG_CODES_NOT_FOUND
        assert r.raw_line == ""
        assert r.debug_text == lines

    def test_empty_document_single_error(self):
        records = extract_records("a.pdf", [], CODES)
        assert len(records) == 1
        assert records[0].status == RecordStatus.ERROR
        assert records[0].debug_text == []

    def test_warning_does_not_block_other_lines(self):
        lines = ["1162 sem valor", "5952 CSLL 1.000,00", "1708 IRRF 50,00"]
        records = extract_records("a.pdf", lines, CODES)
        assert [r.status for r in records] == [
            RecordStatus.WARNING, RecordStatus.SUCCESS, RecordStatus.SUCCESS,
        ]
        assert [r.code for r in records] == ["1162", "5952", "1708"]

    def test_record_count_matches_line_code_pairs(self):
        lines = [
            "5952 a 1,00",
            "1162 b",
            "noise",
            "1162 c 3,00",
            "17080 d 4,00",
        ]
        records = extract_records("a.pdf", lines, CODES)
        expected_pairs = sum(
            1 for line in lines for code in CODES if line_starts_with_code(line, code)
        )
        assert len(records) == expected_pairs == 3
        assert all(r.status != RecordStatus.ERROR for r in records)

    def test_line_matching_two_codes_reports_both(self):
        records = extract_records("a.pdf", ["1162-1 x 5,00"], ["1162-1", "1162"])
        assert [r.code for r in records] == ["1162-1", "1162"]
        assert all(r.value == pytest.approx(5.0) for r in records)

    def test_custom_codes(self):
        records = extract_records("a.pdf", ["0561 IRPF 77,10"], ["0561"])
        assert records[0].code == "0561"
        assert records[0].value == pytest.approx(77.10)

    def test_success_carries_no_debug_text(self):
        records = extract_records("a.pdf", ["1162 x 5,00"], CODES)
        assert records[0].debug_text is None

    def test_ids_unique(self):
        lines = ["1162 a 1,00", "1162 b 2,00", "1162 c"]
        first = extract_records("a.pdf", lines, CODES)
        second = extract_records("a.pdf", lines, CODES)
        ids = [r.id for r in first + second]
        assert len(set(ids)) == len(ids)

    def test_idempotent_apart_from_ids(self):
        lines = ["1162 a 1,00", "5952 b"]
        first = extract_records("a.pdf", lines, CODES)
        second = extract_records("a.pdf", lines, CODES)
        assert [r.model_dump(exclude={"id"}) for r in first] == [
            r.model_dump(exclude={"id"}) for r in second
        ]


class TestFatalRecord:

    def test_shape(self):
        r = fatal_record("bad.pdf", "boom")
        assert r.status == RecordStatus.ERROR
        assert r.code == "ERROR"
        assert r.value == 0
        assert "boom" in r.message
        assert r.debug_text == []

    def test_missing_detail(self):
        assert "Desconhecido" in fatal_record("bad.pdf", None).message
