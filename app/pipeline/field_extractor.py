"""
Field extraction: reconstructed lines -> classified ResultRecords.

A line belongs to a target code when it starts with that code as a whole
token. The amount attributed to the code is the rightmost amount on the line.
"""

import itertools
import re
from typing import Iterable, Optional, Sequence

import structlog

from app.models.enums import RecordStatus, SentinelCode
from app.pipeline.amount_parser import last_amount
from app.schemas.contracts import ResultRecord

logger = structlog.get_logger(__name__)


MSG_AMOUNT_NOT_FOUND = "Valor não identificado na linha."
MSG_CODES_NOT_FOUND = "Códigos não encontrados."
MSG_FATAL = "Erro fatal: {detail}"

_WHITESPACE = re.compile(r"\s+")

# Shared across every document and batch of the process
_record_sequence = itertools.count(1)


def next_record_id(filename: str, code: str, kind: str) -> str:
    """Unique for the lifetime of the process, concurrent batches included."""
    return f"{filename}-{code}-{kind}-{next(_record_sequence)}"


def normalize_line(line: str) -> str:
    """Collapse whitespace runs into single spaces and trim."""
    return _WHITESPACE.sub(" ", line).strip()


def _code_pattern(code: str) -> re.Pattern:
    return re.compile(rf"^\s*{re.escape(code)}\b")


def line_starts_with_code(line: str, code: str) -> bool:
    """
    Anchored match: '1162 IRRF' matches 1162, '11621 ...' and 'x 1162' do not.
    """
    return _code_pattern(code).match(line) is not None


def extract_records(
    filename: str,
    lines: Sequence[str],
    target_codes: Iterable[str],
) -> list[ResultRecord]:
    """
    Scan every line for every target code, codes in configured order.

    Returns one success or warning record per (line, code) match. A document
    with no match at all gets a single error record instead.
    """
    patterns = [(code, _code_pattern(code)) for code in target_codes]
    debug_lines = list(lines)
    records: list[ResultRecord] = []

    for line in lines:
        clean_line = normalize_line(line)

        for code, pattern in patterns:
            if not pattern.match(clean_line):
                continue

            match = last_amount(clean_line)
            if match is not None:
                records.append(ResultRecord(
                    id=next_record_id(filename, code, "ok"),
                    filename=filename,
                    code=code,
                    value=match.amount,
                    raw_line=clean_line,
                    status=RecordStatus.SUCCESS,
                ))
            else:
                logger.info("amount_not_found", filename=filename, code=code, line=clean_line)
                records.append(ResultRecord(
                    id=next_record_id(filename, code, "warning"),
                    filename=filename,
                    code=code,
                    value=0.0,
                    raw_line=clean_line,
                    status=RecordStatus.WARNING,
                    message=MSG_AMOUNT_NOT_FOUND,
                    debug_text=debug_lines,
                ))

    if not records:
        logger.info("codes_not_found", filename=filename, line_count=len(debug_lines))
        return [no_codes_record(filename, debug_lines)]

    return records


def no_codes_record(filename: str, debug_lines: list[str]) -> ResultRecord:
    return ResultRecord(
        id=next_record_id(filename, SentinelCode.NOT_APPLICABLE.value, "error"),
        filename=filename,
        code=SentinelCode.NOT_APPLICABLE.value,
        value=0.0,
        raw_line="",
        status=RecordStatus.ERROR,
        message=MSG_CODES_NOT_FOUND,
        debug_text=debug_lines,
    )


def fatal_record(filename: str, detail: Optional[str]) -> ResultRecord:
    """Error record for a document that could not be loaded or read."""
    return ResultRecord(
        id=next_record_id(filename, SentinelCode.FATAL.value, "fatal"),
        filename=filename,
        code=SentinelCode.FATAL.value,
        value=0.0,
        raw_line="",
        status=RecordStatus.ERROR,
        message=MSG_FATAL.format(detail=detail or "Desconhecido"),
        debug_text=[],
    )
