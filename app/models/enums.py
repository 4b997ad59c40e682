"""
Enums shared by the pipeline, the API schemas and the spreadsheet export.
Values are part of the JSON output; do not rename them.
"""

from enum import Enum


class RecordStatus(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class TaxCode(str, Enum):
    """Withholding codes printed at the start of a DARF composition line."""
    CSLL_PIS_COFINS = "5952"
    IRRF_PJ = "1162"
    IRRF_1708 = "1708"


DEFAULT_TARGET_CODES = [code.value for code in TaxCode]


class SentinelCode(str, Enum):
    """Codes used on document-level error records."""
    NOT_APPLICABLE = "N/A"
    FATAL = "ERROR"


class DocumentOutcome(str, Enum):
    EXTRACTED = "extracted"
    NO_CODES = "no_codes"
    FAILED = "failed"
