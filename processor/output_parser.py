"""
Output Parser - Parse and validate LLM JSON output

Model output is untrusted: every failure to find or decode the expected
structure is reported as data, never raised to the caller.
"""
import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger


DEFAULT_IMPACT_REASON = "Impact assessment unavailable"

_CODE_BLOCK_PATTERN = re.compile(r'```(?:json)?\s*\n?([\s\S]*?)\n?```')
_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')


def extract_json(text: str) -> Optional[str]:
    """Extract a JSON object string from text, handling markdown code blocks."""
    for pattern in (_CODE_BLOCK_PATTERN, _OBJECT_PATTERN):
        matches = pattern.findall(text)
        if matches:
            return max(matches, key=len).strip()
    return None


def fix_json(json_str: str) -> str:
    """Try to fix common JSON issues."""
    # Trailing commas
    fixed = re.sub(r',\s*}', '}', json_str)
    return re.sub(r',\s*]', ']', fixed)


def load_llm_json(text: Optional[str]) -> Any:
    """
    Decode the JSON object embedded in model output.

    Raises:
        ValueError: If no JSON can be extracted or decoded (including numbers
            too large for the interpreter and pathologically deep nesting)
    """
    json_str = extract_json(text or "")
    if not json_str:
        raise ValueError("Could not extract JSON from LLM output")

    try:
        return json.loads(json_str)
    except (ValueError, RecursionError) as e:
        first_error = e

    try:
        return json.loads(fix_json(json_str))
    except (ValueError, RecursionError):
        raise ValueError(f"JSON parse error: {first_error}") from None


def as_finite_number(value: Any) -> Optional[float]:
    """A JSON number (not bool) that fits a finite float, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class RankingEntry:
    """One validated ranking returned by the model."""
    index: int
    risk_score: float
    impact_reason: str


@dataclass
class ParsedRankings:
    """Parsed and validated ranking output."""
    entries: list[RankingEntry]
    raw_output: str
    parse_errors: list[str] = field(default_factory=list)
    structured: bool = True  # False when the expected JSON structure is missing


class RankingOutputParser:
    """
    Parse LLM ranking JSON of the form
    {"rankings": [{"id": 0, "riskScore": 7, "impactReason": "..."}]}.

    Handles:
    - JSON extraction from markdown code blocks
    - Index validation against the number of submitted articles
    - Numeric score validation
    - Duplicate ids (first one wins)
    """

    def parse(self, llm_output: Optional[str], item_count: int) -> ParsedRankings:
        """
        Parse LLM output string to validated ranking entries.

        Args:
            llm_output: Raw model output
            item_count: Number of articles sent to the model (valid ids are 0..item_count-1)
        """
        raw_output = llm_output or ""

        try:
            data = load_llm_json(raw_output)
        except ValueError as e:
            return self._malformed(raw_output, str(e))

        if not isinstance(data, dict):
            return self._malformed(raw_output, f"Expected JSON object, got {type(data).__name__}")

        rankings = data.get("rankings")
        if not isinstance(rankings, list):
            return self._malformed(raw_output, "Missing or invalid 'rankings' list")

        errors = []
        entries = []
        seen = set()

        for position, ranking in enumerate(rankings):
            entry, error = self._validate_entry(ranking, position, item_count)
            if error:
                errors.append(error)
                continue
            if entry.index in seen:
                errors.append(f"Ranking {position}: duplicate id {entry.index}")
                continue
            seen.add(entry.index)
            entries.append(entry)

        if errors:
            logger.debug(f"[OutputParser] Skipped {len(errors)} invalid rankings: {errors}")

        return ParsedRankings(entries=entries, raw_output=raw_output, parse_errors=errors)

    def _validate_entry(self, ranking: Any, position: int, item_count: int) -> tuple[Optional[RankingEntry], Optional[str]]:
        if not isinstance(ranking, dict):
            return None, f"Ranking {position}: not an object"

        index = self._as_index(ranking.get("id"))
        if index is None or not 0 <= index < item_count:
            return None, f"Ranking {position}: unknown id {str(ranking.get('id'))[:20]!r}"

        score = as_finite_number(ranking.get("riskScore"))
        if score is None:
            return None, f"Ranking {position}: non-numeric riskScore {str(ranking.get('riskScore'))[:20]!r}"

        reason = ranking.get("impactReason")
        if not isinstance(reason, str) or not reason.strip():
            reason = DEFAULT_IMPACT_REASON

        return RankingEntry(index=index, risk_score=score, impact_reason=reason.strip()), None

    @staticmethod
    def _as_index(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdecimal():
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    def _malformed(self, raw_output: str, error: str) -> ParsedRankings:
        return ParsedRankings(entries=[], raw_output=raw_output, parse_errors=[error], structured=False)
