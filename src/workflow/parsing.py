"""Parser for the cooking agent's semi-structured reply.

The cooking agent is asked to emit, as the first non-blank line, a JSON header
such as:

    {"type": "single", "dishes": ["红烧肉"], "detailed": null}

followed by free text that may contain a `## CANDIDATES` section (one line of
`name | name | ...`) and, when nothing matched, an `## APPROX_METHOD` section.

`parse_analyzer_output` is the only place that reads this raw text. It is
lenient by construction: any malformed input degrades to documented defaults
(single query, no dishes, no candidates) and it never raises.
"""

import json
import re
from typing import Any, Optional

from src.models.models import AnalysisResult, QueryType
from src.utils.logger import logger


DEFAULT_SCAN_LINES = 5

_CANDIDATES_RE = re.compile(r"##\s*CANDIDATES[\r\n]+([^\n#]+)", re.IGNORECASE)
_APPROX_METHOD_RE = re.compile(
    r"##\s*APPROX_METHOD[\r\n]+(.*?)(?=\n##\s*[A-Z_ ]+|\s*\Z)",
    re.IGNORECASE | re.DOTALL,
)
_LIST_PREFIX_RE = re.compile(r"^[ \t]*(?:[-*]|\d+\.)[ \t]*", re.MULTILINE)


def find_header(text: str, scan_lines: int = DEFAULT_SCAN_LINES) -> Optional[dict[str, Any]]:
    """Return the first JSON object with a "type" key among the leading lines.

    Blank lines and comment lines (`#`, `//`) are skipped but still count
    towards `scan_lines`. Lines that look like the header but fail to parse are
    logged and skipped.
    """
    for index, raw_line in enumerate(text.splitlines()[:scan_lines]):
        line = raw_line.strip().lstrip("\ufeff")

        if not line or line.startswith("#") or line.startswith("//"):
            continue

        if not (line.startswith("{") and '"type"' in line):
            continue

        try:
            obj = json.loads(line)
        except ValueError as e:
            logger.warning(f"Header candidate on line {index + 1} is not valid JSON: {e}")
            continue

        if isinstance(obj, dict) and "type" in obj:
            return obj

    return None


def extract_candidates(text: str) -> list[str]:
    """Parse the `## CANDIDATES` section into a list of names (empty if absent)."""
    match = _CANDIDATES_RE.search(text)
    if not match:
        return []
    return [name.strip() for name in match.group(1).split("|") if name.strip()]


def extract_approx_method(text: str) -> Optional[str]:
    """Extract the `## APPROX_METHOD` block with list bullets and numbering removed."""
    match = _APPROX_METHOD_RE.search(text)
    if not match:
        return None
    method = _LIST_PREFIX_RE.sub("", match.group(1)).strip()
    return method or None


def _clean_dishes(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    dishes = []
    for item in value:
        if isinstance(item, str) and item.strip():
            dishes.append(item.strip())
    return dishes


def _clean_detailed(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_analyzer_output(text: Optional[str], scan_lines: int = DEFAULT_SCAN_LINES) -> AnalysisResult:
    """Turn the cooking agent's raw reply into an AnalysisResult.

    Args:
        text: Raw agent text (None is treated as empty).
        scan_lines: How many leading lines may hold the JSON header.

    Returns:
        AnalysisResult. Defaults when the header is missing or malformed:
        query_type=single, dishes=[], detailed_dish=None.
    """
    text = text or ""

    header = find_header(text, scan_lines)
    dishes: list[str] = []
    query_type = QueryType.SINGLE
    detailed_dish: Optional[str] = None

    if header is not None:
        dishes = _clean_dishes(header.get("dishes"))
        if header.get("type") in (QueryType.SINGLE.value, QueryType.COMBINATION.value):
            query_type = QueryType(header["type"])
        detailed_dish = _clean_detailed(header.get("detailed"))
        logger.debug(f"Parsed header: type={query_type.value}, dishes={dishes}, detailed={detailed_dish}")
    else:
        preview = text[:200].replace("\n", " ")
        logger.warning(f"No JSON header found in the first {scan_lines} lines, using defaults. Output: {preview}...")

    if detailed_dish and detailed_dish not in dishes:
        logger.warning(f"Detailed dish '{detailed_dish}' is not among identified dishes {dishes}")

    return AnalysisResult(
        query_type=query_type,
        dishes=dishes,
        detailed_dish=detailed_dish,
        candidates=extract_candidates(text),
        approx_method=extract_approx_method(text) if not dishes else None,
        json_found=header is not None,
    )
