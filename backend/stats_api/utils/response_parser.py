"""
Pull a JSON object out of a language model reply.

Claude has no strict JSON output mode, so the prompt demands JSON only and
this parser tolerates the usual wrappers: a markdown code fence, or a
sentence before/after the object.
"""
import json
import re
from typing import Any, Dict

from stats_api.core.exceptions import AIResponseParseError

_FENCE_RE = re.compile(r'```(?:json)?\s*(\{.*\})\s*```', re.DOTALL)


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON numbers
    raise AIResponseParseError(f"AI response contains non-finite number {name}")


def extract_json_object(text: str) -> Dict[str, Any]:
    """Return the first JSON object in `text`, or raise AIResponseParseError"""
    candidates = [text.strip()]

    fence = _FENCE_RE.search(text)
    if fence:
        candidates.append(fence.group(1))

    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate, parse_constant=_reject_constant)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise AIResponseParseError("AI response is not a valid JSON object")
