"""Generated-text parser: strip code fences, one JSON decode, fallback"""
import copy
import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

# ```json, ```lua, bare ``` ... at either end of the text
FENCE_OPEN = re.compile(r'^\s*```[\w+-]*[ \t]*\n?')
FENCE_CLOSE = re.compile(r'\n?```\s*$')

def strip_fences(raw_text: str) -> str:
    text = (raw_text or "").strip()
    text = FENCE_OPEN.sub("", text)
    text = FENCE_CLOSE.sub("", text)
    return text.strip()

def parse(raw_text: str, fallback: Dict[str, Any]) -> Dict[str, Any]:
    """Decode generated text as a JSON object or return a copy of fallback"""
    cleaned = strip_fences(raw_text)

    try:
        data = json.loads(cleaned)
    except (TypeError, ValueError) as e:
        logger.warning("JSON parse failed, using fallback: %s", e)
        return copy.deepcopy(fallback)

    if not isinstance(data, dict):
        logger.warning("Generated JSON is a %s, not an object; using fallback",
                       type(data).__name__)
        return copy.deepcopy(fallback)

    return data
