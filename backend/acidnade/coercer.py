"""Coerce loosely-typed parsed values into well-formed responses"""
import re
import time
from typing import Any, Dict, List, Optional

from acidnade.config import Settings, settings
from acidnade.fallbacks import GENERIC_MESSAGE
from acidnade.intent import suggests_edit
from acidnade.models import STEP_TYPES, Idea, IdeasResponse, PlanResponse, PlanStep

COMPLEXITIES = ("Simple", "Medium", "Complex")
# Only ever produced by the short-description default
DEFAULT_DESCRIPTION = re.compile(r"Step \d+")

def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""

def _step_type(raw: Dict[str, Any]) -> str:
    value = _text(raw.get("type")).lower()
    if value in STEP_TYPES:
        return value
    hint = f"{_text(raw.get('description'))} {_text(raw.get('prompt'))}"
    return "modify" if suggests_edit(hint) else "create"

def coerce_step(raw: Dict[str, Any], number: int, config: Settings, stamp: int) -> PlanStep:
    """Build a fully-populated step; every missing field gets a default"""
    description = _text(raw.get("description"))
    if len(description) < config.min_description_length:
        description = f"Step {number}"

    properties = raw.get("properties")
    reasoning = _text(raw.get("reasoning")) or None

    return PlanStep(
        step=number,
        description=description,
        prompt=_text(raw.get("prompt")) or description,
        type=_step_type(raw),
        className=_text(raw.get("className")) or config.default_class_name,
        name=_text(raw.get("name")) or f"NewScript_{stamp}",
        parentPath=_text(raw.get("parentPath")) or config.default_parent_path,
        properties=dict(properties) if isinstance(properties, dict) else {},
        reasoning=reasoning,
    )

def coerce(parsed: Any, config: Optional[Settings] = None) -> PlanResponse:
    """Normalize a parsed generation result into a PlanResponse"""
    config = config or settings
    data = parsed if isinstance(parsed, dict) else {}

    raw_plan = data.get("plan")
    raw_steps = [item for item in raw_plan if isinstance(item, dict)] if isinstance(raw_plan, list) else []

    stamp = int(time.time() * 1000)
    steps = [coerce_step(raw, index + 1, config, stamp) for index, raw in enumerate(raw_steps)]

    auto_execute = data.get("autoExecute")

    return PlanResponse(
        message=_text(data.get("message")) or GENERIC_MESSAGE,
        thinking=_text(data.get("thinking")) or None,
        plan=steps,
        stepsTotal=len(steps),
        autoExecute=auto_execute if isinstance(auto_execute, bool) else True,
        estimatedTime=_text(data.get("estimatedTime")) or None,
    )

def renumber(steps: List[PlanStep]) -> List[PlanStep]:
    """Renumber 1..N; defaulted "Step N" descriptions follow the new number"""
    for index, step in enumerate(steps):
        if DEFAULT_DESCRIPTION.fullmatch(step.description):
            step.description = f"Step {index + 1}"
            if step.prompt and DEFAULT_DESCRIPTION.fullmatch(step.prompt):
                step.prompt = step.description
        step.step = index + 1
    return steps

def coerce_ideas(parsed: Any, prompt: str) -> IdeasResponse:
    """Normalize an ideas-mode result; ids are renumbered 1..N"""
    data = parsed if isinstance(parsed, dict) else {}
    raw_ideas = data.get("ideas")
    raw_ideas = [item for item in raw_ideas if isinstance(item, dict)] if isinstance(raw_ideas, list) else []

    ideas = []
    for index, raw in enumerate(raw_ideas, 1):
        features = raw.get("features")
        complexity = _text(raw.get("complexity")).capitalize()
        title = _text(raw.get("title")) or f"Idea {index}"
        ideas.append(Idea(
            id=index,
            title=title,
            description=_text(raw.get("description")) or title,
            features=[_text(f) for f in features if _text(f)] if isinstance(features, list) else [],
            complexity=complexity if complexity in COMPLEXITIES else "Medium",
            prompt=_text(raw.get("prompt")) or f"{title}: {prompt}",
        ))

    return IdeasResponse(
        thinking=_text(data.get("thinking")) or None,
        message=_text(data.get("message")) or "Here are some ideas for your request:",
        ideas=ideas,
    )
