"""Plan policy enforcement: UI placement, destructive gate, duplicate advisory"""
import logging
from typing import Iterable, Optional, Set, Tuple

from acidnade.coercer import renumber
from acidnade.config import Settings, settings
from acidnade.models import PlanResponse, PlanStep

logger = logging.getLogger(__name__)

# Screen containers and their visual children may not be created as standalone instances
UI_CLASSES = {
    "ScreenGui", "BillboardGui", "SurfaceGui",
    "Frame", "ScrollingFrame", "ViewportFrame",
    "TextLabel", "TextButton", "TextBox",
    "ImageLabel", "ImageButton",
}

UI_SCRIPT_CLASS = "LocalScript"
UI_SCRIPT_PARENT = "game.StarterPlayer.StarterPlayerScripts"

def ui_script_source(step: PlanStep) -> str:
    return (
        f"-- {step.name}: {step.className} built at runtime\n"
        "-- UI is created from a LocalScript, never as a standalone instance.\n\n"
        "local Players = game:GetService(\"Players\")\n"
        "local playerGui = Players.LocalPlayer:WaitForChild(\"PlayerGui\")\n\n"
        f"local root = Instance.new(\"{step.className}\")\n"
        f"root.Name = \"{step.name}\"\n"
        "root.Parent = playerGui\n"
    )

def rewrite_ui_step(step: PlanStep) -> PlanStep:
    """Turn a UI instance step into a LocalScript that builds it at runtime"""
    original = step.className
    step.properties = {"Source": ui_script_source(step)}
    step.description = f"Create {step.name} UI from a LocalScript (standalone {original} instances are not allowed)"
    step.prompt = step.description
    step.className = UI_SCRIPT_CLASS
    step.parentPath = UI_SCRIPT_PARENT
    return step

def apply_ui_policy(response: PlanResponse, policy: str) -> PlanResponse:
    kept = []
    for step in response.plan:
        if step.type == "delete" or step.className not in UI_CLASSES:
            kept.append(step)
            continue

        if policy == "drop":
            logger.info("Dropping standalone %s step %r", step.className, step.name)
            response.notes.append(f"Skipped {step.className} \"{step.name}\": UI must be created from a LocalScript")
        else:
            logger.info("Rewriting standalone %s step %r as %s", step.className, step.name, UI_SCRIPT_CLASS)
            response.notes.append(f"Rewrote {step.className} \"{step.name}\" as a {UI_SCRIPT_CLASS}")
            kept.append(rewrite_ui_step(step))

    response.plan = renumber(kept)
    return response

def note_duplicates(response: PlanResponse, recent: Iterable[Tuple[str, str]]) -> PlanResponse:
    """Advisory only: duplicates are noted, never removed"""
    seen: Set[Tuple[str, str]] = set(recent)
    if not seen:
        return response

    for step in response.plan:
        if step.type == "delete":
            continue
        if (step.name, step.parentPath) in seen:
            logger.warning("Step %d recreates %s.%s from recent history",
                           step.step, step.parentPath, step.name)
            response.notes.append(f"{step.parentPath}.{step.name} was created recently")
    return response

def apply_delete_gate(response: PlanResponse, threshold: int) -> PlanResponse:
    deletes = sum(1 for step in response.plan if step.type == "delete")

    if deletes >= threshold:
        response.needsApproval = True
        response.autoExecute = False
        response.message = (
            f"Warning: this plan deletes {deletes} objects. "
            "Review and approve it before anything runs."
        )
    else:
        response.needsApproval = False
    return response

def enforce(response: PlanResponse, prompt: str,
            config: Optional[Settings] = None,
            recent: Optional[Iterable[Tuple[str, str]]] = None) -> PlanResponse:
    """Finalize a coerced plan; mutates and returns response"""
    config = config or settings

    apply_ui_policy(response, config.ui_policy)
    note_duplicates(response, recent or [])
    apply_delete_gate(response, config.delete_approval_threshold)

    total = len(response.plan)
    response.stepsTotal = total
    response.sequentialExecution = total > 1
    response.progressText = f"0/{total} steps complete" if total else None

    logger.debug("Enforced plan for %r: %d steps, approval=%s",
                 prompt[:100], total, response.needsApproval)
    return response
