"""Data models"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

StepType = Literal["create", "modify", "delete"]
STEP_TYPES = ("create", "modify", "delete")

class PlanStep(BaseModel):
    """One create/modify/delete operation for the host editor"""
    step: int
    description: str
    prompt: Optional[str] = None
    type: StepType = "create"
    className: str
    name: str
    parentPath: str
    properties: Dict[str, Any] = Field(default_factory=dict)
    reasoning: Optional[str] = None

class PlanResponse(BaseModel):
    """Normalized plan returned to the host editor"""
    type: Literal["plan"] = "plan"
    message: str
    thinking: Optional[str] = None
    plan: List[PlanStep] = Field(default_factory=list)
    stepsTotal: int = 0
    autoExecute: bool = True
    needsApproval: bool = False
    sequentialExecution: Optional[bool] = None
    progressText: Optional[str] = None
    estimatedTime: Optional[str] = None
    canUndo: Optional[bool] = None
    notes: List[str] = Field(default_factory=list)

class Idea(BaseModel):
    id: int
    title: str
    description: str
    features: List[str] = Field(default_factory=list)
    complexity: Literal["Simple", "Medium", "Complex"] = "Medium"
    prompt: str

class IdeasResponse(BaseModel):
    type: Literal["ideas"] = "ideas"
    thinking: Optional[str] = None
    message: str
    ideas: List[Idea] = Field(default_factory=list)

class Session(BaseModel):
    """Process-local session memory"""
    id: str
    history: List[PlanStep] = Field(default_factory=list)
    creation_log: List[List[PlanStep]] = Field(default_factory=list)
    last_ideas: Optional[Dict[str, Any]] = None
    last_plan: Optional[Dict[str, Any]] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def can_undo(self) -> bool:
        return len(self.creation_log) > 0

class AIRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    prompt: Optional[str] = None
    context: Optional[Any] = None
    sessionId: Optional[str] = None
    mode: Optional[str] = None
    selectedIdea: Optional[str] = None

class SessionRequest(BaseModel):
    sessionId: Optional[str] = None
