"""Session store - process-local memory with TTL eviction"""
import logging
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from acidnade.config import settings
from acidnade.models import PlanResponse, PlanStep, Session

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"

class SessionStore:
    """Session store interface"""

    async def get(self, session_id: str) -> Session:
        """Get session, creating it on first reference"""
        raise NotImplementedError

    async def peek(self, session_id: str) -> Optional[Session]:
        """Get session without creating it"""
        raise NotImplementedError

    async def put(self, session: Session):
        raise NotImplementedError

    async def evict(self, session_id: str) -> bool:
        raise NotImplementedError

class InMemorySessionStore(SessionStore):
    """Dict-backed store; sessions idle past the TTL are dropped on access"""

    def __init__(self, ttl_seconds: Optional[int] = None,
                 history_limit: Optional[int] = None,
                 undo_limit: Optional[int] = None,
                 clock=time.monotonic):
        self.ttl_seconds = settings.session_ttl_seconds if ttl_seconds is None else ttl_seconds
        self.history_limit = settings.session_history_limit if history_limit is None else history_limit
        self.undo_limit = settings.undo_log_limit if undo_limit is None else undo_limit
        self.clock = clock

        self.sessions: Dict[str, Session] = {}
        self.touched: Dict[str, float] = {}

    def purge_expired(self) -> int:
        """Drop idle sessions, return how many were dropped"""
        if self.ttl_seconds <= 0:
            return 0
        cutoff = self.clock() - self.ttl_seconds
        expired = [sid for sid, seen in self.touched.items() if seen < cutoff]
        for sid in expired:
            del self.sessions[sid]
            del self.touched[sid]
        if expired:
            logger.info("Evicted %d idle sessions", len(expired))
        return len(expired)

    async def get(self, session_id: str) -> Session:
        self.purge_expired()
        session = self.sessions.get(session_id)
        if session is None:
            session = Session(id=session_id)
            self.sessions[session_id] = session
            logger.debug("Created session %s", session_id)
        self.touched[session_id] = self.clock()
        return session

    async def peek(self, session_id: str) -> Optional[Session]:
        self.purge_expired()
        return self.sessions.get(session_id)

    async def put(self, session: Session):
        """Save session, trimming history and undo log to their caps"""
        session.history = session.history[-self.history_limit:] if self.history_limit > 0 else []
        session.creation_log = session.creation_log[-self.undo_limit:] if self.undo_limit > 0 else []
        session.updated_at = datetime.now(timezone.utc)
        self.sessions[session.id] = session
        self.touched[session.id] = self.clock()

    async def evict(self, session_id: str) -> bool:
        self.touched.pop(session_id, None)
        return self.sessions.pop(session_id, None) is not None

def recent_creations(session: Session) -> List[Tuple[str, str]]:
    return [(step.name, step.parentPath) for step in session.history]

def record_plan(session: Session, response: PlanResponse, source_prompt: str):
    """Remember a returned plan; non-delete steps become one undo entry"""
    session.last_plan = {
        "originalIdea": source_prompt,
        "plan": [step.model_dump(exclude_none=True) for step in response.plan],
        "timestamp": int(time.time() * 1000),
    }

    created = [step.model_copy(deep=True) for step in response.plan if step.type != "delete"]
    if not created:
        return
    session.creation_log.append(created)
    session.history.extend(created)

def forget_history(session: Session, undone: List[PlanStep]):
    """Drop the newest history entry for each undone (name, parentPath)"""
    for step in undone:
        key = (step.name, step.parentPath)
        for index in range(len(session.history) - 1, -1, -1):
            entry = session.history[index]
            if (entry.name, entry.parentPath) == key:
                del session.history[index]
                break

def build_undo_plan(session: Session) -> Optional[PlanResponse]:
    """Pop the last logged plan and return its inverse, or None if nothing is logged"""
    if not session.creation_log:
        return None

    created = session.creation_log.pop()
    forget_history(session, created)
    undo_steps = []
    for original in reversed(created):
        undo_steps.append(PlanStep(
            step=len(undo_steps) + 1,
            description=f"Delete {original.name} (undoing)",
            prompt=f"Delete {original.name} to undo previous action",
            type="delete",
            className=original.className,
            name=original.name,
            parentPath=original.parentPath,
            properties={},
            reasoning="Reverting previous creation",
        ))

    return PlanResponse(
        message=f"Undoing last action ({len(created)} items)",
        plan=undo_steps,
        stepsTotal=len(undo_steps),
        autoExecute=False,
        needsApproval=True,
        sequentialExecution=len(undo_steps) > 1,
        canUndo=session.can_undo,
    )
