"""Request pipeline: summarize, generate, parse, coerce, enforce, remember"""
import logging
import time
import uuid
from typing import Optional, Union

from acidnade import fallbacks
from acidnade.coercer import coerce, coerce_ideas
from acidnade.config import Settings, settings
from acidnade.errors import GenerationError
from acidnade.generation import Generator
from acidnade.intent import Intent, classify
from acidnade.models import AIRequest, IdeasResponse, PlanResponse
from acidnade.policy import enforce
from acidnade.prompts import build_ideas_prompt, build_plan_prompt
from acidnade.response_parser import parse
from acidnade.sessions import (
    DEFAULT_SESSION_ID, SessionStore, build_undo_plan, recent_creations, record_plan
)
from acidnade.summarizer import summarize

logger = logging.getLogger(__name__)

MODES = ("ideas", "plan")

class PlanService:
    """Turns an /ai request into a plan or ideas response"""

    def __init__(self, generator: Generator, store: SessionStore,
                 config: Optional[Settings] = None):
        self.generator = generator
        self.store = store
        self.config = config or settings

    def resolve_mode(self, request: AIRequest, intent: Intent) -> Optional[str]:
        if request.mode is None or request.mode == "":
            return "ideas" if intent == Intent.IDEAS_REQUEST else "plan"
        mode = request.mode.lower().strip()
        return mode if mode in MODES else None

    async def handle(self, request: AIRequest,
                     request_id: Optional[str] = None) -> Union[PlanResponse, IdeasResponse, dict]:
        request_id = request_id or uuid.uuid4().hex[:12]
        prompt = (request.prompt or "").strip()

        if not prompt:
            return PlanResponse(message=fallbacks.EMPTY_PROMPT_MESSAGE)

        intent = classify(prompt)
        if intent == Intent.GREETING and not request.selectedIdea:
            return PlanResponse(message=fallbacks.GREETING_MESSAGE)

        mode = self.resolve_mode(request, intent)
        if mode is None:
            return {"type": "error", "message": "Invalid mode. Use 'ideas' or 'plan'.", "plan": []}

        session = await self.store.get(request.sessionId or DEFAULT_SESSION_ID)
        summary = summarize(
            request.context,
            max_scripts=self.config.summary_max_scripts,
            max_recent=self.config.summary_max_recent,
            preview_lines=self.config.summary_preview_lines,
        )
        logger.info("request_id=%s mode=%s intent=%s prompt=%r",
                    request_id, mode, intent.value, prompt[:100])

        try:
            if mode == "ideas":
                raw = await self.generator.generate(build_ideas_prompt(prompt, summary))
                ideas = coerce_ideas(parse(raw, fallbacks.default_ideas(prompt)), prompt)
                if not ideas.ideas:
                    ideas = coerce_ideas(fallbacks.default_ideas(prompt), prompt)
                session.last_ideas = {
                    "originalPrompt": prompt,
                    "ideas": [idea.model_dump() for idea in ideas.ideas],
                    "timestamp": int(time.time() * 1000),
                }
                await self.store.put(session)
                return ideas

            idea = (request.selectedIdea or "").strip() or prompt
            recent = recent_creations(session)
            raw = await self.generator.generate(build_plan_prompt(idea, summary, recent))
        except GenerationError as e:
            logger.error("request_id=%s kind=%s attempts=%d generation failed: %s",
                         request_id, e.kind, e.attempts, e)
            return PlanResponse(message=fallbacks.RETRY_MESSAGE)

        response = coerce(parse(raw, fallbacks.heuristic_plan(idea)), self.config)
        enforce(response, prompt, self.config, recent)

        record_plan(session, response, idea)
        await self.store.put(session)
        response.canUndo = session.can_undo
        return response

    async def undo(self, session_id: Optional[str]) -> Union[PlanResponse, dict]:
        if not session_id:
            return {"message": "No session to undo", "canUndo": False}

        session = await self.store.peek(session_id)
        plan = build_undo_plan(session) if session else None
        if plan is None:
            return {"message": "Nothing to undo", "canUndo": False}

        await self.store.put(session)
        logger.info("Undo for session %s: %d delete steps", session_id, plan.stepsTotal)
        return plan
