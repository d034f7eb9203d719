"""Acidnade Relay - Main FastAPI Application"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging
import uuid

from acidnade import fallbacks
from acidnade.config import Settings, settings
from acidnade.generation import GeminiGenerator, Generator
from acidnade.models import AIRequest, SessionRequest
from acidnade.planner import PlanService
from acidnade.sessions import InMemorySessionStore, SessionStore

APP_VERSION = "18.0-IDEAS"
BANNER = "Acidnade AI v18.0 - Ideas & Step-by-Step Mode"
ACCESS_HEADER = "x-acidnade-key"
PUBLIC_PATHS = {"/", "/health", "/ping"}

logger = logging.getLogger(__name__)

def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def render(payload):
    """Serialize a response model the way the host editor reads it"""
    if hasattr(payload, "model_dump"):
        return payload.model_dump(exclude_none=True)
    return payload

def create_app(generator: Optional[Generator] = None,
               store: Optional[SessionStore] = None,
               config: Optional[Settings] = None) -> FastAPI:
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Refuse to start without a generation client"""
        if app.state.service.generator is None:
            app.state.service.generator = GeminiGenerator(config)
        logger.info("Acidnade relay %s ready (model %s)", APP_VERSION, config.llm_model)
        yield

    app = FastAPI(
        title="Acidnade Relay",
        description="Prompt-to-plan relay for the Roblox Studio plugin",
        version=APP_VERSION,
        lifespan=lifespan
    )
    if store is None:
        store = InMemorySessionStore(ttl_seconds=config.session_ttl_seconds,
                                     history_limit=config.session_history_limit,
                                     undo_limit=config.undo_log_limit)
    app.state.service = PlanService(generator, store, config)

    @app.middleware("http")
    async def check_access_key(request: Request, call_next):
        """Shared-secret check; open with a warning when no key is configured"""
        if request.url.path in PUBLIC_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        server_key = config.access_key
        if not server_key:
            logger.warning("No access key set; allowing %s", request.url.path)
            return await call_next(request)

        if request.headers.get(ACCESS_HEADER) != server_key:
            return JSONResponse(status_code=403, content={"error": "Invalid API key"})
        return await call_next(request)

    # CORS middleware, added last so it wraps the key check
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if config.cors_origins == "*" else config.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Invalid body for %s: %s", request.url.path, exc.errors())
        if request.url.path in ("/undo", "/session/clear", "/get-session"):
            return JSONResponse(status_code=200, content={"message": "No session provided", "canUndo": False})
        return JSONResponse(status_code=200, content=fallbacks.empty_plan())

    @app.get("/")
    async def root():
        return PlainTextResponse(BANNER)

    @app.get("/health")
    async def health():
        return {"status": "OK", "version": APP_VERSION}

    @app.get("/ping")
    async def ping():
        return PlainTextResponse("PONG")

    @app.post("/ai")
    async def ai(payload: AIRequest):
        """Prompt plus workspace snapshot in, plan or ideas out"""
        request_id = uuid.uuid4().hex[:12]
        try:
            result = await app.state.service.handle(payload, request_id)
        except Exception as e:
            logger.exception("request_id=%s kind=unhandled AI error: %s", request_id, e)
            result = fallbacks.empty_plan()
        return render(result)

    @app.post("/undo")
    async def undo(payload: SessionRequest):
        try:
            return render(await app.state.service.undo(payload.sessionId))
        except Exception as e:
            logger.exception("Undo error: %s", e)
            return {"message": "Error processing undo", "canUndo": False}

    @app.post("/session/clear")
    async def clear_session(payload: SessionRequest):
        if not payload.sessionId:
            return {"cleared": False}
        cleared = await app.state.service.store.evict(payload.sessionId)
        return {"cleared": cleared}

    @app.get("/session/{session_id}")
    async def session_counts(session_id: str):
        session = await app.state.service.store.peek(session_id)
        if not session:
            return {"sessionId": session_id, "history": 0, "creations": 0, "canUndo": False}
        return {
            "sessionId": session_id,
            "history": len(session.history),
            "creations": len(session.creation_log),
            "canUndo": session.can_undo,
        }

    @app.post("/get-session")
    async def get_session(payload: SessionRequest):
        session = await app.state.service.store.peek(payload.sessionId) if payload.sessionId else None
        if not session:
            return {"lastIdeas": None, "lastPlan": None, "canUndo": False}
        return {
            "lastIdeas": session.last_ideas,
            "lastPlan": session.last_plan,
            "canUndo": session.can_undo,
        }

    return app

app = create_app()

def main():
    import uvicorn
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)

if __name__ == "__main__":
    main()
