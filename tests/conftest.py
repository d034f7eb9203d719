"""
Pytest configuration for the relay test suite.

Provides isolated settings, a scripted fake generator and a TestClient
wired to both.
"""
import json

import pytest
from fastapi.testclient import TestClient

from acidnade.config import Settings
from acidnade.generation import Generator
from acidnade.main import create_app
from acidnade.sessions import InMemorySessionStore


class FakeGenerator(Generator):
    """Returns queued replies in order; exceptions in the queue are raised."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def queue(self, *replies):
        self.replies.extend(replies)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            return json.dumps({"message": "Done", "plan": []})
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, (dict, list)):
            return json.dumps(reply)
        return reply


def make_step(name, type="create", className="Script", parentPath="game.ServerScriptService", **extra):
    step = {
        "description": f"Handle the {name} part of the request",
        "type": type,
        "className": className,
        "name": name,
        "parentPath": parentPath,
        "properties": {},
    }
    step.update(extra)
    return step


@pytest.fixture
def config():
    return Settings(_env_file=None, api_key="", acidnade_api_key="")


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def store(config):
    return InMemorySessionStore(ttl_seconds=config.session_ttl_seconds,
                                history_limit=config.session_history_limit,
                                undo_limit=config.undo_log_limit)


@pytest.fixture
def client(generator, store, config):
    app = create_app(generator=generator, store=store, config=config)
    with TestClient(app) as test_client:
        yield test_client
