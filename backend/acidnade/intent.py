"""Prompt intent classifier - ordered rule table"""
import re
from enum import Enum
from typing import List, Tuple

class Intent(str, Enum):
    GREETING = "greeting"
    QUESTION = "question"
    IDEAS_REQUEST = "ideas_request"
    ACTION_REQUEST = "action_request"

# First match wins
RULES: List[Tuple[str, Intent]] = [
    # Greetings and small talk
    (r'^(hi|hello|hey|yo|sup|hiya|howdy|good (morning|afternoon|evening))\b[\s!.,]*(there|acidnade)?[\s!.]*$',
     Intent.GREETING),
    (r'^(thanks|thank you|thx|ty)\b[\s!.]*$',
     Intent.GREETING),

    # Asking for options rather than a build
    (r'\b(ideas?|suggest(ions?)?|brainstorm|options|inspiration)\b',
     Intent.IDEAS_REQUEST),
    (r'^(what|which) (should|could|can) i (make|build|create|add)\b',
     Intent.IDEAS_REQUEST),

    # Build verbs beat question phrasing ("can you make a shop?")
    (r'\b(make|create|build|add|insert|spawn|generate|script|code|implement|delete|remove|destroy|clear|fix|edit|modify|update|change|rename|move|replace)\b',
     Intent.ACTION_REQUEST),

    # Questions
    (r'^(what|why|how|when|where|who|which|is|are|does|do|can|could|should|explain)\b',
     Intent.QUESTION),
    (r'\?\s*$',
     Intent.QUESTION),
]

EDIT_PATTERN = re.compile(
    r'\b(edit|modify|update|change|fix|tweak|adjust|improve|refactor|rewrite|patch|rename)\b'
)

def classify(prompt: str) -> Intent:
    """Classify a prompt; anything unmatched is an action request"""
    text = (prompt or "").lower().strip()

    for pattern, intent in RULES:
        if re.search(pattern, text):
            return intent

    return Intent.ACTION_REQUEST

def suggests_edit(text: str) -> bool:
    """True when free text reads like an edit to something that exists"""
    return bool(EDIT_PATTERN.search((text or "").lower()))
