"""Instruction text sent to the generative API"""
from typing import Iterable, Tuple

IDEAS_TEMPLATE = """You are ACIDNADE, a creative Roblox game AI.

{context}

USER REQUEST: "{prompt}"

=== TASK ===
Generate 3 different implementation ideas for this request.
Each idea needs a catchy title (max 5 words), a 2-3 sentence description,
key features, a complexity of Simple, Medium or Complex, and a prompt that
implements the idea when selected.

=== RESPONSE FORMAT (JSON only) ===
{{
  "type": "ideas",
  "thinking": "Brief analysis",
  "message": "Here are 3 ideas for your request:",
  "ideas": [
    {{
      "id": 1,
      "title": "Idea Title",
      "description": "What this idea does",
      "features": ["Feature 1", "Feature 2"],
      "complexity": "Simple",
      "prompt": "Specific prompt to implement this idea"
    }}
  ]
}}"""

PLAN_TEMPLATE = """You are ACIDNADE, an execution-focused Roblox AI.

{context}
{memory}
=== REQUEST ===
{idea}

=== TASK ===
Create a step-by-step implementation plan. Each step creates, modifies or
deletes ONE instance. Script steps carry the full Source in properties.
UI is built at runtime from a LocalScript in StarterPlayerScripts.

=== RESPONSE FORMAT (JSON only) ===
{{
  "type": "plan",
  "thinking": "Brief analysis of the full plan",
  "message": "I'll create this in X steps:",
  "plan": [
    {{
      "step": 1,
      "description": "Create the main server script",
      "prompt": "Instruction for just this step",
      "type": "create",
      "className": "Script",
      "name": "MainHandler",
      "parentPath": "game.ServerScriptService",
      "properties": {{"Source": "-- Full Lua code here"}},
      "reasoning": "Why this step is needed"
    }}
  ],
  "estimatedTime": "Simple/Medium/Complex"
}}"""

def format_memory(recent: Iterable[Tuple[str, str]]) -> str:
    lines = [f"- {parent}.{name}" for name, parent in recent]
    if not lines:
        return ""
    return "\n=== ALREADY CREATED THIS SESSION ===\n" + "\n".join(lines) + "\n"

def build_ideas_prompt(prompt: str, context_summary: str) -> str:
    return IDEAS_TEMPLATE.format(context=context_summary, prompt=prompt)

def build_plan_prompt(idea: str, context_summary: str,
                      recent: Iterable[Tuple[str, str]] = ()) -> str:
    return PLAN_TEMPLATE.format(context=context_summary, memory=format_memory(recent), idea=idea)
