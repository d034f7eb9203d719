"""Canned responses used when generation fails or cannot be parsed"""
from typing import Any, Dict, List

GENERIC_MESSAGE = "I'll handle that for you."
RETRY_MESSAGE = "Error processing request. Please try again."
EMPTY_PROMPT_MESSAGE = "What do you want me to create?"
GREETING_MESSAGE = "Hey! Tell me what you want to build and I'll plan it out step by step."

def message_only() -> Dict[str, Any]:
    return {"message": GENERIC_MESSAGE}

def empty_plan(message: str = RETRY_MESSAGE) -> Dict[str, Any]:
    return {"message": message, "plan": []}

def _combat_steps(prompt: str) -> List[Dict[str, Any]]:
    return [
        {
            "description": "Create the server-side combo and hit handler",
            "type": "create",
            "className": "Script",
            "name": "CombatHandler",
            "parentPath": "game.ServerScriptService",
            "properties": {
                "Source": f"-- Combat handler for: {prompt}\n\n"
                          "local ReplicatedStorage = game:GetService(\"ReplicatedStorage\")\n"
                          "local hitEvent = ReplicatedStorage:WaitForChild(\"HitEvent\")\n\n"
                          "hitEvent.OnServerEvent:Connect(function(player, target, comboIndex)\n"
                          "\t-- Validate and apply damage here\n"
                          "end)",
            },
            "reasoning": "Damage must be validated on the server",
        },
        {
            "description": "Create the client-side combo input controller",
            "type": "create",
            "className": "LocalScript",
            "name": "ComboController",
            "parentPath": "game.StarterPlayer.StarterPlayerScripts",
            "properties": {
                "Source": "-- Combo input controller\n\n"
                          "local UserInputService = game:GetService(\"UserInputService\")\n"
                          "local comboIndex = 0\n\n"
                          "UserInputService.InputBegan:Connect(function(input, processed)\n"
                          "\tif processed then return end\n"
                          "\tif input.UserInputType == Enum.UserInputType.MouseButton1 then\n"
                          "\t\tcomboIndex = comboIndex % 3 + 1\n"
                          "\tend\n"
                          "end)",
            },
            "reasoning": "Players trigger combos from their own input",
        },
        {
            "description": "Create the shared remote event for hit requests",
            "type": "create",
            "className": "RemoteEvent",
            "name": "HitEvent",
            "parentPath": "game.ReplicatedStorage",
            "properties": {},
            "reasoning": "Client and server need a channel for hits",
        },
    ]

def _generic_steps(prompt: str) -> List[Dict[str, Any]]:
    return [
        {
            "description": "Create the main server-side script",
            "type": "create",
            "className": "Script",
            "name": "MainScript",
            "parentPath": "game.ServerScriptService",
            "properties": {
                "Source": f"-- Main script for: {prompt}\n\nprint(\"Hello from Acidnade AI!\")",
            },
            "reasoning": "Central server-side logic",
        },
        {
            "description": "Create the client-side handler script",
            "type": "create",
            "className": "LocalScript",
            "name": "ClientHandler",
            "parentPath": "game.StarterPlayer.StarterPlayerScripts",
            "properties": {
                "Source": "-- Client-side handler\n\n"
                          "local Players = game:GetService(\"Players\")\n\n"
                          "-- Client logic here",
            },
            "reasoning": "Handle player interactions",
        },
        {
            "description": "Create the shared configuration module",
            "type": "create",
            "className": "ModuleScript",
            "name": "Config",
            "parentPath": "game.ReplicatedStorage",
            "properties": {
                "Source": "-- Configuration module\n\n"
                          "local Config = {}\n\n"
                          "Config.Settings = {\n\t-- Add settings here\n}\n\n"
                          "return Config",
            },
            "reasoning": "Centralized configuration",
        },
    ]

def heuristic_plan(prompt: str) -> Dict[str, Any]:
    """Three-step starter plan chosen by keywords in the prompt"""
    lowered = (prompt or "").lower()
    if "combo" in lowered or "hit" in lowered:
        steps = _combat_steps(prompt)
        message = "I'll set up a basic combo system in 3 steps:"
    else:
        steps = _generic_steps(prompt)
        message = "I'll implement your idea in 3 steps:"
    return {
        "thinking": "Creating fallback plan",
        "message": message,
        "plan": steps,
        "estimatedTime": "Medium",
    }

def default_ideas(prompt: str) -> Dict[str, Any]:
    return {
        "thinking": "Creating fallback ideas",
        "message": "Here are 3 ideas for your request:",
        "ideas": [
            {
                "id": 1,
                "title": "Basic Implementation",
                "description": "A simple, straightforward implementation of your request.",
                "features": ["Easy to understand", "Lightweight", "Good starting point"],
                "complexity": "Simple",
                "prompt": prompt,
            },
            {
                "id": 2,
                "title": "Enhanced Version",
                "description": "Adds extra features and polish to the basic idea.",
                "features": ["More features", "Better UI", "Error handling"],
                "complexity": "Medium",
                "prompt": f"{prompt} with enhanced features and better user experience",
            },
            {
                "id": 3,
                "title": "Advanced System",
                "description": "A complete system with multiple components and interactions.",
                "features": ["Multiple scripts", "Data persistence", "Advanced UI"],
                "complexity": "Complex",
                "prompt": f"Create a complete system for: {prompt} with modular design and scalability",
            },
        ],
    }
