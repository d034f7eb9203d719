"""Workspace snapshot summarizer"""
from typing import Any, Dict, List, Optional

EMPTY_CONTEXT = "No context provided."
TRUNCATION_MARKER = "... (truncated)"

def _field(item: Dict[str, Any], *keys: str, default: str = "") -> str:
    """First present key, accepting both PascalCase and camelCase payloads"""
    for key in keys:
        value = item.get(key)
        if value not in (None, ""):
            return str(value)
    return default

def _items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]

def source_preview(source: str, max_lines: int, indent: str = "   ") -> str:
    """First max_lines lines of source, fenced, with a truncation marker"""
    lines = source.split("\n")
    text = f"{indent}```lua\n"
    text += "\n".join(lines[:max_lines])
    if len(lines) > max_lines:
        text += f"\n{indent}{TRUNCATION_MARKER}"
    text += f"\n{indent}```\n"
    return text

def summarize(snapshot: Optional[Dict[str, Any]],
              max_scripts: int = 10,
              max_recent: int = 10,
              preview_lines: int = 20) -> str:
    """Render a workspace snapshot as a bounded plain-text report"""
    if not snapshot or not isinstance(snapshot, dict):
        return EMPTY_CONTEXT

    text = "=== WORKSPACE CONTEXT ===\n\n"

    project = snapshot.get("project")
    project = project if isinstance(project, dict) else {}

    stats = project.get("Statistics") or snapshot.get("statistics")
    if isinstance(stats, dict):
        text += "Statistics:\n"
        text += f"- Scripts: {stats.get('TotalScripts') or 0}\n"
        text += f"- UI Elements: {stats.get('TotalUI') or 0}\n"
        text += f"- Total Instances: {stats.get('TotalInstances') or 0}\n\n"

    scripts = _items(snapshot.get("scripts")) or _items(project.get("Scripts"))
    if scripts:
        shown = scripts[-max_scripts:]
        text += f"SCRIPTS ({len(shown)} of {len(scripts)}):\n"
        for index, item in enumerate(shown, 1):
            name = _field(item, "Name", "name", default="Unnamed")
            kind = _field(item, "ClassName", "Type", "type", "className", default="Script")
            path = _field(item, "Path", "path", default="Unknown")
            text += f"{index}. [{kind}] \"{name}\" at {path}\n"
            source = item.get("Source") or item.get("source")
            if isinstance(source, str) and source:
                text += source_preview(source, preview_lines)
        text += "\n"

    selected = _items(snapshot.get("selectedObjects"))
    if selected:
        text += "SELECTED OBJECTS:\n"
        for index, item in enumerate(selected, 1):
            name = _field(item, "Name", "name", default="Unnamed")
            kind = _field(item, "ClassName", "className", default="Instance")
            text += f"{index}. [{kind}] \"{name}\"\n"
            text += f"   Path: {_field(item, 'Path', 'path', default='Unknown')}\n"
            source = item.get("Source") or item.get("source")
            if isinstance(source, str) and source:
                text += "   Current Source Code:\n"
                text += source_preview(source, preview_lines)
            text += "\n"

    recent = _items(snapshot.get("recentlyCreated"))
    if recent:
        shown = recent[-max_recent:]
        text += "RECENTLY CREATED:\n"
        for item in shown:
            name = _field(item, "Name", "name", default="Unnamed")
            kind = _field(item, "ClassName", "className", default="Instance")
            path = _field(item, "Path", "path", "parentPath", default="Unknown")
            text += f"- [{kind}] {name} in {path}\n"
        text += "\n"

    return text
