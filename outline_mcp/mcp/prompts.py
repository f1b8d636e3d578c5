"""Prompt templates served through ``prompts/list`` and ``prompts/get``."""

from __future__ import annotations

from typing import Any, Dict, List

from ..utils.errors import Invalid
from ..utils.validation import validate_query

_QUERY_ARGUMENT = {"name": "query", "description": "Topic to search for", "required": True}

PROMPT_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "general_search": {
        "description": "Creates a general documentation search query",
        "template": (
            "Search the Outline documentation for information on the following topic: {query}\n"
            "\n"
            "Consider:\n"
            "- Technical documentation\n"
            "- Product specifications\n"
            "- User guides\n"
            "- Troubleshooting articles\n"
            "\n"
            "Return the most relevant information found."
        ),
    },
    "technical_specifications": {
        "description": "Creates a query to find technical specifications",
        "template": (
            "Search the Outline documentation for technical specifications related to: {query}\n"
            "\n"
            "Include:\n"
            "- System requirements\n"
            "- Architecture details\n"
            "- Performance metrics\n"
            "- Scalability information\n"
            "- Technical limitations\n"
            "- Compatibility information\n"
            "\n"
            "Return specific technical details and specifications."
        ),
    },
    "troubleshooting_guide": {
        "description": "Creates a query to find troubleshooting information",
        "template": (
            "Search the Outline documentation for troubleshooting information about: {query}\n"
            "\n"
            "Include:\n"
            "- Common error messages\n"
            "- Problem diagnosis steps\n"
            "- Resolution procedures\n"
            "- Known issues\n"
            "- Workarounds\n"
            "- Support contact information\n"
            "\n"
            "Return step-by-step troubleshooting guidance."
        ),
    },
}


def list_prompts() -> List[Dict[str, Any]]:
    return [
        {"name": name, "description": entry["description"], "arguments": [_QUERY_ARGUMENT]}
        for name, entry in PROMPT_TEMPLATES.items()
    ]


def render_prompt(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Render a prompt for ``prompts/get``.

    Raises ValueError for an unknown prompt or an invalid query; the route
    turns that into a JSON-RPC invalid-params error.
    """
    entry = PROMPT_TEMPLATES.get(name)
    if entry is None:
        raise ValueError(f"Unknown prompt: {name}")

    checked = validate_query(arguments.get("query"))
    if isinstance(checked, Invalid):
        raise ValueError(checked.error.render())

    return {
        "description": entry["description"],
        "messages": [
            {
                "role": "user",
                "content": {"type": "text", "text": entry["template"].format(query=checked.value)},
            }
        ],
    }
