"""MCP tools, prompts and resources for Outline."""
