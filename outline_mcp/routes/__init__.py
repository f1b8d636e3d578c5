"""
Outline MCP Routes

Route Modules:
- health: liveness probes
- mcp: JSON-RPC MCP endpoint and status
"""
