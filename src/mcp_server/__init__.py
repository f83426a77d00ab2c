"""
MCP server exposing federated search tools.
"""
