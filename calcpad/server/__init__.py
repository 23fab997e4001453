"""MCP interface for Calcpad."""
