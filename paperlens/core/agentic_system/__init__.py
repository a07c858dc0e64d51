"""Agentic system: tool registry and the document agent loop."""
