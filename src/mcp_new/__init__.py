"""Scaffold MCP server projects from wizards, presets, API specs or prompts."""

__version__ = "0.1.0"
