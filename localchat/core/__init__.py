"""Core conversation-context assembly logic."""
