"""
Local chat assistant.

FastAPI front-end over an Ollama model backend with SQLite-persisted
sessions, user facts and reference contexts.
"""

__version__ = "0.1.0"
