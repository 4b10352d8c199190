"""Boundary adapters: SQLite persistence and the Ollama HTTP backend."""
