"""
Ollama HTTP boundary.

Exports:
  - OllamaClient: httpx transport for /version, /tags and /generate
  - ErrorKind: failure classes assigned at the transport layer
  - TransportResult: typed outcome of every transport call

Dependencies: httpx
System role: Model backend adapter
"""

from localchat.boundary.ollama.client import OllamaClient
from localchat.boundary.ollama.schemas import ErrorKind, TransportResult

__all__ = ["OllamaClient", "ErrorKind", "TransportResult"]
