"""Application layer: use case orchestration over storage and the model gateway."""
