"""Infrastructure layer implementations."""

from src.infrastructure import export, llm, providers

__all__ = ["providers", "llm", "export"]
