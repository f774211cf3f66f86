"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (upstream rate APIs)
- HTTP (public FastAPI endpoints)
"""

__all__ = []
