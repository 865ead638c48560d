"""
Application layer - Use cases and business logic orchestration.

This layer contains:
- Command/query handlers (orchestrate domain + persistence)
- Input DTOs (commands and queries)
- Entity → response DTO conversion

No direct dependencies on frameworks (FastAPI, etc.)
"""
