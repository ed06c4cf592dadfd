"""Core gameplay primitives (target ring, eliminations, and read projections).

Kept free of FastAPI and storage concerns so it can be reused by API routes, CLI, and tests.
"""
