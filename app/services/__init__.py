"""Service package — Business logic layer.

Each service loads entities through the repositories, runs the pure core
guards and planners from app.core, and writes the planned changes.
Services never commit; routers commit once the call succeeds.
"""
