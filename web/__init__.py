"""
Web application package for the checkers engine.

Provides a stateless FastAPI REST API that a browser front end calls for
legal moves, move application and engine moves.
Serve with: uvicorn web.app:app
"""
