"""
NicheGen backend package.

Contains the Flask application factory, the SQLAlchemy models for users and
chat history, and the multi-stage content generation pipeline
(web search, draft completion, refinement pass).
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
