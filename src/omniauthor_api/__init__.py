"""
OmniAuthor API package.

Provides:
- FastAPI gateway relaying prompts to Gemini on Vertex AI
- uvicorn entry point (`omniauthor-api`)
"""

__version__ = "1.0.0"
