"""
Models package - Pydantic models for API requests, responses and stream events.
"""

from . import requests, responses

__all__ = ["requests", "responses"]
