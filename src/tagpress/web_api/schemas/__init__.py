"""
Pydantic Schemas
===============
Response models for the preview API.
"""
from .posts import PostDetail, PostSummary, TagDetail, TagSummary

__all__ = ["PostDetail", "PostSummary", "TagDetail", "TagSummary"]
