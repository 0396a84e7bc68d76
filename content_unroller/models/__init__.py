# Content Unroller Models
"""Content documents, unroll events and resolution plans."""

from .content import (
    ARTICLE_TYPE,
    CLIP_SET_TYPE,
    CLIP_TYPE,
    CUSTOM_CODE_COMPONENT_TYPE,
    DYNAMIC_CONTENT_TYPE,
    IMAGE_SET_TYPE,
    Content,
    UnrollEvent,
    clone,
    get_list,
    get_mapping,
    get_primary_type,
    get_str,
    has_type,
)
from .schema import ContentSchema, SchemaRole

__all__ = [
    # Content types
    "ARTICLE_TYPE",
    "CLIP_SET_TYPE",
    "CLIP_TYPE",
    "CUSTOM_CODE_COMPONENT_TYPE",
    "DYNAMIC_CONTENT_TYPE",
    "IMAGE_SET_TYPE",
    # Content helpers
    "Content",
    "UnrollEvent",
    "clone",
    "get_list",
    "get_mapping",
    "get_primary_type",
    "get_str",
    "has_type",
    # Schema
    "ContentSchema",
    "SchemaRole",
]
