# Content Unroller Services
"""Service layer: content store access, body scanning and unrolling."""

from .body_parser import scan_embeds
from .content_reader import ContentReader, content_reader
from .schema_builder import build_schema
from .uuid_utils import build_resource_id, extract_uuid

__all__ = [
    "scan_embeds",
    "ContentReader",
    "content_reader",
    "build_schema",
    "build_resource_id",
    "extract_uuid",
]
