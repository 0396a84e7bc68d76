# Content Models
"""Content documents, unroll events and the field names the engine understands."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Content is an open JSON document; it is never validated as a whole.
Content = Dict[str, Any]

# Ontology types
ARTICLE_TYPE = "http://www.ft.com/ontology/content/Article"
IMAGE_SET_TYPE = "http://www.ft.com/ontology/content/ImageSet"
DYNAMIC_CONTENT_TYPE = "http://www.ft.com/ontology/content/DynamicContent"
CLIP_SET_TYPE = "http://www.ft.com/ontology/content/ClipSet"
CLIP_TYPE = "http://www.ft.com/ontology/content/Clip"
CUSTOM_CODE_COMPONENT_TYPE = "http://www.ft.com/ontology/content/CustomCodeComponent"

# Field names
ID_FIELD = "id"
TYPE_FIELD = "type"
TYPES_FIELD = "types"
MAIN_IMAGE_FIELD = "mainImage"
ALT_IMAGES_FIELD = "alternativeImages"
PROMOTIONAL_IMAGE_FIELD = "promotionalImage"
LEAD_IMAGES_FIELD = "leadImages"
EMBEDS_FIELD = "embeds"
MEMBERS_FIELD = "members"
POSTER_FIELD = "poster"
BODY_XML_FIELD = "bodyXML"
IMAGE_FIELD = "image"
FORMAT_FIELD = "format"
API_URL_FIELD = "apiUrl"


@dataclass(frozen=True)
class UnrollEvent:
    """One unit of unrolling work: the document, its transaction id and subject UUID."""

    content: Content
    transaction_id: str
    uuid: str

    def with_content(self, content: Content, uuid: str) -> "UnrollEvent":
        """Derive an event for a nested document within the same transaction."""
        return UnrollEvent(content=content, transaction_id=self.transaction_id, uuid=uuid)


def clone(content: Content) -> Content:
    """Shallow copy; nested mappings and lists stay shared with the original."""
    return dict(content)


def get_mapping(content: Any, key: str) -> Optional[Dict[str, Any]]:
    if not isinstance(content, dict):
        return None
    value = content.get(key)
    return value if isinstance(value, dict) else None


def get_list(content: Any, key: str) -> Optional[List[Any]]:
    if not isinstance(content, dict):
        return None
    value = content.get(key)
    return value if isinstance(value, list) else None


def get_str(content: Any, key: str) -> Optional[str]:
    if not isinstance(content, dict):
        return None
    value = content.get(key)
    return value if isinstance(value, str) else None


def get_primary_type(content: Content) -> str:
    """
    Return the type used for dispatch.

    The first entry of ``types`` wins when the field is a list (an empty list
    means no type); otherwise the single ``type`` string is used.
    """
    types = get_list(content, TYPES_FIELD)
    if types is not None:
        if types and isinstance(types[0], str):
            return types[0]
        return ""
    return get_str(content, TYPE_FIELD) or ""


def has_type(content: Content, wanted_type: str) -> bool:
    """Check whether the content declares ``wanted_type`` anywhere in its types."""
    types = get_list(content, TYPES_FIELD)
    if types is not None:
        return wanted_type in types
    return get_str(content, TYPE_FIELD) == wanted_type
