# Schema Builder
"""Build the resolution plan for a content document."""

import logging
from typing import Iterable, List, Optional

from content_unroller.errors import UUIDNotFoundError
from content_unroller.models.content import (
    ALT_IMAGES_FIELD,
    BODY_XML_FIELD,
    ID_FIELD,
    MAIN_IMAGE_FIELD,
    PROMOTIONAL_IMAGE_FIELD,
    Content,
    UnrollEvent,
    get_mapping,
    get_str,
)
from content_unroller.models.schema import ContentSchema, SchemaRole
from content_unroller.services.body_parser import scan_embeds
from content_unroller.services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.services.schema_builder")


def extract_main_image(content: Content, event: UnrollEvent) -> Optional[str]:
    main_image = get_mapping(content, MAIN_IMAGE_FIELD)
    if main_image is None:
        logger.debug(f"[{event.transaction_id}] Cannot find main image for {event.uuid}. Skipping expanding main image")
        return None
    try:
        return extract_uuid(main_image.get(ID_FIELD))
    except UUIDNotFoundError as e:
        logger.error(f"[{event.transaction_id}] Cannot find main image for {event.uuid}: {e}. Skipping expanding main image")
        return None


def extract_embeds(content: Content, accepted_types: Iterable[str], event: UnrollEvent) -> List[str]:
    """UUIDs of embedded content of the accepted types found in ``bodyXML``."""
    body = get_str(content, BODY_XML_FIELD)
    if body is None:
        logger.debug(f"[{event.transaction_id}] Missing body for {event.uuid}. Skipping expanding embedded content and images")
        return []
    return scan_embeds(body, accepted_types, event.transaction_id, event.uuid)


def extract_promotional_image(content: Content, event: UnrollEvent) -> Optional[str]:
    alt_images = get_mapping(content, ALT_IMAGES_FIELD)
    if alt_images is None:
        return None

    promotional_image = get_mapping(alt_images, PROMOTIONAL_IMAGE_FIELD)
    if promotional_image is None:
        logger.debug(f"[{event.transaction_id}] Cannot find promotional image for {event.uuid}. Skipping expanding promotional image")
        return None

    promotional_id = get_str(promotional_image, ID_FIELD)
    if promotional_id is None:
        # Not an error: promotional images are allowed to come without an id
        logger.debug(f"[{event.transaction_id}] Promotional image is missing the id field. Skipping expanding promotional image")
        return None

    try:
        return extract_uuid(promotional_id)
    except UUIDNotFoundError as e:
        logger.error(f"[{event.transaction_id}] Cannot find promotional image for {event.uuid}: {e}. Skipping expanding promotional image")
        return None


def build_schema(
    content: Content,
    accepted_types: Iterable[str],
    event: UnrollEvent,
) -> Optional[ContentSchema]:
    """
    Collect the UUIDs to fetch for the main image, body embeds and promotional image.

    Each pass is best effort; a field that cannot be read is treated as absent.

    Args:
        content: document to inspect
        accepted_types: embed types to pick up from the body
        event: unroll event, for log context

    Returns:
        The schema, or None when there is nothing to expand
    """
    schema = ContentSchema()

    main_image_uuid = extract_main_image(content, event)
    if main_image_uuid:
        schema.put(SchemaRole.MAIN_IMAGE, main_image_uuid)

    embedded_uuids = extract_embeds(content, accepted_types, event)
    if embedded_uuids:
        schema.put_all(SchemaRole.EMBEDS, embedded_uuids)

    promotional_uuid = extract_promotional_image(content, event)
    if promotional_uuid:
        schema.put(SchemaRole.PROMOTIONAL_IMAGE, promotional_uuid)

    if schema.is_empty():
        logger.debug(
            f"[{event.transaction_id}] No main image or promotional image or embedded content "
            f"to expand for supplied content {event.uuid}"
        )
        return None

    return schema
