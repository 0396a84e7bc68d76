# Internal Content Unrollers
"""
Unrollers behind the internal content endpoint.

Internal content carries ``leadImages`` references and dynamic content
embedded in its body. Lead images are fetched from the public endpoint and
attached under ``image``; dynamic content is read from the internal endpoint.
Both steps are best effort: when the lead image fetch fails the references
are returned without any ``image``, and a failing dynamic content fetch
leaves the body embeds untouched.
"""

import logging
from typing import Any, List, Optional

from content_unroller.errors import ContentReaderError, UUIDNotFoundError, ValidationError
from content_unroller.models.content import (
    ARTICLE_TYPE,
    BODY_XML_FIELD,
    DYNAMIC_CONTENT_TYPE,
    EMBEDS_FIELD,
    ID_FIELD,
    IMAGE_FIELD,
    LEAD_IMAGES_FIELD,
    Content,
    UnrollEvent,
    clone,
    get_list,
    get_str,
    has_type,
)
from content_unroller.services.body_parser import scan_embeds
from content_unroller.services.unrollers.base import BaseUnroller
from content_unroller.services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.services.unrollers.internal")


def strip_image(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    return {k: v for k, v in item.items() if k != IMAGE_FIELD}


class InternalDefaultUnroller(BaseUnroller):
    """Resolves lead images and dynamic content for any internal content."""

    def validate(self, content: Content) -> bool:
        return LEAD_IMAGES_FIELD in content or BODY_XML_FIELD in content

    async def unroll(self, event: UnrollEvent) -> Content:
        if not self.validate(event.content):
            raise ValidationError(content=event.content)

        cc = clone(event.content)

        lead_images = await self.unroll_lead_images(cc, event)
        if lead_images is not None:
            cc[LEAD_IMAGES_FIELD] = lead_images

        dynamic_contents = await self.unroll_dynamic_content(cc, event)
        if dynamic_contents is not None:
            cc[EMBEDS_FIELD] = dynamic_contents

        return cc

    async def unroll_lead_images(self, cc: Content, event: UnrollEvent) -> Optional[List[Content]]:
        """
        Attach the fetched image to each lead image reference.

        Returns None when there is nothing to expand. When the fetch fails the
        references come back with any stale ``image`` removed.
        """
        images = get_list(cc, LEAD_IMAGES_FIELD)
        if not images:
            logger.debug(f"[{event.transaction_id}] No lead images to expand for {event.uuid}")
            return None

        refs = []
        for item in images:
            try:
                refs.append((item, extract_uuid(get_str(item, ID_FIELD))))
            except UUIDNotFoundError as e:
                logger.error(f"[{event.transaction_id}] Error while getting UUID of lead image in {event.uuid}: {e}")
                refs.append((item, None))

        try:
            image_map = await self.reader.get([u for _, u in refs if u], event.transaction_id)
        except ContentReaderError as e:
            logger.error(f"[{event.transaction_id}] Error while getting content for expanded images: {e}")
            return [strip_image(item) for item in images]

        expanded = []
        for item, image_uuid in refs:
            if not isinstance(item, dict):
                expanded.append(item)
                continue
            lead_image = strip_image(item)
            found = image_map.get(image_uuid) if image_uuid else None
            if found is None:
                logger.debug(f"[{event.transaction_id}] Missing image model {image_uuid}. Returning only the id.")
            else:
                lead_image[IMAGE_FIELD] = found
            expanded.append(lead_image)
        return expanded

    async def unroll_dynamic_content(self, cc: Content, event: UnrollEvent) -> Optional[List[Content]]:
        """Read embedded dynamic content through the internal endpoint."""
        body = get_str(cc, BODY_XML_FIELD)
        if body is None:
            logger.debug(f"[{event.transaction_id}] Missing body for {event.uuid}, skipping dynamic content")
            return None

        uuids = scan_embeds(body, (DYNAMIC_CONTENT_TYPE,), event.transaction_id, event.uuid)
        if not uuids:
            return None

        try:
            content_map = await self.reader.get_internal(uuids, event.transaction_id)
        except ContentReaderError as e:
            logger.error(f"[{event.transaction_id}] Error while getting embedded dynamic content: {e}")
            return None

        return [content_map.get(u) or self.placeholder(u) for u in uuids]


class InternalArticleUnroller(InternalDefaultUnroller):
    """Internal unrolling restricted to Articles."""

    def validate(self, content: Content) -> bool:
        return super().validate(content) and has_type(content, ARTICLE_TYPE)
