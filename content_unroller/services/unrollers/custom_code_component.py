# Custom Code Component Unroller
"""
Unrolls content embedded in the body of a CustomCodeComponent.

A CustomCodeComponent has no members; its payload is a bodyXML that may embed
image sets, clip sets, dynamic content and further CustomCodeComponents. The
embeds are fetched, image set members expanded, and the bodies of embedded
components unrolled up to ``ccc_max_depth`` levels.
"""

import logging

from content_unroller.errors import ContentReaderError, ValidationError
from content_unroller.models.content import (
    BODY_XML_FIELD,
    CLIP_SET_TYPE,
    CUSTOM_CODE_COMPONENT_TYPE,
    DYNAMIC_CONTENT_TYPE,
    EMBEDS_FIELD,
    IMAGE_SET_TYPE,
    Content,
    UnrollEvent,
    clone,
    get_str,
    has_type,
)
from content_unroller.services.body_parser import scan_embeds
from content_unroller.services.unrollers.base import BaseUnroller

logger = logging.getLogger("content_unroller.services.unrollers.custom_code_component")


class CustomCodeComponentUnroller(BaseUnroller):

    accepted_types = (IMAGE_SET_TYPE, DYNAMIC_CONTENT_TYPE, CLIP_SET_TYPE, CUSTOM_CODE_COMPONENT_TYPE)

    def validate(self, content: Content) -> bool:
        return BODY_XML_FIELD in content and has_type(content, CUSTOM_CODE_COMPONENT_TYPE)

    async def unroll(self, event: UnrollEvent) -> Content:
        if not self.validate(event.content):
            raise ValidationError(content=event.content)

        ccc = clone(event.content)
        embedded_uuids = scan_embeds(
            get_str(ccc, BODY_XML_FIELD) or "",
            self.accepted_types,
            event.transaction_id,
            event.uuid,
        )
        if not embedded_uuids:
            logger.debug(f"[{event.transaction_id}] No embedded components for CCC UUID: {event.uuid}")
            return ccc

        try:
            loaded = await self.reader.get(embedded_uuids, event.transaction_id)
        except ContentReaderError as e:
            ccc[EMBEDS_FIELD] = [self.placeholder(u) for u in embedded_uuids]
            raise ContentReaderError(
                f"error while getting expanded content for uuid: {event.uuid} as uuid(s): {embedded_uuids}: {e}",
                content=ccc,
            ) from e

        await self.resolve_embedded_sets(embedded_uuids, loaded, event)
        await self.resolve_inner_bodies(
            embedded_uuids,
            loaded,
            self.accepted_types,
            event,
            visited=frozenset({event.uuid}),
        )

        embedded = [loaded.get(u) or self.placeholder(u) for u in embedded_uuids]
        if embedded:
            ccc[EMBEDS_FIELD] = embedded
        return ccc
