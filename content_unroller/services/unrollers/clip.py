# Clip Unroller
"""Unrolls the poster image set of a clip."""

import logging
from typing import Optional

from content_unroller.errors import ConversionError, ValidationError
from content_unroller.models.content import (
    API_URL_FIELD,
    CLIP_TYPE,
    POSTER_FIELD,
    Content,
    UnrollEvent,
    clone,
    get_mapping,
    get_str,
    has_type,
)
from content_unroller.services.content_reader import ContentReader
from content_unroller.services.unrollers.base import BaseUnroller
from content_unroller.services.unrollers.image_set import ImageSetUnroller
from content_unroller.services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.services.unrollers.clip")


class ClipUnroller(BaseUnroller):

    def __init__(
        self,
        reader: ContentReader,
        api_host: Optional[str] = None,
        image_set_unroller: Optional[ImageSetUnroller] = None,
    ):
        super().__init__(reader, api_host)
        self.image_set_unroller = image_set_unroller or ImageSetUnroller(reader, self.api_host)

    def validate(self, content: Content) -> bool:
        return has_type(content, CLIP_TYPE)

    async def unroll(self, event: UnrollEvent) -> Content:
        if not self.validate(event.content):
            raise ValidationError(content=event.content)

        if POSTER_FIELD not in event.content:
            return event.content

        poster = get_mapping(event.content, POSTER_FIELD)
        if poster is None:
            raise ConversionError("poster field is not an object")
        api_url = get_str(poster, API_URL_FIELD)
        if api_url is None:
            raise ConversionError("poster is missing the apiUrl field")

        poster_uuid = extract_uuid(api_url)
        posters = await self.fetch([poster_uuid], event)
        poster_content = posters.get(poster_uuid)
        if poster_content is None:
            logger.debug(f"[{event.transaction_id}] Poster {poster_uuid} of clip {event.uuid} not found")
            return event.content

        unrolled_poster = await self.image_set_unroller.unroll(event.with_content(poster_content, poster_uuid))

        result = clone(event.content)
        result[POSTER_FIELD] = unrolled_poster
        return result
