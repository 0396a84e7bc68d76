# Clip Set Unroller
"""Unrolls every clip of a clip set, keeping each member's format."""

import logging
from typing import Optional

from content_unroller.errors import ConversionError, ValidationError
from content_unroller.models.content import (
    CLIP_SET_TYPE,
    FORMAT_FIELD,
    ID_FIELD,
    MEMBERS_FIELD,
    Content,
    UnrollEvent,
    clone,
    get_list,
    get_str,
    has_type,
)
from content_unroller.services.content_reader import ContentReader
from content_unroller.services.unrollers.base import BaseUnroller
from content_unroller.services.unrollers.clip import ClipUnroller
from content_unroller.services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.services.unrollers.clip_set")


class ClipSetUnroller(BaseUnroller):

    def __init__(
        self,
        reader: ContentReader,
        api_host: Optional[str] = None,
        clip_unroller: Optional[ClipUnroller] = None,
    ):
        super().__init__(reader, api_host)
        self.clip_unroller = clip_unroller or ClipUnroller(reader, self.api_host)

    def validate(self, content: Content) -> bool:
        return MEMBERS_FIELD in content and has_type(content, CLIP_SET_TYPE)

    async def unroll(self, event: UnrollEvent) -> Content:
        if not self.validate(event.content):
            raise ValidationError(content=event.content)

        members = get_list(event.content, MEMBERS_FIELD)
        if members is None:
            raise ConversionError("members field is not a list")
        if not members:
            return event.content

        refs = []
        for member in members:
            member_id = get_str(member, ID_FIELD)
            if member_id is None:
                raise ConversionError("clip set member without a valid id field")
            clip_format = get_str(member, FORMAT_FIELD)
            if clip_format is None:
                raise ConversionError(f"clip set member {member_id} is missing the format field")
            refs.append((member, extract_uuid(member_id), clip_format))

        clips = await self.fetch([clip_uuid for _, clip_uuid, _ in refs], event)

        unrolled = []
        for member, clip_uuid, clip_format in refs:
            clip = clips.get(clip_uuid)
            if clip is None:
                logger.debug(f"[{event.transaction_id}] Clip {clip_uuid} of clip set {event.uuid} not found")
                unrolled.append(dict(member))
                continue
            unrolled_clip = await self.clip_unroller.unroll(event.with_content(clip, clip_uuid))
            unrolled.append({**member, **unrolled_clip, FORMAT_FIELD: clip_format})

        result = clone(event.content)
        result[MEMBERS_FIELD] = unrolled
        return result
