# Image Set Unroller
"""Replaces image set member references with the member images."""

from content_unroller.errors import ConversionError, ValidationError
from content_unroller.models.content import (
    ID_FIELD,
    IMAGE_SET_TYPE,
    MEMBERS_FIELD,
    Content,
    UnrollEvent,
    clone,
    get_list,
    get_str,
    has_type,
)
from content_unroller.services.unrollers.base import BaseUnroller
from content_unroller.services.uuid_utils import extract_uuid


class ImageSetUnroller(BaseUnroller):

    def validate(self, content: Content) -> bool:
        return MEMBERS_FIELD in content and has_type(content, IMAGE_SET_TYPE)

    async def unroll(self, event: UnrollEvent) -> Content:
        if not self.validate(event.content):
            raise ValidationError(content=event.content)

        members = get_list(event.content, MEMBERS_FIELD)
        if members is None:
            raise ConversionError("members field is not a list")
        if not members:
            return event.content

        image_uuids = []
        for member in members:
            member_id = get_str(member, ID_FIELD)
            if member_id is None:
                raise ConversionError("image set member without a valid id field")
            image_uuids.append(extract_uuid(member_id))

        # The content store skips unknown UUIDs, so a miss is not an error
        images = await self.fetch(image_uuids, event)

        result = clone(event.content)
        result[MEMBERS_FIELD] = [images.get(u) or self.placeholder(u) for u in image_uuids]
        return result
