# Article Unroller
"""Unrolls main image, embedded sets and promotional image of articles."""

import logging

from content_unroller.errors import ValidationError
from content_unroller.models.content import (
    ALT_IMAGES_FIELD,
    ARTICLE_TYPE,
    BODY_XML_FIELD,
    CLIP_SET_TYPE,
    DYNAMIC_CONTENT_TYPE,
    EMBEDS_FIELD,
    IMAGE_SET_TYPE,
    MAIN_IMAGE_FIELD,
    PROMOTIONAL_IMAGE_FIELD,
    Content,
    UnrollEvent,
    clone,
    get_mapping,
    has_type,
)
from content_unroller.models.schema import ContentSchema, SchemaRole
from content_unroller.services.schema_builder import build_schema
from content_unroller.services.unrollers.base import BaseUnroller, ContentMap

logger = logging.getLogger("content_unroller.services.unrollers.article")


def has_expandable_fields(content: Content) -> bool:
    return (
        MAIN_IMAGE_FIELD in content
        or BODY_XML_FIELD in content
        or get_mapping(content, ALT_IMAGES_FIELD) is not None
    )


class ArticleUnroller(BaseUnroller):
    """Expands the image and embed fields of an Article."""

    accepted_types = (IMAGE_SET_TYPE, DYNAMIC_CONTENT_TYPE, CLIP_SET_TYPE)

    def validate(self, content: Content) -> bool:
        return has_expandable_fields(content) and has_type(content, ARTICLE_TYPE)

    async def unroll(self, event: UnrollEvent) -> Content:
        if not self.validate(event.content):
            raise ValidationError(content=event.content)

        cc = clone(event.content)
        schema = build_schema(cc, self.accepted_types, event)
        if schema is None:
            return cc

        loaded = await self.fetch(schema.to_list(), event)
        await self.resolve_models(schema, loaded, event)
        return self.splice(cc, schema, loaded)

    async def resolve_models(self, schema: ContentSchema, loaded: ContentMap, event: UnrollEvent) -> None:
        """Expand members of the main image and of every embedded set."""
        main_image_uuid = schema.get(SchemaRole.MAIN_IMAGE)
        set_uuids = [main_image_uuid] if main_image_uuid else []
        await self.load_set_members(set_uuids + schema.get_all(SchemaRole.EMBEDS), loaded, event)

        if main_image_uuid:
            await self.resolve_set_members(main_image_uuid, loaded, event)
        for embedded_uuid in schema.get_all(SchemaRole.EMBEDS):
            await self.resolve_set_members(embedded_uuid, loaded, event)

    def splice(self, cc: Content, schema: ContentSchema, loaded: ContentMap) -> Content:
        """Write the fetched content into the expandable fields of ``cc``."""
        main_image_uuid = schema.get(SchemaRole.MAIN_IMAGE)
        if main_image_uuid:
            cc[MAIN_IMAGE_FIELD] = loaded.get(main_image_uuid) or self.placeholder(main_image_uuid)

        embedded_uuids = schema.get_all(SchemaRole.EMBEDS)
        if embedded_uuids:
            cc[EMBEDS_FIELD] = [loaded.get(u) or self.placeholder(u) for u in embedded_uuids]

        promotional_uuid = schema.get(SchemaRole.PROMOTIONAL_IMAGE)
        if promotional_uuid and promotional_uuid in loaded:
            # copy so the caller's alternativeImages mapping is left untouched
            alt_images = dict(get_mapping(cc, ALT_IMAGES_FIELD) or {})
            alt_images[PROMOTIONAL_IMAGE_FIELD] = loaded[promotional_uuid]
            cc[ALT_IMAGES_FIELD] = alt_images

        return cc
