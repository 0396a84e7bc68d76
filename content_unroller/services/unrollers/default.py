# Default Unroller
"""Fallback unroller for any content type with expandable fields."""

from content_unroller.models.content import (
    CLIP_SET_TYPE,
    CUSTOM_CODE_COMPONENT_TYPE,
    DYNAMIC_CONTENT_TYPE,
    IMAGE_SET_TYPE,
    Content,
    UnrollEvent,
)
from content_unroller.models.schema import ContentSchema, SchemaRole
from content_unroller.services.unrollers.article import ArticleUnroller, has_expandable_fields
from content_unroller.services.unrollers.base import ContentMap


class DefaultUnroller(ArticleUnroller):
    """
    Article unrolling for any type, with custom code components.

    Embedded CustomCodeComponents get their own bodies unrolled as well,
    following the same depth and cycle rules as the CustomCodeComponent
    unroller.
    """

    accepted_types = (IMAGE_SET_TYPE, DYNAMIC_CONTENT_TYPE, CLIP_SET_TYPE, CUSTOM_CODE_COMPONENT_TYPE)

    def validate(self, content: Content) -> bool:
        return has_expandable_fields(content)

    async def resolve_models(self, schema: ContentSchema, loaded: ContentMap, event: UnrollEvent) -> None:
        await super().resolve_models(schema, loaded, event)
        await self.resolve_inner_bodies(
            schema.get_all(SchemaRole.EMBEDS),
            loaded,
            self.accepted_types,
            event,
            visited=frozenset({event.uuid}),
        )
