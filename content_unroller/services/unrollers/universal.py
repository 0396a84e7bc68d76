# Universal Unroller
"""Entry point of the unrolling engine: picks a strategy by content type."""

import logging
from typing import Dict, Optional

from content_unroller.models.content import (
    ARTICLE_TYPE,
    CLIP_SET_TYPE,
    CLIP_TYPE,
    CUSTOM_CODE_COMPONENT_TYPE,
    IMAGE_SET_TYPE,
    Content,
    UnrollEvent,
    get_primary_type,
)
from content_unroller.services.content_reader import ContentReader
from content_unroller.services.unrollers.base import BaseUnroller
from content_unroller.services.unrollers.clip import ClipUnroller
from content_unroller.services.unrollers.clip_set import ClipSetUnroller
from content_unroller.services.unrollers.custom_code_component import CustomCodeComponentUnroller
from content_unroller.services.unrollers.default import DefaultUnroller
from content_unroller.services.unrollers.image_set import ImageSetUnroller
from content_unroller.services.unrollers.internal import InternalArticleUnroller, InternalDefaultUnroller

logger = logging.getLogger("content_unroller.services.unrollers.universal")


class UniversalUnroller:
    """
    Dispatches unroll events to the type-specific unrollers.

    Public content is routed on its primary type; types without a dedicated
    unroller, Articles included, go to the default unroller. Internal content
    goes to the internal article or internal default unroller.
    """

    def __init__(
        self,
        reader: ContentReader,
        api_host: Optional[str] = None,
        ccc_max_depth: Optional[int] = None,
    ):
        image_set = ImageSetUnroller(reader, api_host)
        clip = ClipUnroller(reader, api_host, image_set_unroller=image_set)

        self.unrollers: Dict[str, BaseUnroller] = {
            CLIP_SET_TYPE: ClipSetUnroller(reader, api_host, clip_unroller=clip),
            CLIP_TYPE: clip,
            IMAGE_SET_TYPE: image_set,
            CUSTOM_CODE_COMPONENT_TYPE: CustomCodeComponentUnroller(reader, api_host, ccc_max_depth),
        }
        self.default_unroller: BaseUnroller = DefaultUnroller(reader, api_host, ccc_max_depth)

        self.internal_unrollers: Dict[str, BaseUnroller] = {
            ARTICLE_TYPE: InternalArticleUnroller(reader, api_host),
        }
        self.internal_default_unroller: BaseUnroller = InternalDefaultUnroller(reader, api_host)

    def select(self, content: Content) -> BaseUnroller:
        return self.unrollers.get(get_primary_type(content), self.default_unroller)

    def select_internal(self, content: Content) -> BaseUnroller:
        return self.internal_unrollers.get(get_primary_type(content), self.internal_default_unroller)

    async def unroll(self, event: UnrollEvent) -> Content:
        unroller = self.select(event.content)
        logger.debug(f"[{event.transaction_id}] Unrolling {event.uuid} with {type(unroller).__name__}")
        return await unroller.unroll(event)

    async def unroll_internal(self, event: UnrollEvent) -> Content:
        unroller = self.select_internal(event.content)
        logger.debug(f"[{event.transaction_id}] Unrolling internal {event.uuid} with {type(unroller).__name__}")
        return await unroller.unroll(event)
