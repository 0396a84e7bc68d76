# Content Unrollers
"""Type-specific unrolling strategies and the dispatcher that selects them."""

from .article import ArticleUnroller
from .base import BaseUnroller
from .clip import ClipUnroller
from .clip_set import ClipSetUnroller
from .custom_code_component import CustomCodeComponentUnroller
from .default import DefaultUnroller
from .image_set import ImageSetUnroller
from .internal import InternalArticleUnroller, InternalDefaultUnroller
from .universal import UniversalUnroller

__all__ = [
    "ArticleUnroller",
    "BaseUnroller",
    "ClipUnroller",
    "ClipSetUnroller",
    "CustomCodeComponentUnroller",
    "DefaultUnroller",
    "ImageSetUnroller",
    "InternalArticleUnroller",
    "InternalDefaultUnroller",
    "UniversalUnroller",
]
