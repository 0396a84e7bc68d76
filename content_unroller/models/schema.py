# Content Schema
"""Resolution plan: which UUIDs must be fetched and the field each one expands."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union

logger = logging.getLogger("content_unroller.models.schema")


class SchemaRole(str, Enum):
    """Expansion points a schema can hold."""

    MAIN_IMAGE = "mainImage"
    PROMOTIONAL_IMAGE = "promotionalImage"
    LEAD_IMAGES = "leadImages"
    EMBEDS = "embeds"


SINGLE_VALUED_ROLES = frozenset({SchemaRole.MAIN_IMAGE, SchemaRole.PROMOTIONAL_IMAGE})
MULTI_VALUED_ROLES = frozenset({SchemaRole.EMBEDS, SchemaRole.LEAD_IMAGES})

# leadImages is filled one image at a time as well as in bulk
_PUT_ROLES = SINGLE_VALUED_ROLES | {SchemaRole.LEAD_IMAGES}


def _as_role(role: Union[SchemaRole, str]) -> Optional[SchemaRole]:
    try:
        return SchemaRole(role)
    except ValueError:
        return None


@dataclass
class ContentSchema:
    """UUIDs of related content, grouped by the field they are used in."""

    main_image: List[str] = field(default_factory=list)
    promotional_image: List[str] = field(default_factory=list)
    lead_images: List[str] = field(default_factory=list)
    embeds: List[str] = field(default_factory=list)

    def _values(self, role: SchemaRole) -> List[str]:
        return {
            SchemaRole.MAIN_IMAGE: self.main_image,
            SchemaRole.PROMOTIONAL_IMAGE: self.promotional_image,
            SchemaRole.LEAD_IMAGES: self.lead_images,
            SchemaRole.EMBEDS: self.embeds,
        }[role]

    def put(self, role: Union[SchemaRole, str], uuid: str) -> None:
        """Append a single UUID. Roles outside mainImage, promotionalImage and leadImages are dropped."""
        known = _as_role(role)
        if known not in _PUT_ROLES:
            logger.debug(f"Ignoring UUID {uuid} for unsupported schema role {role}")
            return
        self._values(known).append(uuid)

    def put_all(self, role: Union[SchemaRole, str], uuids: Iterable[str]) -> None:
        """Append several UUIDs. Only embeds and leadImages accept bulk writes."""
        known = _as_role(role)
        if known not in MULTI_VALUED_ROLES:
            logger.debug(f"Ignoring UUIDs for unsupported schema role {role}")
            return
        self._values(known).extend(uuids)

    def get(self, role: Union[SchemaRole, str]) -> Optional[str]:
        """First UUID of a single-valued role, or None."""
        known = _as_role(role)
        if known not in SINGLE_VALUED_ROLES:
            return None
        values = self._values(known)
        return values[0] if values else None

    def get_all(self, role: Union[SchemaRole, str]) -> List[str]:
        """All UUIDs of a multi-valued role."""
        known = _as_role(role)
        if known not in MULTI_VALUED_ROLES:
            return []
        return list(self._values(known))

    def to_list(self) -> List[str]:
        """Every UUID in the plan, flattened for one batched fetch."""
        return [*self.main_image, *self.embeds, *self.promotional_image, *self.lead_images]

    def is_empty(self) -> bool:
        return not self.to_list()
