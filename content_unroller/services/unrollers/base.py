# Base Unroller
"""Shared resolution steps used by the type-specific unrollers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from content_unroller.config import settings
from content_unroller.errors import (
    ContentReaderError,
    ConversionError,
    UnrollerError,
    UUIDNotFoundError,
)
from content_unroller.models.content import (
    API_URL_FIELD,
    BODY_XML_FIELD,
    CUSTOM_CODE_COMPONENT_TYPE,
    EMBEDS_FIELD,
    ID_FIELD,
    MEMBERS_FIELD,
    POSTER_FIELD,
    Content,
    UnrollEvent,
    clone,
    get_list,
    get_str,
    has_type,
)
from content_unroller.services.body_parser import scan_embeds
from content_unroller.services.content_reader import ContentReader, unique_uuids
from content_unroller.services.uuid_utils import build_resource_id, extract_uuid

logger = logging.getLogger("content_unroller.services.unrollers")

ContentMap = Dict[str, Content]


def member_uuids(container: Content) -> List[str]:
    """UUIDs of well-formed members; anything unreadable is ignored."""
    uuids = []
    for member in get_list(container, MEMBERS_FIELD) or []:
        try:
            uuids.append(extract_uuid(get_str(member, ID_FIELD)))
        except UUIDNotFoundError:
            continue
    return uuids


class BaseUnroller(ABC):
    """Common state and resolution helpers for unrolling strategies."""

    def __init__(
        self,
        reader: ContentReader,
        api_host: Optional[str] = None,
        ccc_max_depth: Optional[int] = None,
    ):
        self.reader = reader
        self.api_host = api_host or settings.api_host
        self.ccc_max_depth = settings.ccc_max_depth if ccc_max_depth is None else ccc_max_depth

    @abstractmethod
    async def unroll(self, event: UnrollEvent) -> Content:
        """Expand the event's content, raising an UnrollerError on failure."""

    def placeholder(self, uuid: str) -> Content:
        """Reference record used in place of content that could not be fetched."""
        return {ID_FIELD: build_resource_id(self.api_host, "content", uuid)}

    async def fetch(self, uuids: Iterable[str], event: UnrollEvent, content: Any = None) -> ContentMap:
        """
        Batch fetch for a top-level expansion step.

        Reader failures are re-raised with the subject UUID in the message and
        ``content`` (the original document by default) attached.
        """
        try:
            return await self.reader.get(uuids, event.transaction_id)
        except ContentReaderError as e:
            raise ContentReaderError(
                f"error while getting expanded content for uuid: {event.uuid}: {e}",
                content=event.content if content is None else content,
            ) from e

    # ------------------------------------------------------------------
    # Image set / clip set members
    # ------------------------------------------------------------------

    async def resolve_set_members(
        self,
        uuid: str,
        resolved: ContentMap,
        event: UnrollEvent,
        resolve_posters: bool = True,
    ) -> None:
        """
        Replace the members of ``resolved[uuid]`` with their fetched content.

        Each member becomes ``{**member, **fetched}``. Members missing from
        ``resolved`` keep their original reference and members without a
        readable id are dropped. A container that was not fetched is replaced
        by a placeholder record.
        """
        container = resolved.get(uuid)
        if container is None:
            logger.debug(f"[{event.transaction_id}] Cannot match to any found content UUID: {uuid}")
            resolved[uuid] = self.placeholder(uuid)
            return

        members = get_list(container, MEMBERS_FIELD)
        if members is None:
            return

        expanded: List[Content] = []
        for member in members:
            try:
                member_uuid = extract_uuid(get_str(member, ID_FIELD))
            except UUIDNotFoundError as e:
                logger.error(f"[{event.transaction_id}] Error while extracting member UUID in {uuid}: {e}")
                continue

            fetched = resolved.get(member_uuid)
            if fetched is None:
                expanded.append(dict(member))
                continue

            if resolve_posters and POSTER_FIELD in fetched:
                try:
                    poster = await self._resolve_poster(fetched[POSTER_FIELD], event)
                except UnrollerError as e:
                    logger.error(f"[{event.transaction_id}] Error while getting expanded poster for {member_uuid}: {e}")
                else:
                    fetched = {**fetched, POSTER_FIELD: poster}

            expanded.append({**member, **fetched})

        container[MEMBERS_FIELD] = expanded

    async def load_set_members(self, uuids: Iterable[str], loaded: ContentMap, event: UnrollEvent) -> None:
        """Fetch, in one batch, the members of loaded sets that are not loaded yet."""
        missing = []
        for uuid in unique_uuids(uuids):
            missing.extend(member_uuids(loaded.get(uuid) or {}))
        try:
            await self._load_missing(missing, loaded, event)
        except ContentReaderError as e:
            logger.warning(f"[{event.transaction_id}] Cannot read set members for {event.uuid}: {e}")

    async def _resolve_poster(self, poster: Any, event: UnrollEvent) -> Content:
        if not isinstance(poster, dict):
            raise ConversionError("problem in poster field")
        api_url = get_str(poster, API_URL_FIELD)
        if api_url is None:
            raise ConversionError("poster is missing the apiUrl field")

        poster_uuid = extract_uuid(api_url)
        poster_map = await self.reader.get([poster_uuid], event.transaction_id)

        missing = [u for u in member_uuids(poster_map.get(poster_uuid, {})) if u not in poster_map]
        if missing:
            try:
                poster_map.update(await self.reader.get(missing, event.transaction_id))
            except ContentReaderError as e:
                logger.warning(f"[{event.transaction_id}] Cannot read members of poster {poster_uuid}: {e}")

        # Posters of poster members are left alone
        await self.resolve_set_members(poster_uuid, poster_map, event, resolve_posters=False)
        return poster_map[poster_uuid]

    async def expand_members_strict(self, item: Content, loaded: ContentMap, event: UnrollEvent) -> Content:
        """
        Return a copy of ``item`` whose members are replaced by their content.

        Members not yet in ``loaded`` are fetched and added to it. Members the
        content store does not know are dropped. Items without members are
        returned as they are.

        Raises:
            ConversionError: a member has no string id
            UUIDNotFoundError: a member id holds no UUID
            ContentReaderError: fetching the members failed
        """
        members = get_list(item, MEMBERS_FIELD)
        if not members:
            return item

        uuids = []
        for member in members:
            member_id = get_str(member, ID_FIELD)
            if member_id is None:
                raise ConversionError("member without a valid id field")
            uuids.append(extract_uuid(member_id))

        new_uuids = [u for u in unique_uuids(uuids) if loaded.get(u) is None]
        if new_uuids:
            loaded.update(await self.reader.get(new_uuids, event.transaction_id))

        unrolled = []
        for member_uuid in uuids:
            found = loaded.get(member_uuid)
            if found is None:
                logger.debug(f"[{event.transaction_id}] Not found image {member_uuid} for image set")
                continue
            unrolled.append(found)

        result = clone(item)
        result[MEMBERS_FIELD] = unrolled
        return result

    async def resolve_embedded_sets(self, uuids: Iterable[str], loaded: ContentMap, event: UnrollEvent) -> None:
        """Expand the members of every embedded set in ``loaded``, in place."""
        for uuid in unique_uuids(uuids):
            item = loaded.get(uuid)
            if item is None:
                logger.debug(f"[{event.transaction_id}] Cannot match to any found content UUID: {uuid}")
                loaded[uuid] = self.placeholder(uuid)
                continue
            try:
                loaded[uuid] = await self.expand_members_strict(item, loaded, event)
            except UnrollerError as e:
                logger.info(f"[{event.transaction_id}] Failed to fill members of embedded content {uuid}: {e}")

    # ------------------------------------------------------------------
    # Custom code component bodies
    # ------------------------------------------------------------------

    async def resolve_inner_bodies(
        self,
        uuids: Iterable[str],
        loaded: ContentMap,
        accepted_types: Iterable[str],
        event: UnrollEvent,
        visited: FrozenSet[str],
    ) -> None:
        """
        Unroll content embedded in the bodies of already loaded embeds.

        Each loaded item with a ``bodyXML`` is replaced by a copy carrying an
        ``embeds`` list of its own. Fetched entries are never mutated, so an
        item referenced from several places is expanded separately for each
        path. ``visited`` holds the CustomCodeComponent UUIDs on the current
        path; an inner reference to one of them is a cycle and is only
        represented by its placeholder. Nested bodies are followed while the
        depth does not exceed ``ccc_max_depth``.
        """
        accepted_types = tuple(accepted_types)
        expanded: ContentMap = {}
        for uuid in unique_uuids(uuids):
            item = loaded.get(uuid)
            if item is None:
                continue
            expanded[uuid] = await self._expand_body(item, uuid, loaded, accepted_types, event, visited, 1)
        # entries are swapped only once every sibling has been expanded from the fetched originals
        loaded.update(expanded)

    async def _expand_body(
        self,
        item: Content,
        uuid: str,
        loaded: ContentMap,
        accepted_types: Tuple[str, ...],
        event: UnrollEvent,
        visited: FrozenSet[str],
        depth: int,
    ) -> Content:
        result = clone(item)
        if depth > self.ccc_max_depth:
            return result

        body = get_str(item, BODY_XML_FIELD)
        if body is None:
            return result

        inner_uuids = scan_embeds(body, accepted_types, event.transaction_id, uuid)
        if not inner_uuids:
            logger.debug(f"[{event.transaction_id}] No embedded unrollable content inside the body of {uuid}")
            return result

        path = visited | {uuid} if has_type(item, CUSTOM_CODE_COMPONENT_TYPE) else visited
        cyclic = {u for u in inner_uuids if u in path}
        if cyclic:
            logger.info(
                f"[{event.transaction_id}] Cycle detected in {uuid}, "
                f"not expanding custom code components {sorted(cyclic)}"
            )

        try:
            await self._load_missing([u for u in inner_uuids if u not in cyclic], loaded, event)
        except ContentReaderError as e:
            logger.info(f"[{event.transaction_id}] Failed to read inner content of {uuid}: {e}")
            return result

        inner_embeds = []
        for inner_uuid in inner_uuids:
            found = None if inner_uuid in cyclic else loaded.get(inner_uuid)
            if found is None:
                inner_embeds.append(self.placeholder(inner_uuid))
                continue
            try:
                found = await self.expand_members_strict(found, loaded, event)
            except UnrollerError as e:
                logger.info(f"[{event.transaction_id}] Failed to fill members of inner content {inner_uuid}: {e}")
            inner_embeds.append(
                await self._expand_body(found, inner_uuid, loaded, accepted_types, event, path, depth + 1)
            )

        result[EMBEDS_FIELD] = inner_embeds
        return result

    async def _load_missing(self, uuids: Iterable[str], loaded: ContentMap, event: UnrollEvent) -> None:
        missing = [u for u in unique_uuids(uuids) if loaded.get(u) is None]
        if not missing:
            return
        fetched = await self.reader.get(missing, event.transaction_id)
        for uuid in missing:
            if uuid in fetched:
                loaded[uuid] = fetched[uuid]
