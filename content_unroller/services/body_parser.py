# Body Parser
"""
Scan rich-text bodies for embedded content markers.

An embed marker looks like::

    <ft-content type="http://www.ft.com/ontology/content/ImageSet"
                url="http://api.ft.com/content/<uuid>"
                data-embedded="true"></ft-content>

Only markers flagged as embedded and carrying one of the accepted types count.
"""

import logging
from typing import Iterable, List

from bs4 import BeautifulSoup

from content_unroller.errors import UUIDNotFoundError
from content_unroller.services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.services.body_parser")

EMBED_TAG = "ft-content"
EMBEDDED_ATTR = "data-embedded"
TYPE_ATTR = "type"
URL_ATTR = "url"


def scan_embeds(
    body: str,
    accepted_types: Iterable[str],
    transaction_id: str = "",
    uuid: str = "",
) -> List[str]:
    """
    Collect the UUIDs of embedded content in document order.

    Duplicates are kept. A body that cannot be parsed yields no UUIDs and a
    marker whose url holds no UUID is skipped.

    Args:
        body: XHTML fragment, usually the ``bodyXML`` field
        accepted_types: content type URIs that qualify a marker
        transaction_id: transaction id for log context
        uuid: UUID of the content owning the body, for log context

    Returns:
        List of UUIDs
    """
    accepted = set(accepted_types)
    if not body or not accepted:
        return []

    try:
        soup = BeautifulSoup(body, "html.parser")
    except Exception as e:
        logger.warning(f"[{transaction_id}] Cannot parse bodyXML for content {uuid}: {e}")
        return []

    uuids: List[str] = []
    for node in soup.find_all(EMBED_TAG):
        if node.get(EMBEDDED_ATTR) != "true":
            continue
        if node.get(TYPE_ATTR) not in accepted:
            continue
        url = node.get(URL_ATTR, "")
        try:
            uuids.append(extract_uuid(url))
        except UUIDNotFoundError as e:
            logger.error(f"[{transaction_id}] Skipping embedded content in {uuid}: {e}")
    return uuids
