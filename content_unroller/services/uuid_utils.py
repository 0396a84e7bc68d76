# UUID Utilities
"""Extract UUIDs from resource identifiers and build identifiers from UUIDs."""

import re
from typing import Any

from content_unroller.errors import UUIDNotFoundError

UUID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


def extract_uuid(value: Any) -> str:
    """
    Return the first UUID-shaped substring of ``value``.

    The value does not need to be a well-formed URL, e.g.
    ``http://www.ft.com/thing/<uuid>`` and ``<uuid>`` both work.

    Raises:
        UUIDNotFoundError: if ``value`` is not a string or holds no UUID
    """
    if not isinstance(value, str):
        raise UUIDNotFoundError(f"cannot extract UUID from {value!r}")
    match = UUID_PATTERN.search(value)
    if match is None:
        raise UUIDNotFoundError(f"cannot extract UUID from {value}")
    return match.group(0)


def build_resource_id(api_host: str, resource_kind: str, uuid: str) -> str:
    return f"http://{api_host}/{resource_kind}/{uuid}"
