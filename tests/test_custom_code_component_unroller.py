# Custom Code Component Unroller Tests
"""Tests for unrolling custom code component bodies."""

import json

import pytest

from content_unroller.errors import ContentReaderError, ValidationError
from content_unroller.models.content import (
    CUSTOM_CODE_COMPONENT_TYPE,
    DYNAMIC_CONTENT_TYPE,
    IMAGE_SET_TYPE,
)
from content_unroller.services.unrollers import CustomCodeComponentUnroller

CCC_A = "22c0d426-1466-11e7-b0c1-37e417ee6c76"
CCC_B = "4723cb4e-027c-11e7-ace0-1ce02ef0def9"
CCC_C = "d02886fc-58ff-11e8-9859-6668838a4c10"
IMAGE_SET = "0261ea4a-1474-11e7-1e92-847abda1ac65"
IMAGE_1 = "639cd952-149f-11e7-2ea7-a07ecd9ac73f"
IMAGE_2 = "71231d3a-13c7-11e7-2ea7-a07ecd9ac73f"
DYNAMIC = "a0d0e0f8-1b2c-4d5e-8f90-123456789abc"


def marker(content_type, uuid):
    return f'<ft-content type="{content_type}" url="http://api.ft.com/content/{uuid}" data-embedded="true"></ft-content>'


def ccc(uuid, *embedded):
    return {
        "id": f"http://www.ft.com/thing/{uuid}",
        "type": CUSTOM_CODE_COMPONENT_TYPE,
        "bodyXML": "<body>" + "".join(marker(t, u) for t, u in embedded) + "</body>",
    }


def image(uuid):
    return {"id": f"http://www.ft.com/thing/{uuid}", "binaryUrl": f"http://images.ft.com/{uuid}.jpg"}


def image_set(uuid, *member_uuids):
    return {
        "id": f"http://www.ft.com/thing/{uuid}",
        "type": IMAGE_SET_TYPE,
        "members": [{"id": f"http://www.ft.com/thing/{u}"} for u in member_uuids],
    }


def dynamic(uuid):
    return {"id": f"http://www.ft.com/thing/{uuid}", "type": DYNAMIC_CONTENT_TYPE}


class TestCustomCodeComponentUnroller:
    """Test CustomCodeComponentUnroller."""

    @pytest.mark.asyncio
    async def test_embeds_expanded(self, make_reader, make_event, api_host):
        """Test embedded image sets get their members and dynamic content is attached."""
        store = {
            IMAGE_SET: image_set(IMAGE_SET, IMAGE_1),
            IMAGE_1: image(IMAGE_1),
            DYNAMIC: dynamic(DYNAMIC),
        }
        content = ccc(CCC_A, (IMAGE_SET_TYPE, IMAGE_SET), (DYNAMIC_CONTENT_TYPE, DYNAMIC))

        result = await CustomCodeComponentUnroller(make_reader(store), api_host).unroll(make_event(content))

        assert result["embeds"] == [
            {**image_set(IMAGE_SET), "members": [image(IMAGE_1)]},
            dynamic(DYNAMIC),
        ]
        assert "embeds" not in content

    @pytest.mark.asyncio
    async def test_unknown_members_dropped(self, make_reader, make_event, api_host):
        store = {IMAGE_SET: image_set(IMAGE_SET, IMAGE_1, IMAGE_2), IMAGE_1: image(IMAGE_1)}
        content = ccc(CCC_A, (IMAGE_SET_TYPE, IMAGE_SET))

        result = await CustomCodeComponentUnroller(make_reader(store), api_host).unroll(make_event(content))

        assert result["embeds"][0]["members"] == [image(IMAGE_1)]

    @pytest.mark.asyncio
    async def test_missing_embed_gets_placeholder(self, make_reader, make_event, api_host, placeholder):
        content = ccc(CCC_A, (IMAGE_SET_TYPE, IMAGE_SET))

        result = await CustomCodeComponentUnroller(make_reader(), api_host).unroll(make_event(content))

        assert result["embeds"] == [placeholder(IMAGE_SET)]

    @pytest.mark.asyncio
    async def test_no_embeds(self, make_reader, make_event, api_host):
        """Test a body without markers comes back without an embeds field."""
        reader = make_reader()
        content = ccc(CCC_A)

        result = await CustomCodeComponentUnroller(reader, api_host).unroll(make_event(content))

        assert result == content
        assert "embeds" not in result
        reader.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cycle_terminates(self, make_reader, make_event, api_host, placeholder):
        """Test A -> B -> A stops at B, which only references A by placeholder."""
        store = {
            CCC_A: ccc(CCC_A, (CUSTOM_CODE_COMPONENT_TYPE, CCC_B)),
            CCC_B: ccc(CCC_B, (CUSTOM_CODE_COMPONENT_TYPE, CCC_A)),
        }
        reader = make_reader(store)
        content = ccc(CCC_A, (CUSTOM_CODE_COMPONENT_TYPE, CCC_B))

        result = await CustomCodeComponentUnroller(reader, api_host, ccc_max_depth=5).unroll(make_event(content))

        assert result["embeds"] == [{**store[CCC_B], "embeds": [placeholder(CCC_A)]}]
        assert reader.get.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("depth", [1, 2])
    async def test_shared_mutual_embeds_stay_acyclic(self, make_reader, make_event, api_host, placeholder, depth):
        """Test A -> {B, C} with B <-> C gives each path its own copy and serializes."""
        store = {
            CCC_B: ccc(CCC_B, (CUSTOM_CODE_COMPONENT_TYPE, CCC_C)),
            CCC_C: ccc(CCC_C, (CUSTOM_CODE_COMPONENT_TYPE, CCC_B)),
        }
        reader = make_reader(store)
        content = ccc(CCC_A, (CUSTOM_CODE_COMPONENT_TYPE, CCC_B), (CUSTOM_CODE_COMPONENT_TYPE, CCC_C))

        result = await CustomCodeComponentUnroller(reader, api_host, ccc_max_depth=depth).unroll(make_event(content))

        json.dumps(result)
        if depth == 1:
            assert result["embeds"] == [
                {**store[CCC_B], "embeds": [store[CCC_C]]},
                {**store[CCC_C], "embeds": [store[CCC_B]]},
            ]
        else:
            assert result["embeds"] == [
                {**store[CCC_B], "embeds": [{**store[CCC_C], "embeds": [placeholder(CCC_B)]}]},
                {**store[CCC_C], "embeds": [{**store[CCC_B], "embeds": [placeholder(CCC_C)]}]},
            ]
        assert reader.get.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("depth", [0, 1, 2])
    async def test_depth_limit(self, make_reader, make_event, api_host, depth):
        """Test embedded component bodies are followed only ccc_max_depth levels."""
        store = {
            CCC_B: ccc(CCC_B, (CUSTOM_CODE_COMPONENT_TYPE, CCC_C)),
            CCC_C: ccc(CCC_C, (IMAGE_SET_TYPE, IMAGE_SET)),
            IMAGE_SET: image_set(IMAGE_SET, IMAGE_1),
            IMAGE_1: image(IMAGE_1),
        }
        content = ccc(CCC_A, (CUSTOM_CODE_COMPONENT_TYPE, CCC_B))

        unroller = CustomCodeComponentUnroller(make_reader(store), api_host, ccc_max_depth=depth)
        result = await unroller.unroll(make_event(content))

        embedded_b = result["embeds"][0]
        if depth == 0:
            assert "embeds" not in embedded_b
            return

        embedded_c = embedded_b["embeds"][0]
        assert embedded_c["id"] == store[CCC_C]["id"]
        if depth == 1:
            assert "embeds" not in embedded_c
        else:
            assert embedded_c["embeds"] == [{**image_set(IMAGE_SET), "members": [image(IMAGE_1)]}]

    @pytest.mark.asyncio
    async def test_reader_failure(self, make_reader, make_event, api_host, placeholder):
        """Test a failed fetch reports placeholders alongside the error."""
        reader = make_reader()
        reader.get.side_effect = ContentReaderError("store down")
        content = ccc(CCC_A, (IMAGE_SET_TYPE, IMAGE_SET))

        with pytest.raises(ContentReaderError) as exc_info:
            await CustomCodeComponentUnroller(reader, api_host).unroll(make_event(content))

        assert exc_info.value.content["embeds"] == [placeholder(IMAGE_SET)]
        assert "embeds" not in content

    @pytest.mark.asyncio
    async def test_requires_body(self, make_reader, make_event, api_host):
        content = ccc(CCC_A)
        del content["bodyXML"]
        with pytest.raises(ValidationError):
            await CustomCodeComponentUnroller(make_reader(), api_host).unroll(make_event(content))
