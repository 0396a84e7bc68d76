# Content Schema Tests
"""Tests for the resolution plan record."""

from content_unroller.models.schema import ContentSchema, SchemaRole


class TestContentSchema:
    """Test ContentSchema reads and writes."""

    def test_put_single_valued(self):
        schema = ContentSchema()
        schema.put(SchemaRole.MAIN_IMAGE, "a")
        schema.put("mainImage", "b")
        assert schema.get(SchemaRole.MAIN_IMAGE) == "a"
        assert schema.main_image == ["a", "b"]

    def test_put_on_embeds_is_dropped(self):
        """Test single writes to embeds are ignored."""
        schema = ContentSchema()
        schema.put(SchemaRole.EMBEDS, "a")
        assert schema.is_empty()

    def test_put_all_on_single_role_is_dropped(self):
        schema = ContentSchema()
        schema.put_all(SchemaRole.PROMOTIONAL_IMAGE, ["a", "b"])
        assert schema.get(SchemaRole.PROMOTIONAL_IMAGE) is None

    def test_unknown_role_is_dropped(self):
        schema = ContentSchema()
        schema.put("bogus", "a")
        schema.put_all("bogus", ["b"])
        assert schema.to_list() == []
        assert schema.get("bogus") is None
        assert schema.get_all("bogus") == []

    def test_lead_images_accept_both_writes(self):
        schema = ContentSchema()
        schema.put(SchemaRole.LEAD_IMAGES, "a")
        schema.put_all(SchemaRole.LEAD_IMAGES, ["b", "c"])
        assert schema.get_all(SchemaRole.LEAD_IMAGES) == ["a", "b", "c"]

    def test_get_all_on_single_role_is_empty(self):
        schema = ContentSchema()
        schema.put(SchemaRole.MAIN_IMAGE, "a")
        assert schema.get_all(SchemaRole.MAIN_IMAGE) == []

    def test_get_all_returns_copy(self):
        schema = ContentSchema()
        schema.put_all(SchemaRole.EMBEDS, ["a"])
        schema.get_all(SchemaRole.EMBEDS).append("b")
        assert schema.embeds == ["a"]

    def test_to_list_flattens_every_role(self):
        schema = ContentSchema()
        schema.put(SchemaRole.PROMOTIONAL_IMAGE, "p")
        schema.put_all(SchemaRole.EMBEDS, ["e1", "e2"])
        schema.put(SchemaRole.MAIN_IMAGE, "m")
        assert schema.to_list() == ["m", "e1", "e2", "p"]
        assert not schema.is_empty()
