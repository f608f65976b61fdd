"""Tests for fga_autoconfig/clients/mapper.py: copy-if-present assignment."""

from types import SimpleNamespace

from fga_autoconfig.clients.mapper import has_text, is_not_none, map_field


def _target():
    return SimpleNamespace(
        name="default-name",
        count=7,
        nested=SimpleNamespace(limit=3),
    )


class TestPredicates:

    def test_is_not_none(self):
        assert is_not_none(0)
        assert is_not_none("")
        assert not is_not_none(None)

    def test_has_text(self):
        assert has_text("x")
        assert not has_text("")
        assert not has_text("   ")
        assert not has_text(None)
        assert not has_text(5)


class TestMapField:

    def test_assigns_present_value(self):
        target = _target()
        assert map_field("new", target, "name") is True
        assert target.name == "new"

    def test_none_leaves_default(self):
        target = _target()
        assert map_field(None, target, "name") is False
        assert target.name == "default-name"

    def test_zero_is_present(self):
        target = _target()
        map_field(0, target, "count")
        assert target.count == 0

    def test_blank_string_skipped_with_has_text(self):
        target = _target()
        assert map_field("  ", target, "name", when=has_text) is False
        assert target.name == "default-name"

    def test_transform_applied(self):
        target = _target()
        map_field("abc", target, "name", transform=str.upper)
        assert target.name == "ABC"

    def test_transform_not_called_when_absent(self):
        calls = []
        map_field(None, _target(), "name", transform=calls.append)
        assert calls == []

    def test_dotted_path(self):
        target = _target()
        map_field(10, target, "nested.limit")
        assert target.nested.limit == 10
        assert target.count == 7
