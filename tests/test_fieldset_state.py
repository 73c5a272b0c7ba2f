"""Tests for current-fieldset state and panel ids."""
import asyncio
import threading

import pytest

from govukform import (
    begin_fieldset,
    current_fieldset_attribute,
    end_fieldset,
    fieldset_scope,
    panel_id,
)


def test_no_fieldset_by_default():
    assert current_fieldset_attribute() is None


def test_begin_and_end():
    token = begin_fieldset("location")
    assert current_fieldset_attribute() == "location"

    end_fieldset(token)
    assert current_fieldset_attribute() is None


def test_nested_scopes_restore_outer_value():
    with fieldset_scope("location") as attribute:
        assert attribute == "location"
        with fieldset_scope("gender"):
            assert current_fieldset_attribute() == "gender"
        assert current_fieldset_attribute() == "location"
    assert current_fieldset_attribute() is None


def test_scope_restores_on_exception():
    with pytest.raises(RuntimeError):
        with fieldset_scope("location"):
            raise RuntimeError("render failed")
    assert current_fieldset_attribute() is None


def test_attribute_is_stringified():
    with fieldset_scope(42):
        assert current_fieldset_attribute() == "42"


class TestPanelId:
    """Tests for panel_id."""

    def test_choice_panel(self):
        assert panel_id("location", "other") == "location_other_panel"

    def test_check_box_panel(self):
        assert panel_id("mines") == "mines_panel"

    def test_override(self):
        assert panel_id("location", "other", override="custom_panel") == "custom_panel"

    def test_empty_override(self):
        """An empty override is still an override."""
        assert panel_id("location", "other", override="") == ""


class TestIsolation:
    """Concurrent renders never see each other's fieldset."""

    def test_threads(self):
        barrier = threading.Barrier(2)
        seen = {}

        def render(attribute):
            with fieldset_scope(attribute):
                barrier.wait(timeout=5)
                seen[attribute] = current_fieldset_attribute()
                barrier.wait(timeout=5)

        threads = [threading.Thread(target=render, args=(name,)) for name in ("location", "gender")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert seen == {"location": "location", "gender": "gender"}
        assert current_fieldset_attribute() is None

    def test_asyncio_tasks(self):
        async def render(attribute):
            with fieldset_scope(attribute):
                await asyncio.sleep(0)
                return current_fieldset_attribute()

        async def main():
            return await asyncio.gather(render("location"), render("gender"))

        assert asyncio.run(main()) == ["location", "gender"]
