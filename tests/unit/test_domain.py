from datetime import datetime, timezone

import pytest

from src.app.services.access_control import Actor
from src.domain.entities import ChangeEvent, Computer, LinkedAction, Right, User
from src.domain.trackables import TrackableRegistry, default_registry


@pytest.mark.parametrize(
    "linked_action, old_value, new_value, expected",
    [
        (LinkedAction.field_update, "A", "B", "Change A to B"),
        (LinkedAction.create_item, "", "", "Add the item"),
        (LinkedAction.delete_item, "", "", "Delete the item"),
        (LinkedAction.add_relation, "", "screen-7", "Add a link with an item: screen-7"),
        (LinkedAction.delete_subitem, "disk C:", "", "Delete an item: disk C:"),
        (LinkedAction.simple_message, "", "{not a placeholder}", "{not a placeholder}"),
        (99, "A", "B", ""),
    ],
)
def test_change_description(linked_action, old_value, new_value, expected):
    event = ChangeEvent(
        itemtype="Computer",
        items_id=1,
        linked_action=int(linked_action),
        old_value=old_value,
        new_value=new_value,
    )

    assert event.change_description == expected


def test_unknown_action_has_no_enum_member():
    assert ChangeEvent(itemtype="Computer", items_id=1, linked_action=99).action is None


@pytest.mark.parametrize(
    "realname, firstname, expected",
    [("Tech", "Ada", "Tech Ada"), ("Tech", None, "Tech"), (None, None, "tech")],
)
def test_user_display_name(realname, firstname, expected):
    assert User(name="tech", realname=realname, firstname=firstname).display_name == expected


def test_actor_rights_are_bitmasks():
    actor = Actor(user_id=1, rights={"computer": Right.READ | Right.UPDATE})

    assert actor.has_right("computer")
    assert actor.has_right("computer", Right.UPDATE)
    assert not actor.has_right("computer", Right.PURGE)
    assert not actor.has_right("ticket")


def test_actor_can_read_needs_right_and_entity():
    computer_type = default_registry.get("Computer")
    actor = Actor(user_id=1, rights={"computer": 1}, entities=frozenset({0}))

    assert actor.can_read(computer_type, Computer(id=1, entities_id=0))
    assert not actor.can_read(computer_type, Computer(id=2, entities_id=1))
    assert not actor.can_read(computer_type, None)
    assert not actor.can_read(default_registry.get("Ticket"), Computer(id=1, entities_id=0))


def test_registry_lookup():
    assert default_registry.is_known("Computer")
    assert not default_registry.is_known("computer")
    assert not default_registry.is_known(None)
    assert default_registry.names() == ["Computer", "Monitor", "Ticket", "User"]
    assert default_registry.label("Plugin") == "Plugin"


def test_field_labels():
    computer_type = default_registry.get("Computer")

    assert computer_type.field_label("serial") == "Serial number"
    assert computer_type.field_label("custom") == "custom"
    assert computer_type.get_field("date_mod").internal


def test_empty_registry():
    registry = TrackableRegistry()

    assert registry.names() == []
    assert registry.get("Computer") is None


def test_change_event_date_defaults_to_naive_utc_now():
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    event = ChangeEvent(itemtype="Computer", items_id=42)
    after = datetime.now(timezone.utc).replace(tzinfo=None)

    assert event.date_mod.tzinfo is None
    assert before <= event.date_mod <= after
