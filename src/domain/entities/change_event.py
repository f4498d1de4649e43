"""
ChangeEvent Entity

Immutable log of field-level changes on any trackable item.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import LinkedAction


class ChangeEvent(SQLModel, table=True):
    """
    ChangeEvent entity - one row per recorded mutation.

    Business Rules:
    - Immutable (never updated or deleted)
    - (itemtype, items_id) targets any registered trackable type
    - users_id is nullable for system-originated changes
    - field holds a stable key; its label is resolved when rendering
    - id order is insertion order and the default sort
    """

    __tablename__ = "logs"

    id: Optional[int] = Field(default=None, primary_key=True)

    itemtype: str = Field(max_length=100)  # e.g., "Computer", "Ticket"
    items_id: int = Field(default=0)
    itemtype_link: str = Field(default="", max_length=100)
    linked_action: int = Field(default=LinkedAction.field_update.value)

    field: str = Field(default="", max_length=255)
    old_value: str = Field(default="")
    new_value: str = Field(default="")

    users_id: Optional[int] = Field(default=None)

    date_mod: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None),
        sa_column=Column(DateTime),
    )

    __table_args__ = (
        Index("idx_logs_item", "itemtype", "items_id"),
        Index("idx_logs_date_mod", "date_mod"),
        Index("idx_logs_users_id", "users_id"),
    )

    @property
    def action(self) -> Optional[LinkedAction]:
        """Linked action as an enum member, None for codes this system does not know"""
        try:
            return LinkedAction(self.linked_action)
        except ValueError:
            return None

    @property
    def change_description(self) -> str:
        """Human-readable description of the change (unescaped)"""
        action = self.action
        if action is None:
            return ""
        template = _DESCRIPTIONS[action]
        return template.format(old=self.old_value, new=self.new_value)


_DESCRIPTIONS = {
    LinkedAction.field_update: "Change {old} to {new}",
    LinkedAction.add_component: "Add the component: {new}",
    LinkedAction.update_component: "Change {old} to {new}",
    LinkedAction.delete_component: "Delete the component: {old}",
    LinkedAction.install_software: "Install the software: {new}",
    LinkedAction.uninstall_software: "Uninstall the software: {old}",
    LinkedAction.disconnect_item: "Disconnect an item: {old}",
    LinkedAction.connect_item: "Connect an item: {new}",
    LinkedAction.lock_component: "Lock the component: {old}",
    LinkedAction.unlock_component: "Unlock the component: {new}",
    LinkedAction.simple_message: "{new}",
    LinkedAction.delete_item: "Delete the item",
    LinkedAction.restore_item: "Restore the item",
    LinkedAction.add_relation: "Add a link with an item: {new}",
    LinkedAction.delete_relation: "Delete a link with an item: {old}",
    LinkedAction.add_subitem: "Add an item: {new}",
    LinkedAction.update_subitem: "Update an item: {new}",
    LinkedAction.delete_subitem: "Delete an item: {old}",
    LinkedAction.create_item: "Add the item",
    LinkedAction.update_relation: "Update a link with an item: {new}",
}
