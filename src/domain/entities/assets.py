"""
Asset Entities

Inventory items whose changes are tracked in the history log.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Computer(SQLModel, table=True):
    """Computer asset"""

    __tablename__ = "computers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(default="", max_length=255)
    entities_id: int = Field(default=0, index=True)
    is_deleted: bool = Field(default=False)

    serial: str = Field(default="", max_length=255)
    otherserial: str = Field(default="", max_length=255)
    comment: str = Field(default="")


class Monitor(SQLModel, table=True):
    """Monitor asset"""

    __tablename__ = "monitors"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(default="", max_length=255)
    entities_id: int = Field(default=0, index=True)
    is_deleted: bool = Field(default=False)

    serial: str = Field(default="", max_length=255)
    size: float = Field(default=0)
