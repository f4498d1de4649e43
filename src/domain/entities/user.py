"""
User Entity

Represents a person who can act on items and cause logged changes.
"""

from typing import List, Optional

from sqlmodel import Column, Field, Index, JSON, SQLModel


class User(SQLModel, table=True):
    """
    User entity - actor of changes and reader of history.

    Business Rules:
    - name is the login and must be unique
    - Inactive users cannot read anything
    - entities lists the organisational entities the user may read
    - list_limit overrides the configured default page size
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    realname: Optional[str] = Field(default=None, max_length=255)
    firstname: Optional[str] = Field(default=None, max_length=255)

    is_active: bool = Field(default=True)

    profiles_id: Optional[int] = Field(default=None, foreign_key="profiles.id")
    entities_id: int = Field(default=0)  # home entity
    entities: List[int] = Field(default_factory=list, sa_column=Column(JSON))

    list_limit: Optional[int] = Field(default=None)

    __table_args__ = (Index("idx_user_profile", "profiles_id"),)

    @property
    def display_name(self) -> str:
        """'realname firstname' when known, the login otherwise"""
        parts = [part for part in (self.realname, self.firstname) if part]
        if parts:
            return " ".join(parts)
        return self.name
