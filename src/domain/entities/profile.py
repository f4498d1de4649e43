"""
Profile Entity

A named set of rights assigned to users.
"""

from typing import Dict, Optional

from sqlmodel import Column, Field, JSON, SQLModel


class Profile(SQLModel, table=True):
    """
    Profile entity - maps right names to right bitmasks.

    Business Rules:
    - rights keys are right names ("computer", "ticket", "logs", ...)
    - rights values combine Right bits (READ=1, UPDATE=2, ...)
    - a missing right name means no right at all
    """

    __tablename__ = "profiles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    rights: Dict[str, int] = Field(default_factory=dict, sa_column=Column(JSON))
