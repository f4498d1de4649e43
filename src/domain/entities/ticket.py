"""
Ticket Entity

Helpdesk request whose changes are tracked in the history log.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Ticket(SQLModel, table=True):
    """
    Ticket entity.

    Business Rules:
    - status follows the helpdesk lifecycle (1 new ... 6 closed)
    - users_id_recipient is the user who opened the ticket
    """

    __tablename__ = "tickets"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(default="", max_length=255)
    entities_id: int = Field(default=0, index=True)
    is_deleted: bool = Field(default=False)

    status: int = Field(default=1)
    urgency: int = Field(default=3)
    priority: int = Field(default=3)
    content: str = Field(default="")
    users_id_recipient: Optional[int] = Field(default=None)
