"""Database table definitions for stored posts"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class PostRow(SQLModel, table=True):
    """A published post: metadata columns plus the block sequence as JSON"""
    __tablename__ = "posts"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(..., sa_column=Column(Text, nullable=False, unique=True, index=True))
    post_id: int = Field(..., nullable=False, description="Numeric post identifier from the author")
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    date: str = Field(..., sa_column=Column(String(32), nullable=False))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    data: Dict[str, Any] = Field(..., sa_column=Column(JSON, nullable=False))
    path: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    committed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
