import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Store(SQLModel, table=True):
    id: str = Field(default_factory=_uuid, primary_key=True)
    name: str = Field(unique=True)
    domain: str = Field(unique=True)
    country: str = "US"
    currency: str = "USD"
    created_at: datetime = Field(default_factory=_utcnow)


class Product(SQLModel, table=True):
    id: str = Field(default_factory=_uuid, primary_key=True)
    name: str = Field(index=True)
    brand: Optional[str] = None
    barcode: Optional[str] = Field(default=None, unique=True)
    image_url: Optional[str] = None
    price: Optional[float] = None
    currency: str = "USD"
    unit: Optional[str] = None  # e.g. kg, piece, bottle
    package_size: Optional[str] = None  # e.g. 500g, 1L
    store_id: str = Field(foreign_key="store.id")
    product_url: str
    last_updated: datetime = Field(default_factory=_utcnow)  # when price was last seen
    created_at: datetime = Field(default_factory=_utcnow)
