"""Entity types and a fixed product catalogue shared by the engine tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class OrderStatus(Enum):
    PENDING = 0
    PROCESSING = 1
    SHIPPED = 2
    DELIVERED = 3
    CANCELLED = 4


class Priority(str, Enum):
    LOW = "low"
    HIGH = "high"


class Category(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


class OrderItem(BaseModel):
    quantity: int
    unit_price: Decimal


class Product(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int
    is_active: bool = True
    created_date: datetime
    category: Category | None = None
    order_items: list[OrderItem] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class Order(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    customer_name: str | None = None
    total_amount: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.PENDING
    previous_status: OrderStatus | None = None
    priority: Priority = Priority.LOW


@dataclass
class Address:
    city: str
    zip_code: str


@dataclass
class Warehouse:
    code: str
    capacity: int
    address: Address
    backup: Optional[Address] = None
    neighbours: list[Address] = field(default_factory=list)


class Shelf:
    """Plain annotated class."""

    label: str
    level: int
    warehouse: Warehouse

    def __init__(self, label: str, level: int, warehouse: Warehouse) -> None:
        self.label = label
        self.level = level
        self.warehouse = warehouse


ELECTRONICS = Category(id=1, name="Electronics", description="Gadgets")
BOOKS = Category(id=2, name="Books")
GARDEN = Category(id=3, name="Garden")

BASE_DATE = datetime(2024, 1, 1, 12, 0, 0)


def make_products() -> list[Product]:
    """
    Twenty products with ids 1..20.

    - price == id * 10
    - stock_quantity == id % 7
    - even ids are active
    - ids 1-7 electronics, 8-14 books, 15-19 garden, 20 without category
    """
    products = []
    for i in range(1, 21):
        if i <= 7:
            category = ELECTRONICS
        elif i <= 14:
            category = BOOKS
        elif i <= 19:
            category = GARDEN
        else:
            category = None
        products.append(
            Product(
                id=i,
                name=f"Product {i:02d}",
                description=None if i % 5 == 0 else f"Description {i}",
                price=Decimal(i * 10),
                stock_quantity=i % 7,
                is_active=i % 2 == 0,
                created_date=BASE_DATE + timedelta(days=i),
                category=category,
                order_items=[OrderItem(quantity=i, unit_price=Decimal(i))],
                tags=["even"] if i % 2 == 0 else ["odd"],
            )
        )
    return products
