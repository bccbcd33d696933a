"""Relational schema (SQLAlchemy Core)."""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

categories = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(120), nullable=False),
    Column("description", Text),
)

factories = Table(
    "factories",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(120), nullable=False),
    Column("location", String(255), nullable=False),
    Column("description", Text, nullable=False, default=""),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("name_ar", String(255)),
    Column("description", Text, nullable=False, default=""),
    Column("price", Numeric(10, 2), nullable=False),
    Column("original_price", Numeric(10, 2), nullable=False),
    Column("stock", Integer, nullable=False, default=0),
    Column("category_id", ForeignKey("categories.id"), nullable=False),
    Column("factory_id", ForeignKey("factories.id")),
    Column("vendor_id", String(255), index=True),
    CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", String(255), nullable=False, index=True),
    Column("total", Numeric(10, 2), nullable=False),
    Column("status", String(20), nullable=False, default="pending"),
    Column("payment_method", String(10), nullable=False, default="cash"),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# product_id is not a foreign key: items outlive their products.
order_items = Table(
    "order_items",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("order_id", ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("product_id", Integer, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
)
