"""Product store - sole owner of the inventory collection.

Keeps every product in an in-memory mirror for synchronous reads and writes
through to SQLite. The mirror only changes after a write commits, so a failed
write never leaves a partial state visible to later reads.

Lifecycle:
    store = ProductStore(settings)
    await store.initialize()      # opens storage, seeds an empty collection
    product = await store.create(name="Widget", quantity=5, ...)
    store.low_stock()
    await store.close()
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from stockkeeper.config import Settings, get_settings
from stockkeeper.errors import (
    InitializationError,
    NotFoundError,
    ProductExistsError,
    StorageIOError,
    StoreNotInitializedError,
    ValidationError,
)
from stockkeeper.infra.database import (
    create_engine,
    create_session_factory,
    dispose_engine,
    session_scope,
)
from stockkeeper.infra.logging import get_logger
from stockkeeper.models.base import Base
from stockkeeper.models.product import ProductRecord
from stockkeeper.schemas.inventory import InventoryStats, SortOption
from stockkeeper.schemas.product import Product, ProductFields
from stockkeeper.services.seed_data import SAMPLE_PRODUCTS

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

class ChangeKind(str, Enum):
    """Kind of committed mutation reported to listeners."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    CLEARED = "cleared"
    SEEDED = "seeded"
    RESTORED = "restored"


@dataclass(frozen=True)
class StoreChange:
    """A committed mutation.

    Attributes:
        kind: What happened
        product_ids: Ids of the affected products
    """

    kind: ChangeKind
    product_ids: tuple[str, ...]


Listener = Callable[[StoreChange], None]


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def new_product_id() -> str:
    return str(uuid4())


class ProductStore:
    """Durable product collection with CRUD, queries and statistics.

    One instance is created by the application's composition root and passed
    to every collaborator that needs it. Reads are synchronous; mutations
    are coroutines because they commit to disk before returning.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_product_id,
    ) -> None:
        """Initialize an unopened store.

        Args:
            settings: Application settings (defaults to cached settings)
            clock: Source of mutation timestamps
            id_factory: Source of new product ids
        """
        self._settings = settings or get_settings()
        self._clock = clock
        self._new_id = id_factory
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._products: dict[str, Product] = {}
        self._listeners: list[Listener] = []
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> ProductStore:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_ready(self) -> bool:
        """True between a successful ``initialize`` and ``close``."""
        return self._session_factory is not None

    async def initialize(self) -> None:
        """Open storage and seed an empty collection with sample products.

        Safe to call repeatedly or concurrently: the seed is only written
        when the stored collection is empty.

        Raises:
            InitializationError: If the database cannot be opened or read
            StorageIOError: If writing the seed data fails
        """
        async with self._lock:
            if not self.is_ready:
                await self._open()

            if not self._products and self._settings.seed_sample_data:
                await self._seed()

    async def close(self) -> None:
        """Release the storage handle; only ``initialize`` is legal afterwards."""
        engine = self._engine
        self._engine = None
        self._session_factory = None
        self._products = {}
        self._listeners = []

        if engine is not None:
            await dispose_engine(engine)
            logger.info("Product store closed")

    async def reset_to_sample_data(self) -> None:
        """Replace the whole collection with the sample products."""
        self._require_ready("reset_to_sample_data")
        async with self._lock:
            products = self._sample_products()
            async with self._transaction("reset") as session:
                await session.execute(delete(ProductRecord))
                session.add_all([ProductRecord.from_product(p) for p in products])

            removed = tuple(self._products)
            self._products = {p.id: p for p in products}

        logger.info("Collection reset to sample data", count=len(products))
        self._notify(ChangeKind.CLEARED, removed)
        self._notify(ChangeKind.SEEDED, (p.id for p in products))

    async def _open(self) -> None:
        path = self._settings.database_path
        engine: AsyncEngine | None = None

        try:
            engine = create_engine(self._settings)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            factory = create_session_factory(engine)
            async with session_scope(factory) as session:
                result = await session.execute(select(ProductRecord))
                products = {
                    record.id: record.to_product() for record in result.scalars()
                }

        except (SQLAlchemyError, OSError, ValueError) as e:
            if engine is not None:
                await engine.dispose()
            raise InitializationError(
                f"Cannot open product storage at '{path}': {e}"
            ) from e

        self._engine = engine
        self._session_factory = factory
        self._products = products

        logger.info(
            "Product store opened",
            database_path=str(path),
            product_count=len(products),
        )

    def _sample_products(self) -> list[Product]:
        now = self._clock()
        return [
            Product(id=self._new_id(), created_at=now, updated_at=now, **fields.model_dump())
            for fields in SAMPLE_PRODUCTS
        ]

    async def _seed(self) -> None:
        products = self._sample_products()

        seeded = False
        async with self._transaction("seed") as session:
            existing = await session.scalar(
                select(func.count()).select_from(ProductRecord)
            )
            if not existing:
                session.add_all([ProductRecord.from_product(p) for p in products])
                seeded = True

        if not seeded:
            logger.debug("Stored collection not empty, skipping seed")
            return

        self._products.update((p.id, p) for p in products)
        logger.info("Seeded sample products", count=len(products))
        self._notify(ChangeKind.SEEDED, (p.id for p in products))

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create(
        self,
        name: str,
        quantity: int,
        price: Decimal | float | int | str,
        category: str,
        low_stock_threshold: int | None = None,
        description: str | None = None,
    ) -> Product:
        """Add a new product with a fresh id and timestamps.

        Args:
            name: Product name
            quantity: Units in stock
            price: Unit price
            category: Category label
            low_stock_threshold: Low-stock threshold (defaults to settings)
            description: Optional description

        Returns:
            The stored product

        Raises:
            ValidationError: If a value cannot represent its field
            StorageIOError: If the write fails
        """
        self._require_ready("create")

        if low_stock_threshold is None:
            low_stock_threshold = self._settings.default_low_stock_threshold

        fields = self._validate(
            ProductFields,
            {
                "name": name,
                "quantity": quantity,
                "price": price,
                "category": category,
                "low_stock_threshold": low_stock_threshold,
                "description": description,
            },
            "create",
        )

        product_id = self._new_id()
        while product_id in self._products:
            product_id = self._new_id()

        now = self._clock()
        product = Product(id=product_id, created_at=now, updated_at=now, **fields.model_dump())

        async with self._transaction("create") as session:
            session.add(ProductRecord.from_product(product))

        self._products[product.id] = product
        logger.debug("Product created", product_id=product.id, name=product.name)
        self._notify(ChangeKind.CREATED, (product.id,))
        return product

    def get_by_id(self, product_id: str) -> Product | None:
        """Look up a product; ``None`` when absent."""
        self._require_ready("get_by_id")
        return self._products.get(product_id)

    def require(self, product_id: str) -> Product:
        """Look up a product that must exist.

        Raises:
            NotFoundError: If no product has this id
        """
        product = self.get_by_id(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return product

    def get_all(self) -> list[Product]:
        """Every product, in no particular order."""
        self._require_ready("get_all")
        return list(self._products.values())

    async def update(self, product: Product | Mapping[str, Any]) -> Product:
        """Replace the stored fields of ``product.id``.

        ``created_at`` of an existing record is kept and ``updated_at`` is
        set to now even when nothing changed. An unknown id is inserted.

        Returns:
            The stored product

        Raises:
            ValidationError: If the product is malformed
            StorageIOError: If the write fails; the previous record is kept
        """
        self._require_ready("update")
        product = self._validate(Product, self._as_data(product), "update")

        existing = self._products.get(product.id)
        created_at = existing.created_at if existing else product.created_at
        updated_at = max(self._clock(), created_at)
        if existing is not None:
            updated_at = max(updated_at, existing.updated_at)

        stored = product.model_copy(
            update={"created_at": created_at, "updated_at": updated_at}
        )

        async with self._transaction("update") as session:
            await session.merge(ProductRecord.from_product(stored))

        self._products[stored.id] = stored
        logger.debug("Product updated", product_id=stored.id, inserted=existing is None)
        self._notify(
            ChangeKind.UPDATED if existing is not None else ChangeKind.CREATED,
            (stored.id,),
        )
        return stored

    async def delete(self, product_id: str) -> None:
        """Remove a product; unknown ids are ignored."""
        self._require_ready("delete")
        if product_id not in self._products:
            return

        async with self._transaction("delete") as session:
            await session.execute(
                delete(ProductRecord).where(ProductRecord.id == product_id)
            )

        del self._products[product_id]
        logger.debug("Product deleted", product_id=product_id)
        self._notify(ChangeKind.DELETED, (product_id,))

    async def restore(self, product: Product | Mapping[str, Any]) -> Product:
        """Put back a deleted product with its original id and timestamps.

        Returns:
            The restored product

        Raises:
            ValidationError: If the product is malformed
            ProductExistsError: If a product with the same id is still stored
            StorageIOError: If the write fails
        """
        self._require_ready("restore")
        product = self._validate(Product, self._as_data(product), "restore")
        if product.id in self._products:
            raise ProductExistsError(product.id)

        async with self._transaction("restore") as session:
            await session.merge(ProductRecord.from_product(product))

        self._products[product.id] = product
        logger.debug("Product restored", product_id=product.id)
        self._notify(ChangeKind.RESTORED, (product.id,))
        return product

    async def clear_all(self) -> None:
        """Delete every product. Irreversible."""
        self._require_ready("clear_all")

        async with self._transaction("clear_all") as session:
            await session.execute(delete(ProductRecord))

        removed = tuple(self._products)
        self._products = {}
        logger.info("Cleared all products", count=len(removed))
        self._notify(ChangeKind.CLEARED, removed)

    # =========================================================================
    # Queries
    # =========================================================================

    def search(self, query: str) -> list[Product]:
        """Case-insensitive substring match on name or category."""
        needle = query.strip().lower()
        if not needle:
            return self.get_all()
        return [
            p
            for p in self.get_all()
            if needle in p.name.lower() or needle in p.category.lower()
        ]

    def filter_by_category(self, category: str) -> list[Product]:
        """Products whose category equals ``category`` exactly."""
        return [p for p in self.get_all() if p.category == category]

    def low_stock(self) -> list[Product]:
        return [p for p in self.get_all() if p.is_low_stock]

    def out_of_stock(self) -> list[Product]:
        return [p for p in self.get_all() if p.is_out_of_stock]

    def categories(self) -> list[str]:
        """Distinct categories present in the collection, sorted."""
        return sorted({p.category for p in self.get_all()})

    def list_products(
        self,
        query: str | None = None,
        category: str | None = None,
        sort: SortOption = SortOption.NAME,
    ) -> list[Product]:
        """Search, filter by category, then sort, as the product list does."""
        products = self.search(query) if query else self.get_all()
        if category is not None:
            products = [p for p in products if p.category == category]

        if sort is SortOption.PRICE:
            return sorted(products, key=lambda p: p.price, reverse=True)
        if sort is SortOption.QUANTITY:
            return sorted(products, key=lambda p: p.quantity)
        if sort is SortOption.CATEGORY:
            return sorted(products, key=lambda p: p.category)
        return sorted(products, key=lambda p: p.name)

    # =========================================================================
    # Statistics
    # =========================================================================

    @property
    def total_product_count(self) -> int:
        self._require_ready("total_product_count")
        return len(self._products)

    @property
    def total_inventory_value(self) -> Decimal:
        return sum((p.total_value for p in self.get_all()), Decimal("0"))

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock())

    @property
    def out_of_stock_count(self) -> int:
        return len(self.out_of_stock())

    @property
    def total_quantity(self) -> int:
        return sum(p.quantity for p in self.get_all())

    @property
    def category_count(self) -> int:
        return len({p.category for p in self.get_all()})

    @property
    def average_value(self) -> Decimal:
        """Inventory value per product. Zero for an empty collection."""
        count = self.total_product_count or 1
        return self.total_inventory_value / count

    def stats(self) -> InventoryStats:
        """Snapshot of every aggregate statistic."""
        return InventoryStats(
            total_product_count=self.total_product_count,
            total_inventory_value=self.total_inventory_value,
            low_stock_count=self.low_stock_count,
            out_of_stock_count=self.out_of_stock_count,
            total_quantity=self.total_quantity,
            category_count=self.category_count,
            average_value=self.average_value,
        )

    # =========================================================================
    # Change notification
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every committed mutation.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: ChangeKind, product_ids: Iterable[str]) -> None:
        change = StoreChange(kind=kind, product_ids=tuple(product_ids))
        for listener in list(self._listeners):
            listener(change)

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_ready(self, operation: str) -> None:
        if not self.is_ready:
            raise StoreNotInitializedError(operation)

    @staticmethod
    def _as_data(product: Product | Mapping[str, Any]) -> Any:
        if isinstance(product, Product):
            return product.model_dump()
        return product

    @staticmethod
    def _validate(model: type[ModelT], data: Any, operation: str) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid product passed to {operation}: {e.error_count()} error(s)",
                errors=e.errors(include_url=False),
            ) from e

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        factory = self._session_factory
        if factory is None:
            raise StoreNotInitializedError(operation)

        try:
            async with session_scope(factory) as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            raise StorageIOError(f"{operation} failed: {e}") from e
