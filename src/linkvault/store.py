"""SQLAlchemy-backed store for saved items.

Every read and write is scoped to the owning user. An id that belongs to
another user behaves exactly like an id that does not exist.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .db import SavedItem, create_db_engine, init_db, utcnow
from .exceptions import InvalidInputError, ItemNotFoundError, StoreError
from .lifecycle import ItemStatus, ensure_transition

logger = logging.getLogger(__name__)

# Columns a caller may change after creation
UPDATABLE_FIELDS = frozenset({
    "status",
    "title",
    "content",
    "og_image",
    "author",
    "published_at",
    "summary",
    "tags",
})


class ItemStore:
    """Create, update and query saved items for a user."""

    def __init__(self, engine: Engine):
        self._engine = engine
        self._sessions = sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> "ItemStore":
        return cls(create_db_engine(database_url))

    def init_schema(self) -> None:
        try:
            init_db(self._engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to initialise database: {e}") from e

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._sessions()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Database error: {e}") from e
        finally:
            session.close()

    def create(
        self,
        user_id: str,
        url: str,
        status: ItemStatus = ItemStatus.PENDING,
    ) -> SavedItem:
        """Insert a new item for ``user_id`` and return it with its generated id."""
        now = utcnow()
        item = SavedItem(
            user_id=user_id,
            url=url,
            status=status,
            created_at=now,
            updated_at=now,
        )
        with self._session() as session:
            session.add(item)
            session.commit()
        logger.debug("Created item %s (%s) for %s", item.id, status.value, url)
        return item

    def update(self, item_id: str, user_id: str, **fields) -> SavedItem:
        """Apply ``fields`` to an item owned by ``user_id``.

        Raises:
            ItemNotFoundError: no item with this id belongs to the user.
            InvalidInputError: a field is unknown or immutable.
            InvalidTransitionError: the status change is not allowed.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        with self._session() as session:
            item = self._get(session, item_id, user_id)

            new_status = fields.get("status")
            if new_status is not None:
                try:
                    new_status = ItemStatus(new_status)
                except ValueError as e:
                    raise InvalidInputError(f"Unknown status: {new_status}") from e
                fields["status"] = new_status
                if new_status != item.status:
                    ensure_transition(item.status, new_status)
                    logger.debug(
                        "Item %s: %s -> %s",
                        item_id, item.status.value, new_status.value,
                    )

            for name, value in fields.items():
                setattr(item, name, value)
            item.updated_at = utcnow()
            session.commit()
        return item

    def find_many(self, user_id: str) -> list[SavedItem]:
        """Return the user's items, newest first."""
        with self._session() as session:
            stmt = (
                select(SavedItem)
                .where(SavedItem.user_id == user_id)
                .order_by(SavedItem.created_at.desc())
            )
            return list(session.scalars(stmt))

    def find_one(self, item_id: str, user_id: str) -> SavedItem:
        with self._session() as session:
            return self._get(session, item_id, user_id)

    @staticmethod
    def _get(session: Session, item_id: str, user_id: str) -> SavedItem:
        stmt = select(SavedItem).where(
            SavedItem.id == item_id,
            SavedItem.user_id == user_id,
        )
        item = session.scalars(stmt).first()
        if item is None:
            raise ItemNotFoundError(item_id)
        return item
