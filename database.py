from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from errors import StoreError
from utils.log import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class BookingStore:
    """
    ID-keyed CRUD over the bookings table.

    Owns its engine: call open() on startup and close() on shutdown.
    Lookups that miss return None; callers decide what a miss means.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine = None
        self._session_factory = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        if self.is_open:
            return
        connect_args = {"check_same_thread": False} if self.database_url.startswith("sqlite") else {}
        try:
            engine = create_engine(self.database_url, connect_args=connect_args)
            # models must be imported before create_all sees the table
            import models  # noqa: F401
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            logger.error("store_open_failed", error=str(exc))
            raise StoreError(str(exc)) from exc
        self._engine = engine
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
        logger.info("store_opened", url=engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if not self.is_open:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("store_closed")

    def _session(self):
        if not self.is_open:
            raise StoreError("Booking store is not open")
        return self._session_factory()

    def insert(self, booking):
        try:
            with self._session() as session:
                session.add(booking)
                session.commit()
                session.refresh(booking)
                return booking
        except SQLAlchemyError as exc:
            logger.error("store_insert_failed", error=str(exc))
            raise StoreError(str(exc)) from exc

    def get(self, booking_id: str):
        from models import Booking

        try:
            with self._session() as session:
                return session.get(Booking, booking_id)
        except SQLAlchemyError as exc:
            logger.error("store_get_failed", booking_id=booking_id, error=str(exc))
            raise StoreError(str(exc)) from exc

    def all(self) -> List[Any]:
        from models import Booking

        try:
            with self._session() as session:
                return session.query(Booking).all()
        except SQLAlchemyError as exc:
            logger.error("store_list_failed", error=str(exc))
            raise StoreError(str(exc)) from exc

    def update(self, booking_id: str, fields: Dict[str, Any]) -> Optional[Any]:
        from models import Booking

        try:
            with self._session() as session:
                booking = session.get(Booking, booking_id)
                if booking is None:
                    return None
                for name, value in fields.items():
                    setattr(booking, name, value)
                session.commit()
                session.refresh(booking)
                return booking
        except SQLAlchemyError as exc:
            logger.error("store_update_failed", booking_id=booking_id, error=str(exc))
            raise StoreError(str(exc)) from exc

    def delete(self, booking_id: str) -> Optional[Any]:
        from models import Booking

        try:
            with self._session() as session:
                booking = session.get(Booking, booking_id)
                if booking is None:
                    return None
                session.delete(booking)
                session.commit()
                return booking
        except SQLAlchemyError as exc:
            logger.error("store_delete_failed", booking_id=booking_id, error=str(exc))
            raise StoreError(str(exc)) from exc
