"""
In-memory paste store.
Handles paste creation, expiry (TTL and view quota) and view counting.
"""
import logging
import threading
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from app.exceptions import InvalidPasteError, PasteIdCollisionError

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def _uuid4_id() -> str:
    return str(uuid.uuid4())


def ms_to_datetime(timestamp_ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime without float rounding."""
    return _EPOCH + timedelta(milliseconds=timestamp_ms)


@dataclass
class PasteRecord:
    """A stored paste and its expiry state."""
    id: str
    content: str
    expires_at_ms: Optional[int] = None
    max_views: Optional[int] = None
    view_count: int = 0

    def is_expired(self, now_ms: int) -> bool:
        return self.expires_at_ms is not None and now_ms > self.expires_at_ms

    def is_exhausted(self) -> bool:
        return self.max_views is not None and self.view_count >= self.max_views


@dataclass(frozen=True)
class PasteView:
    """Result of a successful fetch."""
    content: str
    remaining_views: Optional[int]
    expires_at: Optional[datetime]


# About 100 years; keeps every expiry inside the datetime range
MAX_TTL_SECONDS = 100 * 365 * 24 * 60 * 60

TTL_SECONDS_ERROR = f"ttl_seconds must be an integer between 1 and {MAX_TTL_SECONDS}"
MAX_VIEWS_ERROR = "max_views must be an integer >= 1"


def _check_positive_int(value, message: str, maximum: Optional[int] = None) -> None:
    # bool is an int subclass; True must not pass as 1
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidPasteError(message)
    if maximum is not None and value > maximum:
        raise InvalidPasteError(message)


class PasteStore:
    """
    Keyed collection of pastes with lazy expiry.

    A single lock guards the whole collection, so each create and each
    fetch (check, count, or delete) runs as one indivisible step.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._clock = clock or _wall_clock_ms
        self._id_factory = id_factory or _uuid4_id
        self._pastes: Dict[str, PasteRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pastes)

    def __contains__(self, paste_id: object) -> bool:
        with self._lock:
            return paste_id in self._pastes

    def now_ms(self) -> int:
        """Current time in epoch milliseconds according to the store's clock."""
        return self._clock()

    def create(
        self,
        content: str,
        ttl_seconds: Optional[int] = None,
        max_views: Optional[int] = None,
        now_ms: Optional[int] = None,
    ) -> str:
        """
        Store a new paste.

        Args:
            content: Text content of the paste (non-empty)
            ttl_seconds: Optional time-to-live in seconds (>= 1)
            max_views: Optional maximum number of successful fetches (>= 1)
            now_ms: Creation time in epoch milliseconds, defaults to the clock

        Returns:
            The new paste id

        Raises:
            InvalidPasteError: If any argument is out of range
            PasteIdCollisionError: If the generated id is already in use
        """
        if not isinstance(content, str) or not content.strip():
            raise InvalidPasteError("content is required and must be a non-empty string")
        _check_positive_int(ttl_seconds, TTL_SECONDS_ERROR, maximum=MAX_TTL_SECONDS)
        _check_positive_int(max_views, MAX_VIEWS_ERROR)

        if now_ms is None:
            now_ms = self._clock()
        expires_at_ms = None
        if ttl_seconds is not None:
            expires_at_ms = now_ms + ttl_seconds * 1000
            try:
                ms_to_datetime(expires_at_ms)
            except OverflowError:
                raise InvalidPasteError(TTL_SECONDS_ERROR)

        paste_id = self._id_factory()
        with self._lock:
            if paste_id in self._pastes:
                logger.error(f"Generated paste id {paste_id} collides with an existing paste")
                raise PasteIdCollisionError(f"paste id {paste_id} already exists")
            self._pastes[paste_id] = PasteRecord(
                id=paste_id,
                content=content,
                expires_at_ms=expires_at_ms,
                max_views=max_views,
            )

        logger.info(f"Paste {paste_id} saved (ttl_seconds={ttl_seconds}, max_views={max_views})")
        return paste_id

    def fetch(self, paste_id: str, now_ms: Optional[int] = None) -> Optional[PasteView]:
        """
        Fetch a paste, counting this access as a view.

        Expired or quota-exhausted pastes are deleted on the access that
        finds them, and reported exactly like missing ones.

        Args:
            paste_id: Unique paste identifier
            now_ms: Current time in epoch milliseconds, defaults to the clock

        Returns:
            PasteView, or None if the paste is missing, expired or used up
        """
        if now_ms is None:
            now_ms = self._clock()

        with self._lock:
            record = self._pastes.get(paste_id)
            if record is None:
                logger.warning(f"Paste {paste_id} not found")
                return None

            if record.is_expired(now_ms):
                del self._pastes[paste_id]
                logger.warning(f"Paste {paste_id} has expired (TTL)")
                return None

            # quota is checked before this fetch is counted
            if record.is_exhausted():
                del self._pastes[paste_id]
                logger.warning(f"Paste {paste_id} view limit exceeded")
                return None

            # build the result first so a failure leaves the count untouched
            views_after = record.view_count + 1
            remaining_views = None
            if record.max_views is not None:
                remaining_views = max(record.max_views - views_after, 0)

            view = PasteView(
                content=record.content,
                remaining_views=remaining_views,
                expires_at=(
                    ms_to_datetime(record.expires_at_ms)
                    if record.expires_at_ms is not None
                    else None
                ),
            )
            record.view_count = views_after

        logger.info(f"View count incremented for paste {paste_id}")
        return view
