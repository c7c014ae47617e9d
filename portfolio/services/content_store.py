"""
Content store: a flat mapping from section key to an opaque JSON document.

Each key is upserted with a single ``INSERT ... ON CONFLICT (key) DO UPDATE``
statement and committed on its own, so a multi-key write is not atomic: when
a key fails, the keys written before it stay written. Callers keep one logical
section per key so a partial batch leaves every section in a defined state.
"""
import json
import logging
from typing import Any, Mapping

from sqlalchemy import Text, cast, delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.content_logger import log_content
from portfolio.models import ContentEntry

logger = logging.getLogger(__name__)


class ContentStoreError(Exception):
    """Base error for content store operations."""


class StorageUnavailableError(ContentStoreError):
    def __init__(self, message: str, applied_keys: list[str] | None = None):
        super().__init__(message)
        self.applied_keys = applied_keys or []


class ContentSerializationError(ContentStoreError):
    def __init__(self, key: str, reason: str, applied_keys: list[str] | None = None):
        super().__init__(f"Value for '{key}' is not JSON-serializable: {reason}")
        self.key = key
        self.applied_keys = applied_keys or []


class ContentDecodeError(ContentStoreError):
    """Some rows could not be decoded. ``content`` holds the rows that could."""

    def __init__(self, failed_keys: list[str], content: dict[str, Any]):
        super().__init__(f"Could not decode stored content for: {', '.join(failed_keys)}")
        self.failed_keys = failed_keys
        self.content = content


class ContentMergeError(ContentStoreError):
    def __init__(self, key: str, existing_type: str):
        super().__init__(f"Cannot merge fields into '{key}': stored value is a {existing_type}, not an object")
        self.key = key


_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def encode_value(key: str, value: Any) -> str:
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ContentSerializationError(key, str(exc)) from exc


def decode_value(raw: str | None) -> Any:
    if raw is None:
        return None
    return json.loads(raw)


class ContentStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _insert(self):
        dialect = self.session.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect](ContentEntry)
        except KeyError:
            raise ContentStoreError(f"Upsert is not supported on the '{dialect}' dialect") from None

    async def _fetch_raw(self, *where) -> list[tuple[str, str | None]]:
        # Values come back as JSON text so each row is decoded on its own.
        stmt = select(ContentEntry.key, cast(ContentEntry.value, Text)).where(*where)
        try:
            result = await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            await self.session.rollback()
            logger.error("Content read failed: %s", exc)
            raise StorageUnavailableError(f"Content read failed: {exc}") from exc
        return [(row[0], row[1]) for row in result.all()]

    async def get_all(self) -> dict[str, Any]:
        """Return every section as one mapping. An empty table gives ``{}``."""
        content: dict[str, Any] = {}
        failed: list[str] = []
        for key, raw in await self._fetch_raw():
            try:
                content[key] = decode_value(raw)
            except json.JSONDecodeError as exc:
                logger.warning("Stored value for '%s' is not valid JSON: %s", key, exc)
                failed.append(key)
        if failed:
            raise ContentDecodeError(failed, content)
        return content

    async def get_one(self, key: str) -> Any | None:
        rows = await self._fetch_raw(ContentEntry.key == key)
        if not rows:
            return None
        try:
            return decode_value(rows[0][1])
        except json.JSONDecodeError as exc:
            raise ContentDecodeError([key], {}) from exc

    async def _upsert(self, key: str, value: Any) -> None:
        stmt = self._insert().values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ContentEntry.key],
            set_={"value": stmt.excluded.value},
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def upsert_many(self, entries: Mapping[str, Any]) -> list[str]:
        """
        Replace the stored value of every key in ``entries``; other keys are untouched.

        Keys are written in input order and committed one by one. The first
        failure stops the batch; keys already written are not rolled back and
        are reported on the raised error as ``applied_keys``.
        """
        applied: list[str] = []
        for key, value in entries.items():
            try:
                encode_value(key, value)
            except ContentSerializationError as exc:
                exc.applied_keys = list(applied)
                log_content("upsert_failed", str(exc), key=key, applied_keys=applied)
                raise
            try:
                await self._upsert(key, value)
            except (SQLAlchemyError, OSError) as exc:
                await self.session.rollback()
                logger.error("Upsert of '%s' failed after %d key(s): %s", key, len(applied), exc)
                log_content("upsert_failed", str(exc), key=key, applied_keys=applied)
                raise StorageUnavailableError(f"Upsert of '{key}' failed: {exc}", applied) from exc
            applied.append(key)
        if applied:
            log_content("upsert", f"Upserted {len(applied)} section(s)", keys=applied)
        return applied

    async def upsert_merged(self, key: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Shallow-merge ``fields`` over the stored document at ``key`` and write it back.

        Read-modify-write without a version check: two concurrent merges into
        the same key keep only the last one.
        """
        existing = await self.get_one(key)
        if existing is None:
            existing = {}
        if not isinstance(existing, dict):
            raise ContentMergeError(key, type(existing).__name__)
        merged = {**existing, **fields}
        await self.upsert_many({key: merged})
        log_content("merge", f"Merged {len(fields)} field(s) into '{key}'", key=key, fields=list(fields))
        return merged

    async def clear(self) -> int:
        """Delete every section. Only the bulk reseed script calls this."""
        try:
            result = await self.session.execute(delete(ContentEntry))
            await self.session.commit()
        except (SQLAlchemyError, OSError) as exc:
            await self.session.rollback()
            raise StorageUnavailableError(f"Clearing content failed: {exc}") from exc
        log_content("clear", "Cleared content table", rows=result.rowcount)
        return result.rowcount
