"""
Redis Submission Repository

Document-store implementation of SubmissionRepositoryProtocol on Redis.

Responsibility:
    - Store customer/merchant records as JSON documents
    - Keep newest-first ordering with a sorted set
    - Enforce email uniqueness at the storage layer (unique index hash)

Storage Format:
    Redis keys (per collection, e.g. collection="customers"):
    - "snapshop:customers:records" -> HASH  id -> JSON record
    - "snapshop:customers:order"   -> ZSET  id scored by insertion sequence
    - "snapshop:customers:seq"     -> STRING insertion counter (INCR)
    - "snapshop:customers:emails"  -> HASH  normalized email -> id (unique index)

Business Rules:
    - The email index is the authoritative duplicate guard; the caller's
      find_by_email() pre-check is only a fast path
    - Email claim, record write and ordering update run in one WATCH/MULTI/EXEC
      transaction, so a claim never exists without its record

Error Handling:
    - RedisError: Logged and raised as StorageError
"""

import json
import logging
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError, WatchError

from src.domain.shared.exceptions import DuplicateSubmissionError
from src.domain.signup.entities import Submission, SubmissionKind, submission_from_dict
from src.infrastructure.exceptions import StorageError

from .connection import get_redis_client

# Configure logger for this module
logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email has already been registered."
MAX_APPEND_ATTEMPTS = 5


class RedisSubmissionRepository:
    """
    Redis-backed repository with a unique email index per collection.

    Examples:
        >>> repo = RedisSubmissionRepository(redis_url="redis://localhost:6379/0")
        >>> repo.append(SubmissionKind.MERCHANT, record)
        >>> [r.id for r in repo.list_all(SubmissionKind.MERCHANT)]
        ['3fa85f64-...']
    """

    def __init__(
        self,
        client: Optional[Redis] = None,
        redis_url: Optional[str] = None,
        key_prefix: str = "snapshop",
    ) -> None:
        """
        Initialize repository.

        Args:
            client: Existing Redis client (tests inject a mock)
            redis_url: Connection string used when no client is given
            key_prefix: Namespace for all keys

        Raises:
            RedisError: If a pooled connection cannot be established
        """
        self.redis: Redis = client if client is not None else get_redis_client(redis_url)
        self.key_prefix = key_prefix

    def _key(self, kind: SubmissionKind, suffix: str) -> str:
        """
        Build a namespaced key.

        Examples:
            >>> repo._key(SubmissionKind.CUSTOMER, "emails")
            'snapshop:customers:emails'
        """
        return f"{self.key_prefix}:{kind.collection}:{suffix}"

    def _decode(self, kind: SubmissionKind, raw: str) -> Submission:
        try:
            return submission_from_dict(kind, json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(
                f"Collection {kind.collection} contains a malformed record",
                original_error=e,
            )

    def append(self, kind: SubmissionKind, record: Submission) -> None:
        """
        Claim the email and write the record in one WATCH/MULTI transaction.

        The email index is watched; a concurrent write to it aborts EXEC and
        the attempt is retried, up to MAX_APPEND_ATTEMPTS.

        Raises:
            DuplicateSubmissionError: If the email index already holds this email
            StorageError: If Redis fails or the transaction keeps conflicting
        """
        emails_key = self._key(kind, "emails")
        document = json.dumps(record.to_dict())

        try:
            with self.redis.pipeline(transaction=True) as pipe:
                for attempt in range(1, MAX_APPEND_ATTEMPTS + 1):
                    try:
                        pipe.watch(emails_key)
                        if pipe.hexists(emails_key, record.email):
                            raise DuplicateSubmissionError(
                                DUPLICATE_EMAIL_MESSAGE,
                                collection=kind.collection,
                                email=record.email,
                            )
                        # Gaps in the sequence after an aborted EXEC are harmless
                        sequence = pipe.incr(self._key(kind, "seq"))

                        pipe.multi()
                        pipe.hset(emails_key, record.email, record.id)
                        pipe.hset(self._key(kind, "records"), record.id, document)
                        pipe.zadd(self._key(kind, "order"), {record.id: sequence})
                        pipe.execute()
                        break
                    except WatchError:
                        logger.debug(
                            f"Email index for {kind.collection} changed, "
                            f"retrying append (attempt {attempt}/{MAX_APPEND_ATTEMPTS})"
                        )
                else:
                    raise StorageError(
                        f"Cannot write to {kind.collection}: "
                        f"transaction conflicted {MAX_APPEND_ATTEMPTS} times"
                    )
        except RedisError as e:
            logger.error(f"Redis error storing {kind.value} {record.id}: {e}", exc_info=True)
            raise StorageError(f"Cannot write to {kind.collection}", original_error=e)

        logger.info(f"Stored {kind.value} {record.id} in Redis")

    def list_all(self, kind: SubmissionKind) -> list[Submission]:
        """Return all records, newest first (highest sequence first)."""
        try:
            ids = self.redis.zrevrange(self._key(kind, "order"), 0, -1)
            if not ids:
                return []
            documents = self.redis.hmget(self._key(kind, "records"), ids)
        except RedisError as e:
            logger.error(f"Redis error listing {kind.collection}: {e}", exc_info=True)
            raise StorageError(f"Cannot read {kind.collection}", original_error=e)

        return [self._decode(kind, doc) for doc in documents if doc is not None]

    def find_by_email(self, kind: SubmissionKind, email: str) -> Optional[Submission]:
        """Look up a record through the email index."""
        try:
            submission_id = self.redis.hget(self._key(kind, "emails"), email)
            if submission_id is None:
                return None
            document = self.redis.hget(self._key(kind, "records"), submission_id)
        except RedisError as e:
            logger.error(f"Redis error looking up email in {kind.collection}: {e}", exc_info=True)
            raise StorageError(f"Cannot read {kind.collection}", original_error=e)

        if document is None:
            return None
        return self._decode(kind, document)

    def delete_by_id(self, kind: SubmissionKind, submission_id: str) -> bool:
        """
        Remove the record, its ordering entry and its email index entry.

        Returns:
            True if this call removed the record, False if it was absent
        """
        records_key = self._key(kind, "records")

        try:
            document = self.redis.hget(records_key, submission_id)
            if document is None:
                return False

            record = self._decode(kind, document)
            pipe = self.redis.pipeline(transaction=True)
            pipe.hdel(records_key, submission_id)
            pipe.zrem(self._key(kind, "order"), submission_id)
            pipe.hdel(self._key(kind, "emails"), record.email)
            removed, _, _ = pipe.execute()
        except RedisError as e:
            logger.error(f"Redis error deleting {kind.value} {submission_id}: {e}", exc_info=True)
            raise StorageError(f"Cannot delete from {kind.collection}", original_error=e)

        if removed:
            logger.info(f"Deleted {kind.value} {submission_id} from Redis")
        return bool(removed)

    def ping(self) -> bool:
        """PING the server; False on any Redis error."""
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
