from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import iso_timestamp, now_utc
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PHOTO_MAX_SIZE
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..storage.blob_store import BlobStore
from ..storage.photos import normalize_photo, photo_key
from ..users.model import Scope
from .factory_model import Factory
from .factory_repository import FactoryRepository
from .model import Worker
from .repository import WorkerRepository

logger = logging.getLogger(__name__)


class OrganizationService:
    """Use cases: factories (owner) and workers (factory-scoped)."""

    def __init__(
        self,
        factories: FactoryRepository,
        workers: WorkerRepository,
        blobs: BlobStore,
        *,
        photo_max_size: int = DEFAULT_PHOTO_MAX_SIZE,
    ):
        self._factories = factories
        self._workers = workers
        self._blobs = blobs
        self._photo_max_size = int(photo_max_size)

    # Factories

    def create_factory(self, scope: Scope, *, name: str, location: str, now: datetime | None = None) -> Factory:
        if not scope.is_owner:
            raise AuthorizationError("Only the owner can add factories")

        name = require_non_empty(name, "Factory name")
        location = require_non_empty(location, "Location")
        created_at = iso_timestamp(now)

        factory_id = self._factories.create(
            name=name,
            location=location,
            created_at=created_at,
            created_by=scope.user_id,
        )
        logger.info("Factory %s created (%s)", factory_id, name)
        return Factory(
            factory_id=factory_id,
            name=name,
            location=location,
            created_at=created_at,
            created_by=scope.user_id,
        )

    def list_factories(self, scope: Scope) -> Sequence[Factory]:
        if not scope.is_owner:
            raise AuthorizationError("Only the owner can list factories")
        return self._factories.list_all()

    def get_factory(self, factory_id: str) -> Factory:
        factory = self._factories.get_by_id(factory_id) if factory_id else None
        if not factory:
            raise NotFoundError("Factory does not exist")
        return factory

    # Workers

    def _resolve_factory(self, scope: Scope, factory_id: Optional[str]) -> tuple[str, str]:
        if not scope.is_owner:
            if not scope.factory_id:
                raise AuthorizationError("No factory assigned to this account")
            if factory_id and factory_id != scope.factory_id:
                raise AuthorizationError("Managers can only add workers to their own factory")
            return scope.factory_id, scope.factory_name or ""

        if not factory_id:
            raise ValidationError("Factory is required")
        factory = self.get_factory(factory_id)
        return factory.factory_id, factory.name

    def create_worker(
        self,
        scope: Scope,
        *,
        name: str,
        designation: str,
        photo: Optional[bytes] = None,
        factory_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> Worker:
        """Register a worker in the scope's factory.

        The photo is uploaded before the record is written. If the record write
        fails the uploaded blob stays behind (no compensating delete).
        """

        name = require_non_empty(name, "Worker name")
        designation = require_non_empty(designation, "Designation")
        worker_factory_id, worker_factory_name = self._resolve_factory(scope, factory_id)

        now = now or now_utc()
        image_url = None
        if photo:
            jpeg = normalize_photo(photo, max_size=self._photo_max_size)
            image_url = self._blobs.put(photo_key(now), jpeg)

        created_at = iso_timestamp(now)
        try:
            worker_id = self._workers.create(
                name=name,
                designation=designation,
                image_url=image_url,
                factory_id=worker_factory_id,
                factory_name=worker_factory_name,
                created_at=created_at,
                created_by=scope.user_id,
            )
        except Exception:
            if image_url:
                logger.warning("Worker record not created; photo left orphaned at %s", image_url)
            raise

        logger.info("Worker %s created in factory %s", worker_id, worker_factory_id)
        return Worker(
            worker_id=worker_id,
            name=name,
            designation=designation,
            image_url=image_url,
            factory_id=worker_factory_id,
            factory_name=worker_factory_name,
            created_at=created_at,
            created_by=scope.user_id,
        )

    def list_workers(self, scope: Scope, *, factory_id: Optional[str] = None) -> Sequence[Worker]:
        """Workers visible to the scope; owners may narrow to one factory."""

        if not scope.is_owner:
            if not scope.factory_id:
                return []
            return self._workers.list_workers(factory_id=scope.factory_id)
        return self._workers.list_workers(factory_id=factory_id or None)
