from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from docserver.config import Config
from docserver.core.cache import ExpiringCache
from docserver.core.modules.document.models import Document, DocumentList
from docserver.core.modules.document.store import DocumentStore, MongoDocumentStore
from docserver.core.modules.session.models import AuthToken
from docserver.core.modules.user.models import User
from docserver.core.modules.user.store import MongoUserStore, UserStore

logger = structlog.get_logger(__name__)

# Values held by the shared cache, by key namespace:
# auth_<login> -> AuthToken, token_<token> -> User, doc_<id> -> Document, docs_<user id> -> DocumentList
type CachedValue = AuthToken | User | Document | DocumentList


class Service:
    """Base class for services sharing the core's stores and cache."""

    def __init__(self, core: Core) -> None:
        self._core = core

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        return self._core


@dataclass(frozen=True)
class Stores:
    """Durable stores the services read and write."""

    users: UserStore
    documents: DocumentStore

    @classmethod
    def from_database(cls, database: AsyncDatabase[dict[str, Any]]) -> Stores:
        return cls(
            users=MongoUserStore(database.get_collection("users")),
            documents=MongoDocumentStore(database.get_collection("documents")),
        )


class Services:
    """Service registry that automatically discovers and initializes services."""

    from docserver.core.modules.access.service import AccessService  # noqa: PLC0415
    from docserver.core.modules.document.service import DocumentService  # noqa: PLC0415
    from docserver.core.modules.session.service import SessionService  # noqa: PLC0415
    from docserver.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    document: DocumentService

    def __init__(self, core: Core) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("user", "docserver.core.modules.user.service", "UserService"),
            ("session", "docserver.core.modules.session.service", "SessionService"),
            ("access", "docserver.core.modules.access.service", "AccessService"),
            ("document", "docserver.core.modules.document.service", "DocumentService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(core)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, stores, the shared cache, and all service instances.

    Stores default to MongoDB collections from config.database_url; pass
    stores explicitly to run against other implementations.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    stores: Stores
    cache: ExpiringCache[CachedValue]
    services: Services

    def __init__(self, config: Config, stores: Stores | None = None) -> None:
        self.config = config
        self.mongo_client = None
        if stores is None:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
            stores = Stores.from_database(database)
        self.stores = stores
        self.cache = ExpiringCache(sweep_interval=config.cache_sweep_interval_seconds)
        self.services = Services(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start services and the cache sweep."""
        await self.services.start_all()
        self.cache.start()
        logger.debug("core_started", sweep_interval=self.config.cache_sweep_interval_seconds)

    async def on_stop(self) -> None:
        """Stop the cache sweep and services, then close MongoDB connection."""
        await self.cache.stop()
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
