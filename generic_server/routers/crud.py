"""
Generic CRUD controller.

Builds a FastAPI router for one (entity, DTO) pair on top of the generic
repository.

Usage:
    from generic_server.routers.crud import register_crud_controller

    register_crud_controller(app, Book, BookDTO)

    # GET    /api/books/GetAll
    # GET    /api/books/GetAllWithIncludes?includes=author
    # GET    /api/books/Find?key=title&value=Dune
    # GET    /api/books/WithIncludes/{id}?includes=author
    # GET    /api/books/{id}
    # POST   /api/books
    # PUT    /api/books/{id}
    # DELETE /api/books/{id}
"""

from typing import Any, Callable, Generic, TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, Query, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from crud_shared.config.logging import get_logger
from crud_shared.config.settings import settings
from crud_shared.infrastructure.db import get_session
from crud_shared.utils.exceptions import (
    AppException,
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
)
from generic_server.repositories import BaseRepository, SQLAlchemyRepository, get_entity_fields
from generic_server.services.serialization import (
    dto_to_entity,
    serialize_entities,
    serialize_entity,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")
DTOT = TypeVar("DTOT", bound=BaseModel)


def parse_entity_id(raw_id: str, *, allow_nil: bool = True) -> UUID:
    """
    Parse a path identifier.

    Raises:
        InvalidIdentifierError: If the value is not a UUID, or is the nil
            UUID while ``allow_nil`` is False.
    """
    try:
        entity_id = UUID(raw_id)
    except ValueError:
        raise InvalidIdentifierError(raw_id) from None
    if not allow_nil and entity_id.int == 0:
        raise InvalidIdentifierError(raw_id)
    return entity_id


class CrudController(Generic[ModelT, DTOT]):
    """
    HTTP endpoint group for one entity type and its transfer object.

    The repository is resolved per request through ``get_repository`` so
    that each request works against its own session. Override that
    dependency to plug in another repository implementation.
    """

    def __init__(
        self,
        model: type[ModelT],
        dto: type[DTOT],
        *,
        prefix: str | None = None,
        tags: list[str] | None = None,
    ):
        self.model = model
        self.dto = dto
        self.entity_name = model.__name__
        self.prefix = prefix or f"{settings.api_prefix}/{model.__tablename__}"
        self.tags = tags or [model.__tablename__]
        self._identifier = get_entity_fields(model).identifier
        self.get_repository = self._build_repository_dependency()
        self.router = self._build_router()

    def _build_repository_dependency(self) -> Callable[..., BaseRepository[ModelT]]:
        model = self.model

        def get_repository(
            session: AsyncSession = Depends(get_session),
        ) -> BaseRepository[ModelT]:
            return SQLAlchemyRepository(model, session)

        get_repository.__name__ = f"get_{model.__tablename__}_repository"
        return get_repository

    def _location(self, entity: Any) -> str:
        return f"{self.prefix}/{getattr(entity, self._identifier)}"

    def _unexpected(self, exc: Exception, operation: str) -> InternalError:
        """Wrap an unexpected failure as a logged 500 carrying the exception message."""
        return InternalError(
            str(exc) or exc.__class__.__name__,
            exc_info=exc,
            entity=self.entity_name,
            operation=operation,
        )

    def _build_router(self) -> APIRouter:
        router = APIRouter(prefix=self.prefix, tags=self.tags)
        model = self.model
        dto = self.dto
        get_repository = self.get_repository

        # Literal segments first so they are not captured by /{entity_id}

        @router.get("/GetAll")
        async def get_all(repository: BaseRepository = Depends(get_repository)):
            """Retrieve all entities."""
            try:
                entities = await repository.read_all()
                if entities is None:
                    return Response(status_code=status.HTTP_204_NO_CONTENT)
                return JSONResponse(serialize_entities(entities))
            except Exception as exc:
                raise self._unexpected(exc, "read_all") from exc

        @router.get("/GetAllWithIncludes")
        async def get_all_with_includes(
            includes: list[str] = Query(default=[]),
            repository: BaseRepository = Depends(get_repository),
        ):
            """Retrieve all entities with the named relationships included."""
            try:
                entities = await repository.read_all_with_includes(*includes)
                if entities is None:
                    return Response(status_code=status.HTTP_204_NO_CONTENT)
                return JSONResponse(serialize_entities(list(entities)))
            except Exception as exc:
                raise self._unexpected(exc, "read_all_with_includes") from exc

        @router.get("/Find")
        async def find(
            key: str,
            value: str | None = None,
            repository: BaseRepository = Depends(get_repository),
        ):
            """
            Find entities whose field ``key`` contains ``value``.

            An unknown key is left to the application's default error handling.
            """
            result = await repository.find(key, value)
            return JSONResponse(serialize_entities(result))

        @router.get("/WithIncludes/{entity_id}")
        async def get_by_id_with_includes(
            entity_id: str,
            includes: list[str] = Query(default=[]),
            repository: BaseRepository = Depends(get_repository),
        ):
            """Retrieve an entity by ID with the named relationships included."""
            parsed_id = parse_entity_id(entity_id)
            try:
                entity = await repository.read_by_id_with_includes(parsed_id, *includes)
                if entity is None:
                    return Response(status_code=status.HTTP_204_NO_CONTENT)
                return JSONResponse(serialize_entity(entity))
            except Exception as exc:
                raise self._unexpected(exc, "read_by_id_with_includes") from exc

        @router.get("/{entity_id}")
        async def get_by_id(
            entity_id: str,
            repository: BaseRepository = Depends(get_repository),
        ):
            """Retrieve an entity by ID."""
            parsed_id = parse_entity_id(entity_id)
            try:
                entity = await repository.read_by_id(parsed_id)
                if entity is None:
                    return Response(status_code=status.HTTP_204_NO_CONTENT)
                return JSONResponse(serialize_entity(entity))
            except Exception as exc:
                raise self._unexpected(exc, "read_by_id") from exc

        @router.post("", status_code=status.HTTP_201_CREATED)
        async def create(
            body: dto,
            repository: BaseRepository = Depends(get_repository),
        ):
            """Create a new entity from the transfer object."""
            try:
                created = await repository.create(dto_to_entity(body, model))
                if created is None:
                    raise InternalError("Error creating entity", entity=self.entity_name)
                logger.info(
                    "Entity created",
                    entity=self.entity_name,
                    entity_id=str(getattr(created, self._identifier)),
                )
                return JSONResponse(
                    serialize_entity(created),
                    status_code=status.HTTP_201_CREATED,
                    headers={"Location": self._location(created)},
                )
            except AppException:
                raise
            except Exception as exc:
                raise self._unexpected(exc, "create") from exc

        @router.put("/{entity_id}")
        async def update(
            entity_id: str,
            body: dto,
            repository: BaseRepository = Depends(get_repository),
        ):
            """
            Update an entity by ID.

            Fields missing from the body keep their stored values. The
            response echoes the submitted values, not the merged record.
            """
            parsed_id = parse_entity_id(entity_id, allow_nil=False)
            try:
                entity = dto_to_entity(body, model)

                existing = await repository.read_by_id(parsed_id)
                if existing is None:
                    raise NotFoundError(self.entity_name, parsed_id)

                updated = await repository.update(parsed_id, entity)
                if updated is None:
                    raise InternalError("Error updating entity", entity=self.entity_name)

                logger.info("Entity updated", entity=self.entity_name, entity_id=str(parsed_id))
                return JSONResponse(serialize_entity(updated))
            except AppException:
                raise
            except Exception as exc:
                raise self._unexpected(exc, "update") from exc

        @router.delete("/{entity_id}")
        async def delete(
            entity_id: str,
            repository: BaseRepository = Depends(get_repository),
        ):
            """Delete an entity by ID and return it."""
            parsed_id = parse_entity_id(entity_id, allow_nil=False)
            try:
                existing = await repository.read_by_id(parsed_id)
                if existing is None:
                    raise NotFoundError(self.entity_name, parsed_id)

                deleted = await repository.delete(parsed_id)
                if deleted is None:
                    raise InternalError("Error deleting entity", entity=self.entity_name)

                logger.info("Entity deleted", entity=self.entity_name, entity_id=str(parsed_id))
                return JSONResponse(serialize_entity(deleted))
            except AppException:
                raise
            except Exception as exc:
                raise self._unexpected(exc, "delete") from exc

        return router


def register_crud_controller(
    app: FastAPI,
    model: type[ModelT],
    dto: type[DTOT],
    *,
    prefix: str | None = None,
    tags: list[str] | None = None,
) -> CrudController[ModelT, DTOT]:
    """
    Create a controller for ``model``/``dto`` and mount it on ``app``.

    Registered controllers are kept in ``app.state.crud_controllers``.

    Returns:
        The controller, whose ``get_repository`` can be used in
        ``app.dependency_overrides``.
    """
    controller = CrudController(model, dto, prefix=prefix, tags=tags)
    app.include_router(controller.router)

    if not hasattr(app.state, "crud_controllers"):
        app.state.crud_controllers = []
    app.state.crud_controllers.append(controller)

    logger.debug("CRUD controller registered", entity=controller.entity_name, prefix=controller.prefix)
    return controller
