"""
Local Vector Database - FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vectorlite.config import API_HOST, API_PORT, DATA_DIR, LOG_LEVEL
from vectorlite.db import FileStorage, IndexRegistry, VectorStore
from vectorlite.models import (
    IndexCreate,
    IndexDescription,
    IndexList,
    QueryRequest,
    QueryResult,
    UpsertRequest,
    UpsertResult,
)
from vectorlite.utils.concurrency import IndexLocks
from vectorlite.utils.exceptions import (
    DimensionMismatchError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    StorageError,
    ValidationError,
    VectorDBException,
)
from vectorlite.utils.validation import (
    is_valid_dimension,
    is_valid_index_name,
    is_valid_top_k,
    validate_vector_dimensions,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (EntityNotFoundError, 404),
    (EntityAlreadyExistsError, 409),
    (ValidationError, 400),
    (StorageError, 500),
)


def _check_index_name(name: str) -> None:
    if not is_valid_index_name(name):
        raise ValidationError("name", name, "Invalid index name")


def create_app(data_dir: Optional[Union[str, Path]] = None) -> FastAPI:
    """
    Build the API application bound to a data directory.

    Args:
        data_dir: Root of the on-disk database; defaults to the DATA_DIR setting
    """
    storage = FileStorage(data_dir or DATA_DIR)
    locks = IndexLocks()
    registry = IndexRegistry(storage, locks)
    vector_store = VectorStore(storage, locks)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage.initialize()
        logger.info("Vector database ready at %s", storage.data_dir)
        yield

    app = FastAPI(
        title="Local Vector Database",
        description="A REST API for storing embedding vectors and querying nearest neighbours",
        version="1.0.0",
        lifespan=lifespan
    )

    @app.exception_handler(VectorDBException)
    async def handle_vector_db_exception(request: Request, exc: VectorDBException):
        status_code = 500
        for exc_type, code in _STATUS_CODES:
            if isinstance(exc, exc_type):
                status_code = code
                break
        if status_code == 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = "Invalid request body"
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{message}: {location} {first.get('msg')}"
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "Local Vector Database is running"}

    # ================== INDEX ENDPOINTS ==================

    @app.post("/indexes", response_model=IndexDescription, status_code=201)
    def create_index(body: IndexCreate):
        _check_index_name(body.name)
        if not is_valid_dimension(body.dimension):
            raise ValidationError("dimension", body.dimension, "Invalid dimension")

        return registry.create(body.name, body.dimension, body.metric, body.spec)

    @app.get("/indexes", response_model=IndexList)
    def list_indexes():
        return IndexList(indexes=registry.list())

    @app.get("/indexes/{name}", response_model=IndexDescription)
    def describe_index(name: str):
        _check_index_name(name)
        return registry.describe(name)

    @app.delete("/indexes/{name}")
    def delete_index(name: str):
        _check_index_name(name)
        registry.delete(name)
        return {"message": "Index deleted successfully"}

    # ================== VECTOR ENDPOINTS ==================

    @app.post("/indexes/{name}/vectors/upsert", response_model=UpsertResult)
    def upsert_vectors(name: str, body: UpsertRequest):
        _check_index_name(name)
        if not body.vectors:
            raise ValidationError("vectors", body.vectors, "Vectors array is required and must not be empty")

        index = registry.describe(name)
        validate_vector_dimensions(body.vectors, index.dimension)

        return vector_store.upsert(name, body.vectors)

    @app.post("/indexes/{name}/query", response_model=QueryResult, response_model_exclude_none=True)
    def query_vectors(name: str, body: QueryRequest):
        _check_index_name(name)
        if not is_valid_top_k(body.top_k):
            raise ValidationError("topK", body.top_k, "Invalid topK value")

        index = registry.describe(name)
        if len(body.vector) != index.dimension:
            raise DimensionMismatchError(index.dimension, len(body.vector))

        return vector_store.query(
            name,
            body.vector,
            body.top_k,
            index.metric,
            include_values=body.include_values,
            include_metadata=body.include_metadata,
            namespace=body.namespace
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)
