import logging
import time
from typing import Any, Callable, Mapping

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..helpers.collections import transform_by_schema
from .config import Config
from .errors import LogicError, RequestRejected
from .http import RequestContext, ResponseWriter, create_service_callback
from .routing import CallNext, Middleware


logger = logging.getLogger(__name__)

Validator = Callable[[Any], bool]
TransformSchema = Mapping[str, Callable[[Any], Any]]


# ---------------------------------------------------------------------------
# Chain middleware
# ---------------------------------------------------------------------------

def _valid(attr: str, validator: Validator) -> Middleware:
    async def middleware(request: RequestContext, response: ResponseWriter, call_next: CallNext) -> None:
        if not validator(getattr(request, attr)):
            response.status_code = 400
            response.send({"err": getattr(validator, "errors", None)})
            return

        await call_next()

    return middleware


def valid_body(validator: Validator) -> Middleware:
    return _valid("body", validator)


def valid_query(validator: Validator) -> Middleware:
    return _valid("query", validator)


def require_queries(*names: str) -> Middleware:
    async def middleware(request: RequestContext, response: ResponseWriter, call_next: CallNext) -> None:
        for name in names:
            if name not in request.query:
                response.status_code = 400
                response.send({"err": f"Query {name} is missing"})
                return

        await call_next()

    return middleware


def _transform(attr: str, schema: TransformSchema) -> Middleware:
    async def middleware(request: RequestContext, response: ResponseWriter, call_next: CallNext) -> None:
        # Best effort: malformed input is passed on untouched
        try:
            transform_by_schema(getattr(request, attr), schema)
        except Exception as e:
            logger.debug(f"Ignoring {attr} transform failure: {str(e)}")

        await call_next()

    return middleware


def transform_body(schema: TransformSchema) -> Middleware:
    return _transform("body", schema)


def transform_query(schema: TransformSchema) -> Middleware:
    return _transform("query", schema)


# ---------------------------------------------------------------------------
# Application middleware and exception handlers
# ---------------------------------------------------------------------------

def _request_id(request: Request) -> str:
    return f"{int(time.time() * 1000)}-{id(request)}"


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    request_id = _request_id(request)

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        # Only log slow requests or errors
        if process_time > Config.SLOW_REQUEST_SECONDS or response.status_code >= 400:
            logger.info(f"[{request_id}] {request.method} {request.url.path} - {response.status_code} - {process_time:.2f}s")
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"[{request_id}] {request.method} {request.url.path} - ERROR: {str(e)} - {process_time:.2f}s")
        raise


async def logic_error_handler(request: Request, exc: LogicError):
    logger.warning(f"{request.method} {request.url.path} - {exc!r}")
    response = ResponseWriter()
    create_service_callback(response)(exc)
    return response.to_response()


async def request_rejected_handler(request: Request, exc: RequestRejected):
    return JSONResponse(status_code=exc.status_code, content={"err": exc.payload})


async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"err": {"message": "Internal server error"}})


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LogicError, logic_error_handler)
    app.add_exception_handler(RequestRejected, request_rejected_handler)
    app.add_exception_handler(Exception, global_exception_handler)
