"""Async route adaptation and the middleware chain.

Middleware and handlers share the signature
``async (request: RequestContext, response: ResponseWriter, call_next)``.
``call_next`` is an async callable that runs the rest of the chain.

Route adapters await a handler, capture the outcome as :class:`Success` or
:class:`Failure` and hand it to :func:`dispatch`, which invokes the terminal
callback exactly once.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, Sequence, TypeVar, Union

from fastapi import Request
from fastapi.responses import JSONResponse

from .errors import LogicError
from .http import RequestContext, ResponseWriter, ServiceCallback, create_service_callback


logger = logging.getLogger(__name__)

T = TypeVar("T")

CallNext = Callable[[], Awaitable[None]]
Middleware = Callable[[RequestContext, ResponseWriter, CallNext], Awaitable[Any]]
CallbackProvider = Callable[[RequestContext, ResponseWriter], ServiceCallback]


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: Exception


Result = Union[Success[Any], Failure]


async def capture(awaitable: Awaitable[T]) -> Result:
    try:
        return Success(await awaitable)
    except Exception as e:
        return Failure(e)


def log_failure(error: Exception) -> None:
    if isinstance(error, LogicError):
        logger.warning(f"Logic error {error.logic_err_code} ({error.http_code}): {error.title} - {error.message}")
    else:
        logger.error(f"Route handler failed: {str(error)} ({type(error).__name__})", exc_info=error)


def dispatch(result: Result, callback: ServiceCallback, skip_none: bool = False) -> None:
    """Hand ``result`` to ``callback``; a ``None`` success is skipped when ``skip_none``."""
    if isinstance(result, Failure):
        log_failure(result.error)
        callback(result.error)
    elif result.value is not None or not skip_none:
        callback(None, result.value)


def _callback_for(request: RequestContext, response: ResponseWriter,
                  callback_provider: Optional[CallbackProvider]) -> ServiceCallback:
    if callback_provider:
        return callback_provider(request, response)
    return create_service_callback(response)


def route_async(handler: Middleware, callback_provider: Optional[CallbackProvider] = None) -> Middleware:
    """Adapt ``handler`` so its return value or exception answers the request."""
    async def middleware(request: RequestContext, response: ResponseWriter, call_next: CallNext) -> None:
        callback = _callback_for(request, response, callback_provider)
        dispatch(await capture(handler(request, response, call_next)), callback)

    return middleware


def route_nextable_async(handler: Middleware, callback_provider: Optional[CallbackProvider] = None) -> Middleware:
    """Like :func:`route_async`, but a ``None`` result leaves the response to later steps.

    The handler is expected to have called ``call_next`` itself in that case.
    """
    async def middleware(request: RequestContext, response: ResponseWriter, call_next: CallNext) -> None:
        callback = _callback_for(request, response, callback_provider)
        dispatch(await capture(handler(request, response, call_next)), callback, skip_none=True)

    return middleware


def safe(f: Callable[[Callable[..., Any]], Any], callback: Callable[..., Any]) -> None:
    """Run callback-style ``f``; an exception it raises is passed to ``callback``."""
    try:
        f(callback)
    except Exception as e:
        logger.error(f"Callback-style call failed: {str(e)}", exc_info=True)
        callback(e)


async def run_chain(middlewares: Sequence[Middleware], request: RequestContext, response: ResponseWriter) -> None:
    async def run(index: int) -> None:
        if index >= len(middlewares):
            return

        async def call_next() -> None:
            await run(index + 1)

        await middlewares[index](request, response, call_next)

    await run(0)


def endpoint(*middlewares: Middleware) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Build a FastAPI endpoint running ``middlewares`` in order.

    Answers 404 when no step sends a response.
    """
    async def _endpoint(request: Request) -> JSONResponse:
        context = await RequestContext.from_request(request)
        response = ResponseWriter()
        await run_chain(middlewares, context, response)
        if not response.sent:
            response.status_code = 404
            response.send({"err": f"Cannot {context.method} {context.path}"})
        return response.to_response()

    return _endpoint
