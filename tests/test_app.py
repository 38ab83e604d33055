"""End-to-end tests: middleware chains mounted on a FastAPI app."""

from __future__ import annotations

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from svcutils.app import add_route, create_app
from svcutils.core.errors import logic_error
from svcutils.core.middleware import require_queries, transform_body, valid_body
from svcutils.core.routing import endpoint, route_async, route_nextable_async
from svcutils.core.validation import SchemaValidator, validate_date


class ItemIn(BaseModel):
    name: str
    price: float


async def create_item(request, response, call_next):
    if request.body["name"] == "taken":
        raise logic_error("Conflict", "Item already exists", 409, 21, request.body["name"])
    return {"name": request.body["name"], "price": request.body["price"]}


async def maybe_cached(request, response, call_next):
    if request.query.get("cached") == "1":
        return {"source": "cache"}
    await call_next()
    return None


async def from_db(request, response, call_next):
    return {"source": "db"}


async def check_date(request, response, call_next):
    validate_date(request.query["day"], "%Y-%m-%d", 31)
    response.send({"day": request.query["day"]})


async def echo_body(request, response, call_next):
    return {"body": request.body}


async def crash(request, response, call_next):
    raise RuntimeError("kaboom")


def _make_app() -> FastAPI:
    app = create_app("test")
    add_route(app, "post", "/items",
              valid_body(SchemaValidator(ItemIn)),
              transform_body({"name": str.strip}),
              route_async(create_item))
    add_route(app, "get", "/lookup", route_nextable_async(maybe_cached), route_async(from_db))
    add_route(app, "get", "/nowhere", route_nextable_async(maybe_cached))
    add_route(app, "get", "/date", require_queries("day"), check_date)
    add_route(app, "get", "/crash", crash)
    add_route(app, "post", "/echo-body", route_async(echo_body))
    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(_make_app(), raise_server_exceptions=False)


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "svcutils-test"
        assert "timestamp" in data


class TestChains:
    def test_create_item(self, client: TestClient) -> None:
        resp = client.post("/items", json={"name": "  lamp ", "price": 9.5})
        assert resp.status_code == 200
        assert resp.json() == {"name": "lamp", "price": 9.5}

    def test_body_validation_failure(self, client: TestClient) -> None:
        resp = client.post("/items", json={"name": "lamp"})
        assert resp.status_code == 400
        assert resp.json()["err"][0]["loc"] == ["price"]

    def test_logic_error_envelope(self, client: TestClient) -> None:
        resp = client.post("/items", json={"name": "taken", "price": 1})
        assert resp.status_code == 409
        assert resp.json() == {
            "err": {
                "httpCode": 409,
                "code": 21,
                "title": "Conflict",
                "message": "Item already exists",
                "pars": ["taken"],
            }
        }

    def test_invalid_json_body(self, client: TestClient) -> None:
        resp = client.post("/items", content=b"{not json", headers={"content-type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"err": "Request body is not valid JSON"}

    def test_form_body_not_parsed(self, client: TestClient) -> None:
        resp = client.post("/echo-body", data={"name": "lamp"})
        assert resp.status_code == 200
        assert resp.json() == {"body": {}}

    def test_json_suffix_content_type_parsed(self, client: TestClient) -> None:
        resp = client.post("/echo-body", content=b'{"a": 1}',
                           headers={"content-type": "application/merge-patch+json; charset=utf-8"})
        assert resp.json() == {"body": {"a": 1}}

    def test_nextable_answers_itself(self, client: TestClient) -> None:
        assert client.get("/lookup", params={"cached": "1"}).json() == {"source": "cache"}

    def test_nextable_defers(self, client: TestClient) -> None:
        assert client.get("/lookup").json() == {"source": "db"}

    def test_unanswered_chain_is_404(self, client: TestClient) -> None:
        resp = client.get("/nowhere")
        assert resp.status_code == 404
        assert resp.json() == {"err": "Cannot GET /nowhere"}

    def test_missing_query(self, client: TestClient) -> None:
        resp = client.get("/date")
        assert resp.status_code == 400
        assert resp.json() == {"err": "Query day is missing"}

    def test_logic_error_outside_route_adapter(self, client: TestClient) -> None:
        resp = client.get("/date", params={"day": "2024-13-40"})
        assert resp.status_code == 400
        err = resp.json()["err"]
        assert err["code"] == 31
        assert err["pars"] == ["2024-13-40"]

    def test_valid_date(self, client: TestClient) -> None:
        assert client.get("/date", params={"day": "2024-02-29"}).json() == {"day": "2024-02-29"}

    def test_unhandled_exception_is_500(self, client: TestClient) -> None:
        resp = client.get("/crash")
        assert resp.status_code == 500
        assert resp.json() == {"err": {"message": "Internal server error"}}


class TestRouter:
    def test_add_route_on_router(self) -> None:
        async def ping(request, response, call_next):
            return {"pong": True}

        router = APIRouter()
        add_route(router, "get", "/ping", route_async(ping))
        app = FastAPI()
        app.include_router(router)
        assert TestClient(app).get("/ping").json() == {"pong": True}

    def test_endpoint_directly(self) -> None:
        async def echo(request, response, call_next):
            return {"q": request.query}

        app = FastAPI()
        app.add_api_route("/echo", endpoint(route_async(echo)), methods=["GET"])
        assert TestClient(app).get("/echo", params={"a": "1"}).json() == {"q": {"a": "1"}}
