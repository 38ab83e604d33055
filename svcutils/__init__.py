"""Utility toolkit for FastAPI service backends.

Everything a service usually needs is re-exported here, so
``import svcutils as u`` gives one flat helper namespace.
"""

from .app import add_route, create_app
from .core.config import Config
from .core.errors import LogicError, Primitive, RequestRejected, logic_error
from .core.http import (
    RequestContext,
    ResponseWriter,
    create_service_callback,
    error_payload,
    to_json_safe,
)
from .core.logging import configure_logging
from .core.middleware import (
    install_exception_handlers,
    require_queries,
    transform_body,
    transform_query,
    valid_body,
    valid_query,
)
from .core.routing import (
    Failure,
    Success,
    capture,
    dispatch,
    endpoint,
    route_async,
    route_nextable_async,
    run_chain,
    safe,
)
from .core.validation import EMAIL_REGEX_STR, SchemaValidator, is_valid_email_address, validate_date
from .helpers.collections import (
    Pair,
    arr_to_obj,
    find,
    get_path,
    group_by,
    is_empty,
    key_by,
    make,
    map_values,
    merge,
    pack,
    pair,
    pair_first,
    pair_second,
    redis_hmget_parse,
    set_path,
    transform_by_schema,
    zip_to_obj,
)
from .helpers.geo import EARTH_RADIUS, geo_near_opts
from .helpers.numbers import arr, num_keys, parse_float, parse_float_null, parse_int, parse_int_null
from .helpers.optional import ABSENT, Absent, Present, opt
from .helpers.text import format_string, generate_upsert_sql, random_string, sha1, standarlize
from .helpers.uuid_time import get_date_from_uuid, get_time_int_from_uuid

__version__ = "1.0.0"
