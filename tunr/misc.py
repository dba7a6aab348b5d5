from contextlib import contextmanager

from . import config

import json
import flask
from functools import wraps
from urllib.parse import parse_qs
from furl import furl


def json_api(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ret = fn(*args, **kwargs)
        status = None
        if isinstance(ret, flask.Response):
            return ret
        if isinstance(ret, tuple):
            status = ret[1]
            ret = ret[0]
        return json_response(ret, status)

    return wrapper


def json_response(data, status=None):
    return flask.Response(
        json.dumps(data, ensure_ascii=False, separators=(',', ':')),
        status=status,
        headers={
            "Content-Type": "application/json; charset=utf-8",
        }
    )


class InvalidBody(ValueError):
    pass


def json_body(request):
    j = request.get_json(force=True)
    if not isinstance(j, dict):
        raise InvalidBody("expected a JSON object")
    return j


def valid_url(value):
    if not isinstance(value, str):
        return False
    try:
        url = furl(value)
    except ValueError:
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def wants_json(request):
    return request.accept_mimetypes.best_match(["text/html", "application/json"]) == "application/json"


def with_db_session(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if "session" in kwargs:
            raise RuntimeError("A session argument already exists!")
        with db_session() as s:
            kwargs["session"] = s
            return fn(*args, **kwargs)

    return wrapper


@contextmanager
def db_session():
    session = config.db.create_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class MethodOverrideMiddleware:
    """
	Lets HTML forms, which can only GET and POST, reach PUT and DELETE routes
	by posting to a URL with `?_method=DELETE` or sending X-HTTP-Method-Override.
	"""
    allowed_methods = frozenset(['PUT', 'PATCH', 'DELETE'])

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        if environ.get('REQUEST_METHOD') == 'POST':
            method = environ.get('HTTP_X_HTTP_METHOD_OVERRIDE')
            if not method:
                method = parse_qs(environ.get('QUERY_STRING', '')).get('_method', [None])[0]
            if method and method.upper() in self.allowed_methods:
                environ['REQUEST_METHOD'] = method.upper()
        return self.app(environ, start_response)
