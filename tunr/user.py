import json
import logging
from functools import wraps
from secrets import token_urlsafe

import flask
from pbkdf2 import crypt

from .misc import json_api, json_body, with_db_session
from .types import User, UserApiKey

L = logging.getLogger("tunr.user")

api = flask.Blueprint("user", __name__, url_prefix="/api/user")

API_KEY_COOKIE = "tunr-apikey"


def authentication_required():
    return flask.Response(
        json.dumps({"error": "authentication required"}),
        status=403,
        headers={"Content-Type": "application/json; charset=utf-8"},
    )


def requires_auth(fn):
    @wraps(fn)
    def wrapper(*args, session, **kwargs):
        auth = flask.request.authorization
        user = session.query(User).filter_by(name=auth.username).one_or_none() if auth else None
        if not user or not user.password or crypt(auth.password, user.password) != user.password:
            return authentication_required()
        return fn(*args, user=user, session=session, **kwargs)

    return wrapper


def find_user_by_api_key(session, request):
    key = request.args.get("apikey")
    auth = request.authorization
    if not key and auth:
        key = auth.username if not auth.password else auth.password
    if not key and "authorization" in request.headers:
        key = request.headers["authorization"]
    if not key and API_KEY_COOKIE in request.cookies:
        key = request.cookies[API_KEY_COOKIE]
    if not key:
        return None
    key = session.query(UserApiKey).filter_by(key=key).one_or_none()
    return key.user if key else None


def requires_api_key(fn):
    @wraps(fn)
    def wrapper(*args, session, **kwargs):
        user = find_user_by_api_key(session, flask.request)
        if not user:
            return authentication_required()
        return fn(*args, user=user, session=session, **kwargs)

    return wrapper


def with_current_user(fn):
    """
	Like requires_api_key, but passes user=None for anonymous requests.
	"""

    @wraps(fn)
    def wrapper(*args, session, **kwargs):
        user = find_user_by_api_key(session, flask.request)
        return fn(*args, user=user, session=session, **kwargs)

    return wrapper


@api.route("/update", methods=["POST"])
@json_api
@with_db_session
@requires_auth
def update(user, session):
    j = json_body(flask.request)
    if not j.get('password'):
        return {"error": "missing field password"}, 400
    user.password = crypt(j['password'])
    L.info(f"Password updated for {user.name}")
    return {"status": "password updated"}, 200


@api.route("/apikeys/create", methods=["POST"])
@json_api
@with_db_session
@requires_auth
def create_api_key(user, session):
    j = json_body(flask.request)
    if not j.get('name'):
        return {"error": "missing field name"}, 400
    key = UserApiKey(name=j['name'], key=token_urlsafe(32))
    user.api_keys.add(key)
    session.flush()
    return {"status": "api key created", "key": key.json(show_key=True)}, 201


@api.route("/apikeys")
@json_api
@with_db_session
@requires_auth
def list_api_keys(user, session):
    return [k.json() for k in user.api_keys], 200


@api.route("/info")
@json_api
@with_db_session
@requires_api_key
def list_user_info(user, session):
    return {"user": user.name, "favorite_count": len(user.favorite_songs)}, 200


def reset_password(session, name):
    user = session.query(User).filter_by(name=name).one_or_none()
    if not user:
        user = User(name=name)
        session.add(user)
    password = token_urlsafe(32)
    user.password = crypt(password)
    return user, password


if __name__ == '__main__':
    import sys
    from . import config

    session = config.db.create_session()
    user, password = reset_password(session, sys.argv[1].lower())
    print(f"Reset password for {user.name} to: {password}")
    session.commit()
