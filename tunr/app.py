import logging

import flask
from sqlalchemy.exc import IntegrityError

from . import favorites
from . import types
from . import views
from .favorites import SongNotFound
from .misc import json_api, json_body, json_response, valid_url, with_db_session, InvalidBody, MethodOverrideMiddleware
from .user import api as user_api, requires_api_key

L = logging.getLogger("tunr.app")

app = flask.Flask(__name__)
app.register_blueprint(user_api)
app.register_blueprint(favorites.api)
app.register_blueprint(views.views)
app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)


@app.before_request
def request_logger():
    L.info("Request: {} {}".format(flask.request.method, flask.request.path))


@app.errorhandler(SongNotFound)
def song_not_found(e):
    return json_response({"error": "song does not exist"}, 404)


@app.errorhandler(InvalidBody)
def invalid_body(e):
    return json_response({"error": str(e)}, 400)


@app.errorhandler(IntegrityError)
def integrity_error(e):
    L.warning(f"Rejected conflicting change: {e.orig}")
    return json_response({"error": "conflicting change"}, 409)


def _missing(j, *fields):
    for field in fields:
        if not j.get(field):
            return {"error": f"missing field {field}"}, 400
    return None


def _invalid_urls(j, *fields):
    for field in fields:
        if j.get(field) and not valid_url(j[field]):
            return {"error": f"invalid url {field}"}, 400
    return None


def _update(obj, j, fields):
    for field in fields:
        if field in j:
            setattr(obj, field, j[field] or None)


ARTIST_FIELDS = ("name", "photo_url", "nationality")
SONG_FIELDS = ("title", "album", "preview_url")


@app.route("/api/artists")
@json_api
@with_db_session
def list_artists(session):
    return [a.json() for a in session.query(types.Artist).order_by(types.Artist.name)]


@app.route("/api/artists", methods=["POST"])
@json_api
@with_db_session
@requires_api_key
def create_artist(user, session):
    j = json_body(flask.request)
    error = _missing(j, 'name') or _invalid_urls(j, 'photo_url')
    if error:
        return error
    artist = types.Artist()
    _update(artist, j, ARTIST_FIELDS)
    session.add(artist)
    session.flush()
    L.info(f"{user.name} created artist {artist}")
    return artist.json(), 201


@app.route("/api/artists/<int:id>")
@json_api
@with_db_session
def get_artist(id, session):
    artist = session.get(types.Artist, id)
    if not artist:
        return {"error": "artist does not exist"}, 404
    return artist.json(with_songs=True)


@app.route("/api/artists/<int:id>", methods=["PUT"])
@json_api
@with_db_session
@requires_api_key
def update_artist(id, user, session):
    artist = session.get(types.Artist, id)
    if not artist:
        return {"error": "artist does not exist"}, 404
    j = json_body(flask.request)
    if 'name' in j and not j['name']:
        return {"error": "missing field name"}, 400
    error = _invalid_urls(j, 'photo_url')
    if error:
        return error
    _update(artist, j, ARTIST_FIELDS)
    return artist.json()


@app.route("/api/artists/<int:id>", methods=["DELETE"])
@json_api
@with_db_session
@requires_api_key
def delete_artist(id, user, session):
    artist = session.get(types.Artist, id)
    if not artist:
        return {"error": "artist does not exist"}, 404
    session.delete(artist)
    L.info(f"{user.name} deleted artist {artist}")
    return {"deleted": True}


@app.route("/api/artists/<int:id>/songs")
@json_api
@with_db_session
def list_songs(id, session):
    artist = session.get(types.Artist, id)
    if not artist:
        return {"error": "artist does not exist"}, 404
    return [s.json() for s in artist.songs]


@app.route("/api/artists/<int:id>/songs", methods=["POST"])
@json_api
@with_db_session
@requires_api_key
def create_song(id, user, session):
    artist = session.get(types.Artist, id)
    if not artist:
        return {"error": "artist does not exist"}, 404
    j = json_body(flask.request)
    error = _missing(j, 'title') or _invalid_urls(j, 'preview_url')
    if error:
        return error
    song = types.Song(artist=artist)
    _update(song, j, SONG_FIELDS)
    session.add(song)
    session.flush()
    return song.json(), 201


@app.route("/api/songs/<int:id>")
@json_api
@with_db_session
def get_song(id, session):
    return favorites.get_song(session, id).json()


@app.route("/api/songs/<int:id>", methods=["PUT"])
@json_api
@with_db_session
@requires_api_key
def update_song(id, user, session):
    song = favorites.get_song(session, id)
    j = json_body(flask.request)
    if 'title' in j and not j['title']:
        return {"error": "missing field title"}, 400
    error = _invalid_urls(j, 'preview_url')
    if error:
        return error
    _update(song, j, SONG_FIELDS)
    return song.json()


@app.route("/api/songs/<int:id>", methods=["DELETE"])
@json_api
@with_db_session
@requires_api_key
def delete_song(id, user, session):
    song = favorites.get_song(session, id)
    session.delete(song)
    L.info(f"{user.name} deleted song {song}")
    return {"deleted": True}
