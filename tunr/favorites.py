import logging

import flask

from .misc import json_api, json_response, wants_json, with_db_session
from .user import requires_api_key, with_current_user
from .types import Favorite, Song, User

L = logging.getLogger("tunr.favorites")

api = flask.Blueprint("favorites", __name__)


class SongNotFound(LookupError):
    def __init__(self, song_id):
        super().__init__(f"song {song_id} does not exist")
        self.song_id = song_id


def get_song(session, song_id) -> Song:
    song = session.query(Song).filter_by(id=song_id).one_or_none()
    if not song:
        raise SongNotFound(song_id)
    return song


def find_favorite(session, user: User, song: Song):
    return (session.query(Favorite)
            .filter_by(user_id=user.id, song_id=song.id)
            .one_or_none())


def add_favorite(session, user: User, song_id):
    """
	Favorites a song for the given user.

	Returns the favorite and whether it was newly created. Favoriting a song
	twice keeps the existing row. Raises SongNotFound for unknown songs.
	"""
    song = get_song(session, song_id)
    favorite = find_favorite(session, user, song)
    if favorite:
        return favorite, False
    favorite = Favorite(user=user, song=song)
    session.add(favorite)
    session.flush()
    L.info(f"{user.name} favorited {song}")
    return favorite, True


def remove_favorite(session, user: User, song_id) -> bool:
    """
	Removes the given user's favorite for a song, returning whether one existed.
	"""
    song = get_song(session, song_id)
    favorite = find_favorite(session, user, song)
    if not favorite:
        return False
    session.delete(favorite)
    session.flush()
    L.info(f"{user.name} unfavorited {song}")
    return True


def is_favorited(session, user, song: Song) -> bool:
    if user is None:
        return False
    return find_favorite(session, user, song) is not None


def favorite_songs(session, user: User):
    return [f.song for f in (session.query(Favorite)
                             .filter_by(user_id=user.id)
                             .order_by(Favorite.created.desc(), Favorite.id.desc()))]


def _toggled(song, favorite, changed):
    if wants_json(flask.request):
        return json_response(
            {"song": song.json(), "favorite": favorite, "changed": changed},
            201 if changed and favorite else 200)
    return flask.redirect(flask.url_for("views.artist", id=song.artist_id), code=303)


@api.route("/songs/<int:id>/add_favorite", methods=["POST"])
@with_db_session
@requires_api_key
def add(id, user, session):
    favorite, created = add_favorite(session, user, id)
    return _toggled(favorite.song, True, created)


@api.route("/songs/<int:id>/remove_favorite", methods=["DELETE"])
@with_db_session
@requires_api_key
def remove(id, user, session):
    removed = remove_favorite(session, user, id)
    return _toggled(get_song(session, id), False, removed)


@api.route("/api/songs/<int:id>/favorite")
@json_api
@with_db_session
@with_current_user
def check(id, user, session):
    song = get_song(session, id)
    return {"favorite": is_favorited(session, user, song)}


@api.route("/api/favorites")
@json_api
@with_db_session
@requires_api_key
def mine(user, session):
    return [s.json() for s in favorite_songs(session, user)]


@api.route("/api/favorites/<username>")
@json_api
@with_db_session
def by_user(username, session):
    user = session.query(User).filter_by(name=username.lower()).one_or_none()
    if not user:
        return {"error": "user does not exist"}, 404
    return [s.json() for s in favorite_songs(session, user)]
