import flask

from .misc import with_db_session
from .types import Artist, Favorite
from .user import API_KEY_COOKIE, with_current_user

views = flask.Blueprint("views", __name__)


def render(template, user, **context):
    resp = flask.make_response(flask.render_template(template, user=user, **context))
    # keep a key given as ?apikey= so the favorite forms on the page authenticate
    key = flask.request.args.get("apikey")
    if user and key:
        resp.set_cookie(API_KEY_COOKIE, key, httponly=True, samesite="Lax")
    return resp


@views.route("/")
def index():
    return flask.redirect(flask.url_for("views.artists"))


@views.route("/artists")
@with_db_session
@with_current_user
def artists(user, session):
    return render("artists/index.html", user,
                  artists=session.query(Artist).order_by(Artist.name).all())


@views.route("/artists/<int:id>")
@with_db_session
@with_current_user
def artist(id, user, session):
    artist = session.get(Artist, id)
    if not artist:
        flask.abort(404)
    favorited = set()
    if user:
        favorited = {song_id for song_id, in (session.query(Favorite.song_id)
                                              .filter(Favorite.user_id == user.id))}
    return render("artists/show.html", user,
                  artist=artist,
                  favorited=favorited)
