import pytest
from sqlalchemy.exc import IntegrityError

from .favorites import (SongNotFound, add_favorite, remove_favorite, is_favorited,
                        favorite_songs)
from .types import Favorite, Song, User


def count(session, user_id, song_id):
    return session.query(Favorite).filter_by(user_id=user_id, song_id=song_id).count()


def test_add_creates_one_favorite(session, ids):
    alice = session.get(User, ids['alice'])
    favorite, created = add_favorite(session, alice, ids['hello'])
    assert created
    assert favorite.user is alice
    assert favorite.song.title == "Hello"
    assert favorite.created is not None
    assert count(session, ids['alice'], ids['hello']) == 1


def test_add_twice_keeps_one_favorite(session, ids):
    alice = session.get(User, ids['alice'])
    first, _ = add_favorite(session, alice, ids['hello'])
    second, created = add_favorite(session, alice, ids['hello'])
    assert not created
    assert second is first
    assert count(session, ids['alice'], ids['hello']) == 1


def test_remove_deletes_favorite(session, ids):
    alice = session.get(User, ids['alice'])
    add_favorite(session, alice, ids['hello'])
    assert remove_favorite(session, alice, ids['hello'])
    assert count(session, ids['alice'], ids['hello']) == 0


def test_remove_without_favorite_is_noop(session, ids):
    alice = session.get(User, ids['alice'])
    assert not remove_favorite(session, alice, ids['hello'])
    add_favorite(session, alice, ids['hello'])
    remove_favorite(session, alice, ids['hello'])
    assert not remove_favorite(session, alice, ids['hello'])


def test_favorites_are_per_user(session, ids):
    alice = session.get(User, ids['alice'])
    bob = session.get(User, ids['bob'])
    hello = session.get(Song, ids['hello'])
    add_favorite(session, alice, ids['hello'])
    add_favorite(session, bob, ids['hello'])
    remove_favorite(session, alice, ids['hello'])
    assert not is_favorited(session, alice, hello)
    assert is_favorited(session, bob, hello)
    assert count(session, ids['bob'], ids['hello']) == 1


def test_anonymous_has_no_favorites(session, ids):
    hello = session.get(Song, ids['hello'])
    assert not is_favorited(session, None, hello)


@pytest.mark.parametrize('op', [add_favorite, remove_favorite])
def test_unknown_song(session, ids, op):
    alice = session.get(User, ids['alice'])
    with pytest.raises(SongNotFound) as e:
        op(session, alice, 12345)
    assert e.value.song_id == 12345
    assert session.query(Favorite).count() == 0


def test_favorite_songs_newest_first(session, ids):
    alice = session.get(User, ids['alice'])
    add_favorite(session, alice, ids['hello'])
    add_favorite(session, alice, ids['superstition'])
    assert [s.title for s in favorite_songs(session, alice)] == ["Superstition", "Hello"]
    assert favorite_songs(session, session.get(User, ids['bob'])) == []


def test_unique_pair_enforced_by_storage(session, ids):
    alice = session.get(User, ids['alice'])
    hello = session.get(Song, ids['hello'])
    session.add(Favorite(user=alice, song=hello))
    session.add(Favorite(user=alice, song=hello))
    with pytest.raises(IntegrityError):
        session.flush()


def test_deleting_song_removes_favorites(session, ids):
    alice = session.get(User, ids['alice'])
    add_favorite(session, alice, ids['hello'])
    session.commit()
    session.delete(session.get(Song, ids['hello']))
    session.commit()
    assert session.query(Favorite).count() == 0


def test_deleting_user_removes_favorites(session, ids):
    alice = session.get(User, ids['alice'])
    add_favorite(session, alice, ids['hello'])
    add_favorite(session, session.get(User, ids['bob']), ids['hello'])
    session.commit()
    session.delete(alice)
    session.commit()
    assert [f.user.name for f in session.query(Favorite)] == ["bob"]
