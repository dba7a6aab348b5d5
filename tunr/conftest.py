import os
import tempfile

import pytest

_db_dir = tempfile.mkdtemp(prefix="tunr-test-")
os.environ["TUNR_DATABASE_URL"] = "sqlite:///" + os.path.join(_db_dir, "tunr.db")

from tunr import config
from tunr.misc import db_session
from tunr.types import Artist, Song, User, UserApiKey


@pytest.fixture
def database():
    config.db.create_all()
    yield config.db
    config.db.drop_all()


@pytest.fixture
def ids(database):
    with db_session() as s:
        alice = User(name="alice")
        alice.api_keys.add(UserApiKey(name="test", key="alice-key"))
        bob = User(name="bob")
        bob.api_keys.add(UserApiKey(name="test", key="bob-key"))
        adele = Artist(name="Adele", nationality="British")
        hello = Song(title="Hello", album="25", artist=adele)
        rolling = Song(title="Rolling in the Deep", album="21", artist=adele)
        stevie = Artist(name="Stevie Wonder", nationality="American")
        superstition = Song(title="Superstition", album="Talking Book", artist=stevie)
        s.add_all([alice, bob, adele, stevie])
        s.flush()
        return dict(
            alice=alice.id,
            bob=bob.id,
            adele=adele.id,
            stevie=stevie.id,
            hello=hello.id,
            rolling=rolling.id,
            superstition=superstition.id,
        )


@pytest.fixture
def session(database):
    s = config.db.create_session()
    yield s
    s.rollback()
    s.close()


@pytest.fixture
def client(database):
    from tunr.app import app
    app.testing = True
    return app.test_client()
