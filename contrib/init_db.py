#!/usr/bin/env python3
"""
Creates the tunr schema. Pass `seed` to add a few sample artists and songs.
"""
import sys

from tunr.config import db
from tunr.misc import db_session
from tunr.types import Artist, Song

db.engine.echo = True
db.create_all()

SEED = {
    ("Adele", "British", None): [
        ("Hello", "25", None),
        ("Rolling in the Deep", "21", None),
    ],
    ("Stevie Wonder", "American", None): [
        ("Superstition", "Talking Book", None),
        ("Sir Duke", "Songs in the Key of Life", None),
    ],
}

if len(sys.argv) > 1 and sys.argv[1] == "seed":
    with db_session() as session:
        for (name, nationality, photo_url), songs in SEED.items():
            artist = Artist(name=name, nationality=nationality, photo_url=photo_url)
            for title, album, preview_url in songs:
                artist.songs.append(Song(title=title, album=album, preview_url=preview_url))
            session.add(artist)
