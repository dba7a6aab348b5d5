import sqlalchemy as sa
import sqlalchemy_utils as sau

from ..database import Base

class Artist(Base):
    __tablename__ = "artists"
    id = sa.Column(sa.Integer, primary_key=True)
    name = sa.Column(sa.Text, nullable=False)
    photo_url = sa.Column(sau.URLType)
    nationality = sa.Column(sa.Text)
    songs = sa.orm.relationship("Song",
            order_by="Song.id",
            cascade="all, delete-orphan",
            passive_deletes=True,
            back_populates="artist")

    def json(self, with_songs=False):
        ret = dict(
            id=self.id,
            name=self.name,
            photo_url=str(self.photo_url) if self.photo_url else None,
            nationality=self.nationality,
        )
        if with_songs:
            ret['songs'] = [s.json() for s in self.songs]
        return ret

    def __str__(self):
        return str(self.name)
