import sqlalchemy as sa
import sqlalchemy_utils as sau

from ..database import Base

class Song(Base):
    __tablename__ = "songs"
    id = sa.Column(sa.Integer, primary_key=True)
    title = sa.Column(sa.Text, nullable=False)
    album = sa.Column(sa.Text)
    preview_url = sa.Column(sau.URLType)

    artist_id = sa.Column(sa.Integer,
            sa.ForeignKey("artists.id", ondelete="CASCADE"),
            name="artist",
            nullable=False,
            index=True)
    artist = sa.orm.relationship("Artist",
            back_populates="songs")

    favorites = sa.orm.relationship("Favorite",
            cascade="all, delete-orphan",
            passive_deletes=True,
            back_populates="song")
    favored_by = sa.orm.relationship("User",
            secondary="favorites",
            collection_class=set,
            viewonly=True)

    def json(self):
        return dict(
            **{attr: getattr(self, attr)
               for attr in ('id', 'title', 'album')},
            preview_url=str(self.preview_url) if self.preview_url else None,
            artist_id=self.artist_id,
            artist=self.artist.name if self.artist else None,
            favorite_count=len(self.favorites),
            favored_by=sorted(u.name for u in self.favored_by),
        )

    def __str__(self):
        return f"{self.title} by {self.artist} from {self.album}"
