import sqlalchemy as sa

from ..database import Base

class Favorite(Base):
    __tablename__ = "favorites"
    id = sa.Column(sa.Integer, primary_key=True)
    user_id = sa.Column(sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True)
    song_id = sa.Column(sa.Integer,
            sa.ForeignKey("songs.id", ondelete="CASCADE"),
            nullable=False,
            index=True)
    created = sa.Column(sa.DateTime, nullable=False)
    updated = sa.Column(sa.DateTime, nullable=False)

    user = sa.orm.relationship("User",
            back_populates="favorites")
    song = sa.orm.relationship("Song",
            back_populates="favorites")

    __table_args__ = (sa.schema.Index("uniq_favorite", "user_id", "song_id", unique=True),)

