import sqlalchemy as sa

from ..database import Base

class User(Base):
    __tablename__ = "users"
    id = sa.Column(sa.Integer, primary_key=True)
    name = sa.Column(sa.Text, nullable=False)
    password = sa.Column(sa.Text, nullable=True)

    favorites = sa.orm.relationship("Favorite",
            cascade="all, delete-orphan",
            passive_deletes=True,
            back_populates="user")
    favorite_songs = sa.orm.relationship("Song",
            secondary="favorites",
            collection_class=set,
            viewonly=True)

    api_keys = sa.orm.relationship("UserApiKey",
            collection_class=set,
            cascade="all, delete-orphan",
            back_populates="user")

    __table_args__ = (sa.schema.Index("uniq_name", "name", unique=True),)


class UserApiKey(Base):
    __tablename__ = "user_api_keys"
    id = sa.Column(sa.Integer, primary_key=True)
    name = sa.Column(sa.Text, nullable=False)
    user_id = sa.Column(sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            name="user",
            nullable=False)
    user = sa.orm.relationship("User",
            back_populates="api_keys")
    key = sa.Column(sa.Text, nullable=False, unique=True)

    def json(self, show_key=False):
        ret = dict(id=self.id, name=self.name)
        if show_key:
            ret['key'] = self.key
        return ret
