from .artist import Artist
from .favorite import Favorite
from .song import Song
from .user import User, UserApiKey
