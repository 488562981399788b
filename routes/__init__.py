from . import users
from . import follows
from . import races
from . import reviews
from . import feed
from . import health

__all__ = [
    "users",
    "follows",
    "races",
    "reviews",
    "feed",
    "health",
]
