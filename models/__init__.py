from .User import User
from .Race import Race
from .Review import Review
from .ReviewLike import ReviewLike
from .Follow import Follow

__all__ = [
    "User",
    "Race",
    "Review",
    "ReviewLike",
    "Follow",
]
