"""SQLModel models package."""

from .email_verification import EmailVerification
from .follow import Follow
from .notification import Notification
from .profile_image import ProfileImage
from .review import Comment, Review, ReviewBookmark, ReviewLike, ReviewShare
from .user import User
from .user_block import UserBlock

__all__ = [
    "User",
    "ProfileImage",
    "Follow",
    "UserBlock",
    "Notification",
    "EmailVerification",
    "Review",
    "ReviewBookmark",
    "ReviewShare",
    "ReviewLike",
    "Comment",
]
