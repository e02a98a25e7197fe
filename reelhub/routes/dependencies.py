"""
Service providers for route handlers.

Routes depend on these instead of importing the module-level services
directly, so tests can swap them through app.dependency_overrides.
"""

from reelhub.services.auth_service import AuthService, auth_service
from reelhub.services.contact_service import ContactAggregator, contact_aggregator
from reelhub.services.follow_service import FollowService, follow_service
from reelhub.services.message_service import MessageService, message_service
from reelhub.services.user_service import UserService, user_service
from reelhub.services.video_service import VideoService, video_service


def get_auth_service() -> AuthService:
    return auth_service


def get_user_service() -> UserService:
    return user_service


def get_follow_service() -> FollowService:
    return follow_service


def get_contact_aggregator() -> ContactAggregator:
    return contact_aggregator


def get_message_service() -> MessageService:
    return message_service


def get_video_service() -> VideoService:
    return video_service
