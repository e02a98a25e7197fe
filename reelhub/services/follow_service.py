"""
Follow-graph mutator.
"""

from typing import Literal

from reelhub.errors import NotFoundError, SelfFollowError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.repositories.user_repository import UserRepository

logger = get_logger(__name__)

FollowAction = Literal["follow", "unfollow"]


class FollowService:
    def __init__(self, users=None):
        self.users = users or UserRepository

    async def toggle_follow(self, actor: str, target: str) -> FollowAction:
        """
        Follow `target` if `actor` does not follow them yet, unfollow otherwise.

        The repository flips the edge in one transaction, so actor.following
        and target.followers always change together.

        Raises:
            SelfFollowError: actor == target
            NotFoundError: either user is unknown
        """
        if actor == target:
            raise SelfFollowError(actor)

        action = await self.users.toggle_follow(actor, target)
        if action is None:
            raise NotFoundError("User not found", actor=actor, target=target)

        logger.info("Follow edge toggled", actor=actor, target=target, action=action)
        return action


follow_service = FollowService()
