"""
Comment On Video Command.

A private investor who comments on someone else's video is revealed to the
video's owner. The reveal is one-way and scoped to that owner only.
"""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.user import public_label
from zfounders.application.dto.video import CommentDTO, to_comment_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.video import Comment
from zfounders.domain.exceptions import DomainValidationError, EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.policies.reveal import RevealLedger, reveals_on_comment
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId

MAX_COMMENT_LENGTH = 500


@dataclass(frozen=True)
class CommentOnVideoCommand(Command[CommentDTO]):
    user_id: UserId
    video_id: VideoId
    content: str
    parent_id: Optional[str] = None


class CommentOnVideoHandler(CommandHandler[CommentDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: CommentOnVideoCommand) -> CommentDTO:
        content = (command.content or "").strip()
        if not content:
            raise DomainValidationError("Comment content is required")
        if len(content) > MAX_COMMENT_LENGTH:
            raise DomainValidationError(
                f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"
            )

        async with self.uow as uow:
            now = self.engine.clock.now()
            actor = await load_actor(uow, command.user_id)
            video = await uow.videos.get_by_id(command.video_id)
            if video is None:
                raise EntityNotFoundError("Video not found")

            enforce(
                self.engine.gate.can_act(actor, Actions.COMMENT, video),
                Actions.COMMENT,
                self.engine.settings,
            )

            comment = Comment.create(
                video.id, actor.id, content, now, parent_id=command.parent_id
            )
            await uow.videos.add_comment(comment)
            video.comment_count += 1
            await uow.videos.save(video)

            if reveals_on_comment(actor, video.user_id):
                await RevealLedger(uow.reveals).reveal(actor.id, video.user_id, now)

            if video.user_id != actor.id:
                await self.notifier.notify(
                    uow,
                    video.user_id,
                    NotificationType.NEW_COMMENT,
                    "New Comment",
                    f"{public_label(actor, revealed=True)} commented on your video",
                    now,
                    data={"videoId": video.id.value, "commentId": comment.id},
                )
            return to_comment_dto(comment)
