"""Like Video Command. Idempotent: a repeated like changes nothing."""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.user import public_label
from zfounders.application.dto.video import VideoDTO, to_video_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.social import Like
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass(frozen=True)
class LikeVideoCommand(Command[VideoDTO]):
    user_id: UserId
    video_id: VideoId


class LikeVideoHandler(CommandHandler[VideoDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: LikeVideoCommand) -> VideoDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            actor = await load_actor(uow, command.user_id)
            video = await uow.videos.get_by_id(command.video_id)
            if video is None:
                raise EntityNotFoundError("Video not found")

            enforce(
                self.engine.gate.can_act(actor, Actions.LIKE_VIDEO, video),
                Actions.LIKE_VIDEO,
                self.engine.settings,
            )

            created = await uow.videos.add_like(Like(video.id, actor.id, now))
            if created:
                video.like_count += 1
                await uow.videos.save(video)
                if video.user_id != actor.id:
                    await self.notifier.notify(
                        uow,
                        video.user_id,
                        NotificationType.NEW_LIKE,
                        "New Like",
                        f"{public_label(actor)} liked your video",
                        now,
                        data={"videoId": video.id.value, "userId": actor.id.value},
                    )
            return to_video_dto(video)
