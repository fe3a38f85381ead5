"""
Create Video Command.

Checks, in order: the type allow-list, the duration cap, today's post
quota and the premium requirement for INVESTORS_ONLY. Pinning a pitch
unpins the author's previous one.
"""

from dataclasses import dataclass, field
from typing import Optional

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.video import VideoDTO, to_video_dto
from zfounders.domain.entities.video import Video
from zfounders.domain.policies.periods import start_of_day
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import VideoType, VisibilityClass
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class CreateVideoCommand(Command[VideoDTO]):
    user_id: UserId
    video_url: str
    type: VideoType = VideoType.UPDATE
    visibility: VisibilityClass = VisibilityClass.PUBLIC
    caption: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    is_pinned: bool = False


class CreateVideoHandler(CommandHandler[VideoDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: CreateVideoCommand) -> VideoDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            author = await load_actor(uow, command.user_id)
            posted_today = await uow.videos.count_created_since(author.id, start_of_day(now))

            decision = self.engine.gate.can_act(
                author,
                Actions.POST_VIDEO,
                video_type=command.type,
                visibility=command.visibility,
                duration=command.duration,
                posted_today=posted_today,
                now=now,
            )
            enforce(decision, Actions.POST_VIDEO, self.engine.settings)

            pin = command.is_pinned and command.type == VideoType.PITCH
            if pin:
                previous = await uow.videos.get_pinned_pitch(author.id)
                if previous is not None:
                    previous.is_pinned = False
                    await uow.videos.save(previous)

            video = Video.create(
                user_id=author.id,
                video_url=command.video_url,
                type=command.type,
                visibility=command.visibility,
                now=now,
                caption=command.caption,
                thumbnail_url=command.thumbnail_url,
                duration=command.duration,
                tags=list(command.tags),
                is_pinned=pin,
            )
            await uow.videos.save(video)
            return to_video_dto(video)
