from zfounders.application.services.notification_emitter import (
    NotificationEmitter,
    preview,
)

__all__ = ["NotificationEmitter", "preview"]
