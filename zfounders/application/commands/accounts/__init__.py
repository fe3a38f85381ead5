"""Account commands."""

from .switch_account_type import SwitchAccountTypeCommand, SwitchAccountTypeHandler
from .review_verification import ReviewVerificationCommand, ReviewVerificationHandler
from .update_privacy_settings import (
    UpdatePrivacySettingsCommand,
    UpdatePrivacySettingsHandler,
)

__all__ = [
    "SwitchAccountTypeCommand",
    "SwitchAccountTypeHandler",
    "ReviewVerificationCommand",
    "ReviewVerificationHandler",
    "UpdatePrivacySettingsCommand",
    "UpdatePrivacySettingsHandler",
]
