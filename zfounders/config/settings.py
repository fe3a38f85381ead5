"""Application configuration settings"""

import os
from dotenv import load_dotenv

from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.value_objects.enums import SubscriptionTier

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    TESTING = _flag("TESTING")
    DEBUG = _flag("DEBUG")

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

    # Posting quota (videos per UTC day)
    FREE_DAILY_POST_LIMIT = int(os.getenv("FREE_DAILY_POST_LIMIT", "3"))
    PREMIUM_DAILY_POST_LIMIT = int(os.getenv("PREMIUM_DAILY_POST_LIMIT", "10"))
    MAX_VIDEO_DURATION_SECONDS = int(os.getenv("MAX_VIDEO_DURATION_SECONDS", "90"))

    # Monthly cap on messages to INVESTOR targets, per sender account type
    FREE_INVESTOR_DM_LIMIT = int(os.getenv("FREE_INVESTOR_DM_LIMIT", "3"))
    BUILDER_INVESTOR_DM_LIMIT = int(os.getenv("BUILDER_INVESTOR_DM_LIMIT", "5"))

    PREMIUM_TIERS = os.getenv(
        "PREMIUM_TIERS", "FOUNDER_PRO,INVESTOR_PRO,STEALTH_MODE"
    ).split(",")
    ACCOUNT_TYPE_SWITCH_COOLDOWN_DAYS = int(
        os.getenv("ACCOUNT_TYPE_SWITCH_COOLDOWN_DAYS", "30")
    )
    UPGRADE_URL = os.getenv("UPGRADE_URL", "/api/subscriptions/plans")

    # Persistence: "memory" or "prisma"
    PERSISTENCE_BACKEND: str = os.getenv("PERSISTENCE_BACKEND", "memory")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Realtime fan-out: "memory" (single process) or "redis"
    REALTIME_BACKEND: str = os.getenv("REALTIME_BACKEND", "memory")
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

    # Pagination
    CONVERSATION_MESSAGE_LIMIT: int = int(os.getenv("CONVERSATION_MESSAGE_LIMIT", "50"))
    FEED_PAGE_SIZE: int = int(os.getenv("FEED_PAGE_SIZE", "20"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    JWT_SECRET = "test-secret"
    PERSISTENCE_BACKEND = "memory"
    REALTIME_BACKEND = "memory"
    LOG_PATH = ""


class ProductionConfig(Config):
    """Production configuration"""

    PERSISTENCE_BACKEND = os.getenv("PERSISTENCE_BACKEND", "prisma")


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])


def policy_settings(cfg=Config) -> PolicySettings:
    """Decision-table inputs for the policy core."""
    return PolicySettings(
        free_daily_post_limit=cfg.FREE_DAILY_POST_LIMIT,
        premium_daily_post_limit=cfg.PREMIUM_DAILY_POST_LIMIT,
        founder_investor_dm_limit=cfg.FREE_INVESTOR_DM_LIMIT,
        builder_investor_dm_limit=cfg.BUILDER_INVESTOR_DM_LIMIT,
        premium_tiers=frozenset(
            SubscriptionTier(t.strip()) for t in cfg.PREMIUM_TIERS if t.strip()
        ),
        max_video_duration_seconds=cfg.MAX_VIDEO_DURATION_SECONDS,
        account_type_switch_cooldown_days=cfg.ACCOUNT_TYPE_SWITCH_COOLDOWN_DAYS,
        upgrade_url=cfg.UPGRADE_URL,
    )
