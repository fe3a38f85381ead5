from zfounders.config.settings import Config, get_config, policy_settings

__all__ = ["Config", "get_config", "policy_settings"]
