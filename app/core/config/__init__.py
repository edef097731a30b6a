from .settings import Settings, get_env, get_env_bool, get_env_int, load_settings, settings

__all__ = ["Settings", "get_env", "get_env_bool", "get_env_int", "load_settings", "settings"]
