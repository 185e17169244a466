from .settings import Settings, load_env_file

__all__ = ["Settings", "load_env_file"]
