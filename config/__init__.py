from .config_loader import ConfigLoader
from .settings import Settings, load_settings

__all__ = ["ConfigLoader", "Settings", "load_settings"]
