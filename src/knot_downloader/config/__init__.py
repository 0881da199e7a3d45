from knot_downloader.config.loader import YamlConfigLoader, resolve_config_path
from knot_downloader.config.models import AppConfig, ConfigLoadRequest, FileEntry

__all__ = ["AppConfig", "ConfigLoadRequest", "FileEntry", "YamlConfigLoader", "resolve_config_path"]
