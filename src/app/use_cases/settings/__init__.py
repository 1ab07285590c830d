"""Settings use cases"""
from .get_settings import GetSettings, load_settings
from .update_settings import UpdateSettings
from .dtos import UpdateSettingsCommandDTO, SettingsResponseDTO

__all__ = [
    "GetSettings",
    "load_settings",
    "UpdateSettings",
    "UpdateSettingsCommandDTO",
    "SettingsResponseDTO",
]
