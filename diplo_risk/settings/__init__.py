from diplo_risk.settings.store import (
    DashboardSettings,
    JsonSettingsStore,
    MemorySettingsStore,
    SettingsStore,
    open_settings_store,
    resolve_settings,
)

__all__ = [
    "DashboardSettings",
    "JsonSettingsStore",
    "MemorySettingsStore",
    "SettingsStore",
    "open_settings_store",
    "resolve_settings",
]
