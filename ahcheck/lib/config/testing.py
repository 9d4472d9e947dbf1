"""Settings override used by the test suite.

``get_settings`` returns the override when one is set, which lets a test
pin every field without touching the environment or a ``.env`` file.
"""

import ahcheck.lib.config.settings as _settings_module
from ahcheck.lib.config.settings import Settings, _load_settings


def set_settings(settings: Settings | None) -> None:
    """Make ``get_settings`` return ``settings``.

    Passing None drops the override and the cached environment load, so the
    next call reads the environment again.
    """
    _settings_module._settings_override = settings
    _load_settings.cache_clear()
