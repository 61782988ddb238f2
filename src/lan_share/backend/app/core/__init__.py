from lan_share.backend.app.core.config import settings, Settings
from lan_share.backend.app.core.context import AppContext, build_context

__all__ = ['settings',
           'Settings',
           'AppContext',
           'build_context']
