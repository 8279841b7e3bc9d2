from tinylinks.lifecycle.engine import ShortcodeLifecycle
from tinylinks.lifecycle.hooks import LifecycleHooks, LoggingHooks
from tinylinks.lifecycle.resolver import ShortcodeResolver
from tinylinks.lifecycle.expiry import is_expired, expiry_instant
from tinylinks.lifecycle.clicks import record_click


__all__ = [
    'ShortcodeLifecycle',
    'LifecycleHooks',
    'LoggingHooks',
    'ShortcodeResolver',
    'is_expired',
    'expiry_instant',
    'record_click',
]
