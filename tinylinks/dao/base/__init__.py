from tinylinks.dao.base.shortcode_base_dao import ShortcodeBaseDAO


__all__ = [
    'ShortcodeBaseDAO',
]
