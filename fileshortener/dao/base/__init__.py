from fileshortener.dao.base.short_url_base_dao import ShortURLBaseDAO
from fileshortener.dao.base.session_base_dao import SessionBaseDAO


__all__ = [
    'ShortURLBaseDAO',
    'SessionBaseDAO',
]
