from fileshortener.dao.file.mixins import FileStoreMixin
from fileshortener.dao.file.short_url_file_dao import ShortURLFileDAO


__all__ = [
    'FileStoreMixin',
    'ShortURLFileDAO',
]
