from fileshortener.dao.memory.session_memory_dao import SessionMemoryDAO


__all__ = [
    'SessionMemoryDAO',
]
