from secure_session.database.database_manager import DatabaseManager

__all__ = ['DatabaseManager']
