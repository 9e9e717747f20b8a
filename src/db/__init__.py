from src.db.database import Database, get_async_session
