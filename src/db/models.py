# Import all models here for Alembic and create_all to discover them
from src.db.base import Base
from src.models.flashcard import Flashcard
from src.models.tag import Tag, flashcard_tags
