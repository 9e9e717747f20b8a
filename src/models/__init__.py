from src.models.tag import Tag, flashcard_tags
from src.models.flashcard import Flashcard
