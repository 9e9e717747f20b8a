from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.orm import relationship

from src.db.base import Base
from src.models.tag import flashcard_tags


class Flashcard(Base):
    """Flashcard with front and back text"""

    __tablename__ = "flashcards"

    id = Column(Integer, primary_key=True, index=True)
    front = Column(Text, nullable=False)
    back = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Many-to-many with tags; always loaded explicitly with selectinload
    tags = relationship("Tag", secondary=flashcard_tags, back_populates="flashcards")

    def __repr__(self):
        return f"<Flashcard id={self.id} front={self.front!r}>"
