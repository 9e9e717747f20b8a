from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship

from src.db.base import Base


# Association table for the many-to-many link between flashcards and tags
flashcard_tags = Table(
    "flashcard_tags",
    Base.metadata,
    Column("flashcard_id", Integer, ForeignKey("flashcards.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """Label attached to flashcards"""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    # Unique by convention only
    name = Column(String, nullable=False)

    flashcards = relationship("Flashcard", secondary=flashcard_tags, back_populates="tags")

    def __repr__(self):
        return f"<Tag id={self.id} name={self.name!r}>"
