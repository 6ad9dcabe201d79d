# pinify/db/models/added_place.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import relationship
from pinify.db.base import Base


class AddedPlace(Base):
    """A place on one user's profile, carrying that user's own rating.

    Independent of the shared Place aggregate: deleting it only removes the
    place from this user's profile.
    """

    __tablename__ = "added_places"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    place_id = Column(Integer, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True)

    rating = Column(Integer, nullable=True)  # null once the user's review is deleted
    added_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="added_places")
    place = relationship("Place", lazy="selectin")
