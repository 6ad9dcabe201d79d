# pinify/db/models/review.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from pinify.db.base import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    # no unique (place_id, user_id) constraint; one review per user is checked in the routes
    place_id = Column(Integer, ForeignKey("places.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    username = Column(String, nullable=False)

    rating = Column(Integer, nullable=False)   # 1..5
    comment = Column(String, nullable=False, default="", server_default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    place = relationship("Place", back_populates="reviews")
    user = relationship("User", foreign_keys=[user_id])
