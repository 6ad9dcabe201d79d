# pinify/db/models/place.py
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from pinify.db.base import Base


class Place(Base):
    __tablename__ = "places"

    id = Column(Integer, primary_key=True, index=True)

    # creator, not an exclusive owner: anyone may review the place
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String, nullable=False, index=True)
    city = Column(String, nullable=False, default="", server_default="")
    district = Column(String, nullable=False, default="", server_default="")
    categories = Column(JSON, nullable=False, default=list)
    google_place_id = Column(String, nullable=True)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # derived from the review set, see pinify.core.ratings
    avg_rating = Column(Float, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", foreign_keys=[owner_id])
    reviews = relationship(
        "Review",
        back_populates="place",
        cascade="all, delete-orphan",
    )
