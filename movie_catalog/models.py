from sqlalchemy import Column, DateTime, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Studio(Base):
    __tablename__ = "studios"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True, index=True)
    aliases = Column(Text, nullable=True)
    date = Column(String(10), nullable=True)
    rating = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)
    director = Column(String(255), nullable=True)
    synopsis = Column(Text, nullable=True)
    url = Column(String(255), nullable=True)
    studio_id = Column(Integer, ForeignKey("studios.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    images = relationship(
        "MovieImages", back_populates="movie", uselist=False, cascade="all, delete-orphan"
    )


class MovieImages(Base):
    __tablename__ = "movies_images"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    front_image = Column(LargeBinary, nullable=True)
    back_image = Column(LargeBinary, nullable=True)

    movie = relationship("Movie", back_populates="images")
