from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, ForeignKey, Table, CheckConstraint, Index, text
from sqlalchemy.orm import relationship
from database import Base
from utils.datetime_utils import utcnow


# Permanent record of which movies a rental held, in request order; survives the rental being closed
rental_movies = Table(
    'rental_movies',
    Base.metadata,
    Column('rental_id', Integer, ForeignKey('rentals.id', ondelete='CASCADE'), primary_key=True),
    Column('movie_id', Integer, ForeignKey('movies.id', ondelete='CASCADE'), primary_key=True),
    Column('position', Integer, nullable=False),
)


class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    cpf = Column(String, nullable=False, unique=True)
    birth_date = Column(Date, nullable=False)

    rentals = relationship("Rental", back_populates="user", order_by="Rental.id")

    __table_args__ = (
        CheckConstraint("email != ''"),
    )


class Movie(Base):
    """
    A rentable title.

    rental_id points at the open rental currently holding the movie and is
    NULL while the movie is available. It is claimed when a rental is created
    and cleared when that rental is finished.
    """
    __tablename__ = 'movies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    adults_only = Column(Boolean, nullable=False, default=False)
    rental_id = Column(Integer, ForeignKey('rentals.id'), nullable=True)

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_movies_rental_id', 'rental_id'),
    )


class Rental(Base):
    """
    A group of movies borrowed by one user.

    Rentals are created open (closed=False) and transition to closed exactly
    once. A user holds at most one open rental; the partial unique index
    enforces that at the store level.
    """
    __tablename__ = 'rentals'

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, default=utcnow)
    end_date = Column(DateTime, nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    closed = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="rentals")
    # Written by RentalRepository.create_rental, which records each movie's position
    movies = relationship("Movie", secondary=rental_movies, order_by=rental_movies.c.position, viewonly=True)

    __table_args__ = (
        CheckConstraint("end_date >= date"),
        Index('idx_rentals_user_id', 'user_id'),
        Index(
            'uq_rentals_open_user',
            'user_id',
            unique=True,
            sqlite_where=text('closed = 0'),
            postgresql_where=text('closed IS FALSE'),
        ),
    )

    @property
    def movie_ids(self) -> list[int]:
        """IDs of every movie this rental holds (or held, once closed)"""
        return [movie.id for movie in self.movies]
