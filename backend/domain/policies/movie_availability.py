"""
Movie Availability

A movie is rentable while no open rental holds it.
"""


def is_available(movie) -> bool:
    """True iff the movie's rental back-reference is empty"""
    return movie.rental_id is None
