"""
Name: In-Memory Movie Repository

Responsibilities:
  - Store movies in process memory for tests and local runs
  - Assign sequential ids and timestamps like the database does

Constraints:
  - Thread-safe via a lock
  - Not persistent; state lives as long as the instance
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ...domain.entities import Movie, MovieDraft


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryMovieRepository:
    """R: Dict-backed MovieRepository."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self._movies: Dict[int, Movie] = {}
        self._next_id = 1
        self._clock = clock
        self._lock = threading.Lock()

    def list_movies(self) -> List[Movie]:
        with self._lock:
            movies = list(self._movies.values())
        movies.sort(key=lambda m: (m.created_at, m.id), reverse=True)
        return [replace(m) for m in movies]

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        with self._lock:
            movie = self._movies.get(movie_id)
            return replace(movie) if movie else None

    def create_movie(self, draft: MovieDraft) -> Movie:
        with self._lock:
            now = self._clock()
            movie = Movie(
                id=self._next_id,
                title=draft.title,
                rating=draft.rating,
                release_date=draft.release_date,
                created_at=now,
                updated_at=now,
            )
            self._movies[movie.id] = movie
            self._next_id += 1
            return replace(movie)

    def update_movie(self, movie_id: int, draft: MovieDraft) -> Optional[Movie]:
        with self._lock:
            existing = self._movies.get(movie_id)
            if existing is None:
                return None
            updated = replace(
                existing,
                title=draft.title,
                rating=draft.rating,
                release_date=draft.release_date,
                updated_at=max(self._clock(), existing.created_at),
            )
            self._movies[movie_id] = updated
            return replace(updated)

    def delete_movie(self, movie_id: int) -> bool:
        with self._lock:
            return self._movies.pop(movie_id, None) is not None

    def ping(self) -> bool:
        return True
