"""
utils.py – In-memory movie storage and the loader for the seed fixture.
"""

import os, json, uuid, copy, logging, threading
from typing import List, Dict, Optional, Iterable

logger = logging.getLogger(__name__)


def load_movies(path: str) -> List[Dict]:
    """Read the seed list of movies. A missing file means an empty catalog."""
    if not os.path.exists(path):
        logger.warning("Seed file %s not found, starting with no movies", path)
        return []
    with open(path, "r", encoding="utf-8") as f:
        movies = json.load(f)
    if not isinstance(movies, list):
        raise ValueError(f"Seed file {path} must contain a JSON array of movies")
    logger.info("Loaded %d movies from %s", len(movies), path)
    return movies


class MovieStore:
    """Ordered collection of movie records, oldest first.

    FastAPI runs sync routes on a thread pool, so every operation holds the
    store lock. Records handed out are copies.
    """

    def __init__(self, movies: Optional[Iterable[Dict]] = None):
        self._movies: List[Dict] = [copy.deepcopy(m) for m in (movies or [])]
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def _index_of(self, movie_id: str) -> int:
        for i, movie in enumerate(self._movies):
            if movie.get("id") == movie_id:
                return i
        return -1

    def list_all(self) -> List[Dict]:
        with self._lock:
            return [copy.deepcopy(m) for m in self._movies]

    def find_by_title(self, fragment: str) -> List[Dict]:
        """Case-insensitive substring match on the title."""
        needle = fragment.lower()
        with self._lock:
            return [copy.deepcopy(m) for m in self._movies if needle in m.get("title", "").lower()]

    def find_by_genre(self, name: str) -> List[Dict]:
        """Case-insensitive exact match against any of the movie's genres."""
        wanted = name.lower()
        with self._lock:
            return [
                copy.deepcopy(m) for m in self._movies
                if any(g.lower() == wanted for g in m.get("genre", []))
            ]

    def find_by_id(self, movie_id: str) -> Optional[Dict]:
        with self._lock:
            i = self._index_of(movie_id)
            return copy.deepcopy(self._movies[i]) if i != -1 else None

    def create(self, fields: Dict) -> Dict:
        """Store a validated movie under a fresh id and return it."""
        new_movie = {"id": str(uuid.uuid4()), **copy.deepcopy(fields)}
        with self._lock:
            self._movies.append(new_movie)
        logger.info("Created movie %s", new_movie["id"])
        return copy.deepcopy(new_movie)

    def patch_by_id(self, movie_id: str, fields: Dict) -> Optional[Dict]:
        """Shallow-merge `fields` over the stored movie. The id never changes."""
        with self._lock:
            i = self._index_of(movie_id)
            if i == -1:
                return None
            updated = {**self._movies[i], **copy.deepcopy(fields), "id": self._movies[i]["id"]}
            self._movies[i] = updated
        logger.info("Updated movie %s (%s)", movie_id, ", ".join(sorted(fields)) or "no fields")
        return copy.deepcopy(updated)

    def delete_by_id(self, movie_id: str) -> bool:
        with self._lock:
            i = self._index_of(movie_id)
            if i == -1:
                return False
            del self._movies[i]
        logger.info("Deleted movie %s", movie_id)
        return True
