"""
Movie schemas and the payload validators used by the movie routes.

`validate_movie` checks a full movie for creation, `validate_partial_movie`
checks a PATCH body. Both return a ValidationResult instead of raising, so the
routes decide which status code a bad payload maps to.
"""

import json
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

MIN_YEAR = 1900
MAX_YEAR = 2100
DEFAULT_RATE = 5.0

_URL_ADAPTER = TypeAdapter(HttpUrl)


class Genre(str, Enum):
    ACTION = "Action"
    ADVENTURE = "Adventure"
    ANIMATION = "Animation"
    BIOGRAPHY = "Biography"
    COMEDY = "Comedy"
    CRIME = "Crime"
    DRAMA = "Drama"
    FANTASY = "Fantasy"
    HORROR = "Horror"
    SCI_FI = "Sci-Fi"
    THRILLER = "Thriller"


def _check_poster(v: str) -> str:
    try:
        _URL_ADAPTER.validate_python(v)
    except ValidationError:
        raise ValueError("Poster must be a valid URL")
    # keep the caller's string, HttpUrl would normalise it
    return v


def _check_distinct(v: List[Genre]) -> List[Genre]:
    if len(set(v)) != len(v):
        raise ValueError("Genres must not repeat")
    return v


Title = Annotated[str, Field(strict=True, min_length=1)]
Year = Annotated[int, Field(strict=True, ge=MIN_YEAR, le=MAX_YEAR)]
Director = Annotated[str, Field(strict=True)]
Duration = Annotated[int, Field(strict=True, gt=0)]
Rate = Annotated[float, Field(strict=True, ge=0, le=10)]
Poster = Annotated[str, Field(strict=True), AfterValidator(_check_poster)]
Genres = Annotated[List[Genre], Field(min_length=1), AfterValidator(_check_distinct)]


# FULL MOVIE CONTRACT (POST /movies)
class MovieCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Title
    year: Year
    director: Director
    duration: Duration
    rate: Rate = DEFAULT_RATE
    poster: Optional[Poster] = None
    genre: Genres


# PARTIAL MOVIE CONTRACT (PATCH /movies/{id})
class MoviePatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[Title] = None
    year: Optional[Year] = None
    director: Optional[Director] = None
    duration: Optional[Duration] = None
    rate: Optional[Rate] = None
    poster: Optional[Poster] = None
    genre: Optional[Genres] = None

    # Omitting a field means "no change"; an explicit null is not a value.
    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v


# STORED MOVIE (response shape)
class Movie(BaseModel):
    id: str
    title: str
    year: int
    director: str
    duration: int
    rate: float = DEFAULT_RATE
    poster: Optional[str] = None
    genre: List[str]


class ValidationResult(BaseModel):
    data: Optional[Dict[str, Any]] = None
    error: Optional[List[Dict[str, Any]]] = None

    @property
    def success(self) -> bool:
        return self.error is None


def _errors(exc: ValidationError) -> List[Dict[str, Any]]:
    # Round-trip through JSON so every entry (ctx included) is serialisable.
    return json.loads(exc.json(include_url=False))


def validate_movie(payload: Any) -> ValidationResult:
    """Validate a complete movie. Missing rate/poster fall back to defaults."""
    try:
        movie = MovieCreate.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(error=_errors(e))
    return ValidationResult(data=movie.model_dump(mode="json"))


def validate_partial_movie(payload: Any) -> ValidationResult:
    """Validate a partial movie. Only the fields actually sent are returned."""
    try:
        patch = MoviePatch.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(error=_errors(e))
    return ValidationResult(data=patch.model_dump(mode="json", exclude_unset=True))
