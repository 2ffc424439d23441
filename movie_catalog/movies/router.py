from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from typing import Any, List, Optional
from movie_catalog.movies import schemas
from movie_catalog.movies.utils import MovieStore

router = APIRouter(prefix="/movies", tags=["Movies"])


def get_store(request: Request) -> MovieStore:
    return request.app.state.store


@router.get("", response_model=List[schemas.Movie])
def list_movies(
    title: Optional[str] = Query(None, description="Case-insensitive fragment of the title"),
    genre: Optional[str] = Query(None, description="Genre name, case-insensitive"),
    store: MovieStore = Depends(get_store)
):
    """
    `title` wins when both filters are given.
    No filter → the whole catalog in insertion order.
    """
    if title:
        return store.find_by_title(title)
    if genre:
        return store.find_by_genre(genre)
    return store.list_all()


@router.get("/{movie_id}", response_model=schemas.Movie)
def get_movie(movie_id: str, store: MovieStore = Depends(get_store)):
    movie = store.find_by_id(movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.post("", response_model=schemas.Movie, status_code=status.HTTP_201_CREATED)
def create_movie(payload: Any = Body(...), store: MovieStore = Depends(get_store)):
    """Create a movie from a full, valid body. The id is assigned here."""
    result = schemas.validate_movie(payload)
    if not result.success:
        raise HTTPException(status_code=422, detail=result.error)
    return store.create(result.data)


@router.patch("/{movie_id}", response_model=schemas.Movie)
async def update_movie(movie_id: str, request: Request, store: MovieStore = Depends(get_store)):
    """
    Partial update. An unknown id is 404 whatever the body holds (even none);
    a bad or unparseable body on a known id is 400. Only the sent fields are checked.
    """
    if not store.find_by_id(movie_id):
        raise HTTPException(status_code=404, detail="Movie not found")

    # The body is read only after the lookup: an unknown id stays 404 even
    # when the body is missing or not JSON.
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail=[{
            "type": "json_invalid",
            "loc": ["body"],
            "msg": "Body must be valid JSON",
            "input": None,
        }])

    result = schemas.validate_partial_movie(payload)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)

    updated = store.patch_by_id(movie_id, result.data)
    if not updated:
        # deleted between the lookup and the merge
        raise HTTPException(status_code=404, detail="Movie not found")
    return updated


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_movie(movie_id: str, store: MovieStore = Depends(get_store)):
    deleted = store.delete_by_id(movie_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Movie not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
