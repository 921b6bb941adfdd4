"""Story CRUD + passage display + navigation endpoints."""

from fastapi import APIRouter, HTTPException

from twee_story.errors import MissingPassage, RenderError, StorySourceError

from backend import storage
from backend.play import StoryNotFound, choose_passage, show_passage

from .models import ChooseBody, CreateStory, ImportStory, ShowBody

router = APIRouter()


@router.get("/stories")
async def list_stories():
    """List preset and uploaded stories."""
    return storage.list_stories()


@router.post("/stories", status_code=201)
async def create_story(body: CreateStory):
    """Upload Twee source. Slug defaults to the slugified story title."""
    return storage.save_story(body.source, body.slug)


@router.post("/stories/import", status_code=201)
async def import_story(body: ImportStory):
    """Fetch Twee source from a URL and store it."""
    try:
        return await storage.import_story(body.url, body.slug)
    except StorySourceError as e:
        raise HTTPException(400, str(e))


@router.get("/stories/{slug}")
async def get_story(slug: str):
    """Get story title, start passage and passage names."""
    summary = storage.get_story_summary(slug)
    if not summary:
        raise HTTPException(404, "Story not found")
    return summary


@router.delete("/stories/{slug}")
async def delete_story(slug: str):
    """Delete an uploaded story."""
    if not storage.delete_story(slug):
        raise HTTPException(404, "Story not found")
    return {"ok": True}


@router.get("/stories/{slug}/passages/{name}")
async def get_passage(slug: str, name: str):
    """Get a raw passage record (text, script, div)."""
    document = storage.get_story(slug)
    if document is None:
        raise HTTPException(404, "Story not found")
    try:
        return document.get_passage(name)
    except MissingPassage:
        raise HTTPException(404, "Passage not found")


@router.post("/stories/{slug}/show")
async def show(slug: str, body: ShowBody):
    """Show a passage (start passage when omitted) and run its script."""
    try:
        return show_passage(slug, body.passage)
    except StoryNotFound:
        raise HTTPException(404, "Story not found")
    except MissingPassage:
        raise HTTPException(404, "Passage not found")
    except RenderError as e:
        raise HTTPException(400, str(e))


@router.post("/stories/{slug}/choose")
async def choose(slug: str, body: ChooseBody):
    """Follow a numbered choice from the given current passage."""
    try:
        return choose_passage(slug, body.current, body.choice)
    except StoryNotFound:
        raise HTTPException(404, "Story not found")
    except MissingPassage:
        raise HTTPException(404, "Passage not found")
    except IndexError as e:
        raise HTTPException(400, str(e))
    except RenderError as e:
        raise HTTPException(400, str(e))
