from fastapi import FastAPI, HTTPException
from fastapi.staticfiles import StaticFiles
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.buckler import BucklerError, BucklerScraper, Settings, rank_matchups

logging.basicConfig(
    level=os.environ.get("BUCKLER_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("buckler.web")

app = FastAPI(title="SF6 Character Tracker")
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

character_images_dir = os.path.join(project_root, "web", "static", "characters")
if os.path.isdir(character_images_dir):
    app.mount("/characters", StaticFiles(directory=character_images_dir), name="characters")
    logger.info("Serving character icons from %s", character_images_dir)
else:
    logger.warning("No character icon folder at %s", character_images_dir)

settings = Settings.from_env()
scraper = BucklerScraper(settings)


def _http_error(exc: BucklerError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=str(exc))


@app.get("/api/stats")
def character_stats(userCode: str = "") -> dict:
    try:
        rows, source = scraper.load_character_stats(userCode)
    except BucklerError as e:
        raise _http_error(e)
    return {"source": source, "data": [row.to_dict() for row in rows]}


@app.get("/api/matchups")
def matchups(userCode: str = "", character: str = "") -> dict:
    try:
        records = scraper.fetch_matchup_breakdown(userCode, character)
    except BucklerError as e:
        raise _http_error(e)
    best, worst = rank_matchups(records)
    return {
        "data": [r.to_dict() for r in records],
        "best": [r.to_dict() for r in best],
        "worst": [r.to_dict() for r in worst],
    }


@app.get("/api/search-id")
def search_id(name: str = "") -> dict:
    try:
        players = scraper.search_players_by_name(name)
    except BucklerError as e:
        raise _http_error(e)
    if not players:
        raise HTTPException(status_code=404, detail=f"No player found for '{name}'")
    return {
        "players": [p.to_dict() for p in players],
        "userCode": players[0].user_code,
    }
