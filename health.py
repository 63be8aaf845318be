import os

import uvicorn
from fastapi import FastAPI

from api_draft import router as draft_router
from api_keepers import router as keepers_router
from league_config import load_league_settings

# ---- FastAPI Web Server ----
app = FastAPI(title="Keeper League API")
app.include_router(keepers_router)
app.include_router(draft_router)


@app.get("/")
def health():
    settings = load_league_settings()
    return {"status": "ok", "season": settings.season, "teams": len(settings.teams)}


def run_server():
    config = uvicorn.Config(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
    server = uvicorn.Server(config)
    return server.serve()


if __name__ == "__main__":
    import asyncio

    asyncio.run(run_server())
