from fastapi import FastAPI

from goalpulse.goals.router import router as goals_router
from goalpulse.log import configure_logging

configure_logging()

app = FastAPI(title="GoalPulse", version="0.1.0")
app.include_router(goals_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "goals": {
            "progress": "/goals/progress",
            "progress_batch": "/goals/progress/batch",
            "range": "/goals/range",
            "period": "/goals/period?cadence={cadence}",
            "thresholds": "/goals/thresholds",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
