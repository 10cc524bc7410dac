"""FastAPI application - serves the rate engine API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dancerate.api.rate import router as rate_router

app = FastAPI(title="Dancerate", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(rate_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    from dancerate.config import settings
    uvicorn.run(
        "dancerate.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
