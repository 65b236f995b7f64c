from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pixcode.core.config import settings
from pixcode.routes import (
    health,
    pix,
)

app = FastAPI(title="pixcode Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(health.router, prefix=settings.API_V1_STR)
app.include_router(pix.router, prefix=settings.API_V1_STR)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
