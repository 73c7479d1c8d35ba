"""
Carbon Ledger Engine — FastAPI Application Entry Point.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carbon_ledger import config
from carbon_ledger.api.routes import router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)

app = FastAPI(
    title=config.SERVICE_NAME,
    description=(
        "Deterministic engines over an MSME compliance ledger snapshot: "
        "climate credibility score, India + global framework labels, "
        "GSTIN invoice matching, and spreadsheet / government-format exports."
    ),
    version=config.SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/", tags=["Root"])
async def root():
    return {
        "service": config.SERVICE_NAME,
        "version": config.SERVICE_VERSION,
        "docs": "/docs",
        "health": f"{config.API_PREFIX}/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("carbon_ledger.main:app", host="0.0.0.0", port=8000, reload=True)
