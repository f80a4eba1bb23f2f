"""
FastAPI application entry point.

Assembles the FastAPI app with the orchestrator router.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketing_agents.workflows.orchestrator_api import router as orchestrator_router


# ============================================================================
# Logging configuration (single source of truth for all components)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)


app = FastAPI(
    title="Marketing Agents",
    description="Multi-agent marketing analysis workflows",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(orchestrator_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Marketing Agents",
        "version": "0.1.0",
        "workflows": [
            "strategic-analysis",
            "content-generation",
            "competitor-intelligence",
            "quick-analysis",
            "custom-pipeline",
            "agent-routing",
        ],
        "endpoints": "/api/orchestrator",
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
