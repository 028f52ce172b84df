"""FastAPI application entry point."""
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from traffic_ops_api.core.config import settings
from traffic_ops_api.api import auth, deliveryservice_request_comments

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Traffic Ops API", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(deliveryservice_request_comments.router,
                   tags=["deliveryservice-request-comments"])


@app.get("/")
def read_root():
    return {"message": "Traffic Ops API"}


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT,
                log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
