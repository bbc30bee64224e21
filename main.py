import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import settings
from database import get_db, ping
from routes import router as transactions_router

logging.basicConfig(
    level=settings.log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Transactions Dashboard API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transactions_router)


# ---------- Routes ----------
@app.get("/")
def read_root():
    return {"message": "Transactions API running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "Running",
        "database": "Not Available",
        "database_url": "Set" if os.getenv("DATABASE_URL") or os.getenv("MONGO_URI") else "Not Set",
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": [],
    }

    try:
        info = ping(get_db())
    except Exception as e:
        logger.warning("database_ping_failed error=%s", e)
        response["database"] = f"Error: {str(e)[:50]}"
        return response

    response["database"] = "Connected & Working"
    response["database_name"] = info["database_name"]
    response["connection_status"] = "Connected"
    response["collections"] = info["collections"]
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port())
