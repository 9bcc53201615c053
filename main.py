import logging

import uvicorn

from bigjohn.config import Settings
from bigjohn.main import create_app

settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# ✅ uvicorn main:app
app = create_app(settings)

if __name__ == "__main__":
    port = settings.port
    logger.info("🚀 API listening on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
