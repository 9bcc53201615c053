import logging

import uvicorn

from bigjohn.config import Settings
from bigjohn.web.app import create_web_app

settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# ✅ uvicorn web_client:app --port 3000
app = create_web_app(settings)

if __name__ == "__main__":
    port = settings.web_port
    logger.info("🚀 Site listening on port %d, API at %s", port, settings.backend_url)
    uvicorn.run(app, host="0.0.0.0", port=port)
