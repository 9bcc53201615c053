import logging

from fastapi import HTTPException

SERVER_ERROR_MESSAGE = "Server error"


def server_error(logger: logging.Logger, action: str) -> HTTPException:
    # call from inside an except block so the traceback lands in the log
    logger.exception("❌ Failed to %s", action)
    return HTTPException(status_code=500, detail=SERVER_ERROR_MESSAGE)
