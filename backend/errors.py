from fastapi import HTTPException, status


class BadRequest(HTTPException):
    """Malformed request input. Answered with 400 and never reported to Sentry."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
