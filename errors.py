"""
errors.py — HTTP error taxonomy for mediashelf.

Route handlers raise these; app.py turns them into a small JSON body
(`{"error": "..."}`) with the matching status code. Messages are fixed
strings so no filesystem error text ever reaches the client.
"""


class HttpError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        return {"error": self.message}


class BadRequest(HttpError):
    status_code = 400
    message = "Bad Request"


class NotFound(HttpError):
    status_code = 404
    message = "Not Found"


class InternalServerError(HttpError):
    pass
