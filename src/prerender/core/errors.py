"""
Error kinds surfaced by the render path.
Converted to JSON only at the HTTP boundary (see api/app.py).
"""


class PrerenderError(Exception):
    kind = "PrerenderError"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(PrerenderError):
    """Missing or unparseable URL; raised before any cache lookup or render."""

    kind = "InvalidInput"
    status_code = 400


class RenderFailed(PrerenderError):
    """The renderer could not produce markup (timeout, crash, navigation error)."""

    kind = "RenderFailed"
    status_code = 500
