import os
from typing import Optional


class SessionContext:
    """Holds the bearer token for the current user.

    Created once and handed to the API client and cache. When ``token_path``
    is given the token survives restarts, the way the browser client keeps it
    in local storage.
    """

    def __init__(self, token_path: Optional[str] = None):
        self.token_path = token_path
        self.token: Optional[str] = None
        if token_path and os.path.exists(token_path):
            with open(token_path, encoding="utf-8") as fh:
                self.token = fh.read().strip() or None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def load(self, token: str):
        self.token = token
        if self.token_path:
            with open(self.token_path, "w", encoding="utf-8") as fh:
                fh.write(token)

    def clear(self):
        self.token = None
        if self.token_path and os.path.exists(self.token_path):
            os.remove(self.token_path)
