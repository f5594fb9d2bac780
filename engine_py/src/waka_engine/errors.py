# engine_py/src/waka_engine/errors.py

class GameError(Exception):
    """Base exception for session-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
SESSION_IN_PROGRESS = "SESSION_IN_PROGRESS"
ROOM_FULL = "ROOM_FULL"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
INVALID_EVENT = "INVALID_EVENT"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
