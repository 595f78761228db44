from __future__ import annotations

from src.engine.models import Action


class GameEngineError(Exception):
    """Base class for engine errors.

    ``code`` is a stable tag a host can switch on without parsing messages.
    """

    code: str = "engine_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidActionError(GameEngineError):
    """Action is not valid in current state."""

    code = "invalid_action"

    def __init__(self, message: str, action: Action | None = None):
        super().__init__(message)
        self.action = action


class GameNotActiveError(GameEngineError):
    """Action submitted to a game that has already finished."""

    code = "game_not_active"


class NotYourTurnError(GameEngineError):
    code = "not_your_turn"


class PluginError(GameEngineError):
    """Game plugin raised an unexpected error."""

    code = "plugin_error"

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original
