"""Tests for plugin registry."""

from typing import ClassVar
import pytest

from src.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from src.engine.protocol import GamePlugin
from src.engine.registry import PluginRegistry, create_default_registry
from src.engine.validation import validate_plugin
from src.games.hex_zoc.plugin import HexZocPlugin


class MockPlugin:
    """Mock game plugin for testing."""

    game_id: ClassVar[str] = "mock-game"
    display_name: ClassVar[str] = "Mock Game"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 4
    description: ClassVar[str] = "A mock game for testing"
    config_schema: ClassVar[dict] = {}

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        game_data = {"turn": 0}
        phase = Phase(
            name="play",
            expected_actions=[
                {"player_id": players[0].player_id, "action_type": "play"}
            ],
        )
        return game_data, phase, [Event(event_type="game_started")]

    def validate_config(self, options: dict) -> list[str]:
        return []

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        return [{"type": "play"}]

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        new_data = game_data.copy()
        new_data["turn"] = game_data.get("turn", 0) + 1
        return TransitionResult(
            game_data=new_data,
            events=[Event(event_type="action_applied")],
            next_phase=phase,
        )

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        return {"turn": game_data["turn"]}

    def get_spectator_summary(
        self,
        game_data: dict,
        phase: Phase,
        players: list[Player],
    ) -> dict:
        return {"summary": "game in progress"}


class TestPluginRegistry:
    """Tests for PluginRegistry."""

    def test_register_and_get(self):
        registry = PluginRegistry()
        plugin = MockPlugin()

        registry.register(plugin)

        assert registry.get("mock-game") is plugin

    def test_register_duplicate_raises_error(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())

        with pytest.raises(ValueError, match="already registered"):
            registry.register(MockPlugin())

    def test_get_nonexistent_plugin_raises_error(self):
        registry = PluginRegistry()

        with pytest.raises(KeyError, match="Unknown game"):
            registry.get("nonexistent-game")

    def test_list_games_empty(self):
        assert PluginRegistry().list_games() == []

    def test_list_games(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())

        games = registry.list_games()

        assert games == [
            {
                "game_id": "mock-game",
                "display_name": "Mock Game",
                "min_players": 2,
                "max_players": 4,
                "description": "A mock game for testing",
            }
        ]

    def test_default_registry_contains_hex_zoc(self):
        registry = create_default_registry()

        plugin = registry.get("hex_zoc")

        assert isinstance(plugin, HexZocPlugin)
        assert [g["game_id"] for g in registry.list_games()] == ["hex_zoc"]


class TestValidatePlugin:
    """Tests for validate_plugin function."""

    def test_validate_valid_plugin(self):
        assert validate_plugin(MockPlugin()) == []

    def test_validate_hex_zoc_plugin(self):
        assert validate_plugin(HexZocPlugin()) == []

    def test_validate_missing_attributes(self):
        class InvalidPlugin:
            pass

        errors = validate_plugin(InvalidPlugin())

        assert any("Missing attribute: game_id" in e for e in errors)
        assert any("Missing attribute: max_players" in e for e in errors)

    def test_validate_player_bounds(self):
        class BackwardsPlugin(MockPlugin):
            min_players: ClassVar[int] = 3
            max_players: ClassVar[int] = 2

        errors = validate_plugin(BackwardsPlugin())

        assert any("min_players is greater than max_players" in e for e in errors)

    def test_validate_default_options_rejected(self):
        class PickyPlugin(MockPlugin):
            def validate_config(self, options: dict) -> list[str]:
                return ["size is required"]

        errors = validate_plugin(PickyPlugin())

        assert any("size is required" in e for e in errors)

    def test_validate_first_phase_no_actions_or_auto_resolve(self):
        class BadPhasePlugin(MockPlugin):
            def create_initial_state(
                self, players: list[Player], config: GameConfig
            ) -> tuple[dict, Phase, list[Event]]:
                return {"turn": 0}, Phase(name="bad_phase", auto_resolve=False), []

        errors = validate_plugin(BadPhasePlugin())

        assert any("not auto_resolve but has no expected_actions" in e for e in errors)

    def test_validate_determinism(self):
        class NonDeterministicPlugin(MockPlugin):
            _call_count = 0

            def create_initial_state(
                self, players: list[Player], config: GameConfig
            ) -> tuple[dict, Phase, list[Event]]:
                self._call_count += 1
                game_data, phase, events = super().create_initial_state(players, config)
                game_data["turn"] = self._call_count
                return game_data, phase, events

        errors = validate_plugin(NonDeterministicPlugin())

        assert any("not deterministic" in e for e in errors)

    def test_validate_create_initial_state_exception(self):
        class CrashingPlugin(MockPlugin):
            def create_initial_state(
                self, players: list[Player], config: GameConfig
            ) -> tuple[dict, Phase, list[Event]]:
                raise RuntimeError("Intentional crash")

        errors = validate_plugin(CrashingPlugin())

        assert any("create_initial_state failed" in e for e in errors)
        assert any("Intentional crash" in e for e in errors)

    def test_plugin_protocol_compliance(self):
        assert isinstance(MockPlugin(), GamePlugin)
        assert isinstance(HexZocPlugin(), GamePlugin)
