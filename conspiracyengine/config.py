from __future__ import annotations

from dataclasses import dataclass

# Illuminati ascension
PRESTIGE_THRESHOLD = 1e12
TOKEN_SCALING = 1e11
TOKEN_POWER = 0.6

# Matrix break
MATRIX_ASCENSION_REQUIREMENT = 5
MATRIX_TOKEN_REQUIREMENT = 100
GLITCH_TOKEN_SCALING = 10

DAILY_CHALLENGE_COUNT = 3
SAVE_SLOTS = (1, 2, 3)


@dataclass
class EngineConfig:
    """Tunable engine behaviour. Content balance lives in the catalog."""

    name: str = "Conspiracy Clicker"
    tick_interval: float = 1.0

    base_click_power: float = 1.0
    eps_fraction_per_click: float = 0.01

    combo_fill_per_click: float = 0.08
    combo_decay_per_second: float = 0.15
    combo_idle_grace_seconds: float = 0.5
    combo_reset_seconds: float = 2.0
    combo_burst_clicks: int = 10
    combo_burst_eps_seconds: float = 10.0

    crit_multiplier_min: float = 5.0
    crit_multiplier_max: float = 10.0

    golden_eye_factor: float = 5.0
    golden_eye_duration: float = 10.0
    golden_eye_spawn_chance: float = 0.001

    quest_success_cap: float = 0.95

    offline_cap_seconds: float | None = None
    offline_rate: float = 1.0

    max_auto_click_rate: float = 50.0

    # Raise on broken invariants instead of clamping them.
    strict_invariants: bool = False

    def validate(self) -> list[str]:
        """Check for inconsistent settings. Returns list of error messages."""
        errors: list[str] = []
        if self.tick_interval <= 0:
            errors.append(f"tick_interval must be positive, got {self.tick_interval}")
        if self.base_click_power < 0:
            errors.append("base_click_power must be non-negative")
        if not 0.0 < self.combo_fill_per_click <= 1.0:
            errors.append("combo_fill_per_click must be in (0, 1]")
        if self.crit_multiplier_min > self.crit_multiplier_max:
            errors.append(
                f"crit_multiplier_min ({self.crit_multiplier_min}) exceeds "
                f"crit_multiplier_max ({self.crit_multiplier_max})"
            )
        if not 0.0 <= self.quest_success_cap <= 1.0:
            errors.append("quest_success_cap must be in [0, 1]")
        if self.offline_cap_seconds is not None and self.offline_cap_seconds < 0:
            errors.append("offline_cap_seconds must be non-negative or None")
        if self.offline_rate < 0:
            errors.append("offline_rate must be non-negative")
        if self.golden_eye_factor < 1.0:
            errors.append("golden_eye_factor must be at least 1")
        return errors
