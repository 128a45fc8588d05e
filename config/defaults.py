from config.schema import (
    EngineConfig,
    SearchConfig,
    TimeGridConfig,
    VariantRule,
)


# Varianten für nicht gepinnte Sections:
#   +1 Tag, gleiche Startzeit
#   +2 Tage, 09:00
#   +3 Tage, 14:00
DEFAULT_VARIANT_RULES = [
    VariantRule(day_shift=1, start_time=None),
    VariantRule(day_shift=2, start_time="09:00"),
    VariantRule(day_shift=3, start_time="14:00"),
]


def default_time_grid() -> TimeGridConfig:
    """Arbeitstag Mo–Fr ab 08:00."""
    return TimeGridConfig(
        day_start="08:00",
        day_names=["Mo", "Di", "Mi", "Do", "Fr"],
    )


def default_search() -> SearchConfig:
    """Standard-Grenzen: 60 Sections, 8! aufgezählte Anordnungen."""
    return SearchConfig(
        max_sections=60,
        max_frontiers=40320,
        variant_rules=[rule.model_copy() for rule in DEFAULT_VARIANT_RULES],
    )


def default_engine_config() -> EngineConfig:
    return EngineConfig(
        time_grid=default_time_grid(),
        search=default_search(),
    )
