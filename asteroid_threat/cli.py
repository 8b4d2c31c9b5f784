# asteroid_threat/cli.py
from asteroid_threat.config.settings import (
    DEFAULT_DISTANCE_TO_SHORE_KM,
    DEFAULT_IMPACT_ANGLE_DEG,
    DEFAULT_INFRASTRUCTURE,
    DEFAULT_POPULATION_DENSITY,
    INFRASTRUCTURE_DENSITY_MUSD,
    clamp_impact_angle,
)
from asteroid_threat.models.asteroid import ImpactContext, ImpactLocation, TerrainType

DEFAULT_BUDGET_MUSD = 5000.0
DEFAULT_HORIZON_YEARS = 10.0
DEFAULT_OCEAN_DEPTH_M = 4000.0


def _ask(prompt, default=""):
    """input() that returns default on EOF (non-interactive runs)."""
    try:
        return input(prompt)
    except EOFError:
        return default


def get_float(prompt, default=None, min_val=None):
    """
    Safe float input with optional default. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return float(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return float(default)
        try:
            val = float(user)
            if min_val is not None and val < min_val:
                raise ValueError
            return val
        except (ValueError, TypeError):
            print("Please enter a valid number.")


def get_choice(prompt, choices, default):
    """Pick one of `choices` by name or 1-based index. EOF / Enter returns default."""
    choices = list(choices)
    while True:
        user = _ask(prompt).strip().lower()
        if user == "":
            return default
        if user in choices:
            return user
        if user.isdigit() and 1 <= int(user) <= len(choices):
            return choices[int(user) - 1]
        print(f"Choose one of: {', '.join(choices)}")


def ask_records_path():
    path = _ask("\nNEO records JSON file (Enter for built-in demo set): ").strip()
    return path or None


def ask_impact_context():
    print("\nImpact Site")

    terrain = get_choice(
        f"Terrain ({', '.join(t.value for t in TerrainType)}) [default land]: ",
        [t.value for t in TerrainType],
        TerrainType.LAND.value,
    )
    angle = clamp_impact_angle(get_float(
        f"Impact angle in degrees [default {DEFAULT_IMPACT_ANGLE_DEG:.0f}]: ",
        default=DEFAULT_IMPACT_ANGLE_DEG,
    ))

    water_depth = 0.0
    if terrain == TerrainType.OCEAN.value:
        water_depth = get_float(
            f"Water depth (m) [default {DEFAULT_OCEAN_DEPTH_M:.0f}]: ",
            default=DEFAULT_OCEAN_DEPTH_M, min_val=0.0,
        )

    density = get_float(
        f"Population density (people/km^2) [default {DEFAULT_POPULATION_DENSITY:.0f}]: ",
        default=DEFAULT_POPULATION_DENSITY, min_val=0.0,
    )
    shore = get_float(
        f"Distance to shore (km) [default {DEFAULT_DISTANCE_TO_SHORE_KM:.0f}]: ",
        default=DEFAULT_DISTANCE_TO_SHORE_KM, min_val=0.0,
    )
    infrastructure = get_choice(
        f"Infrastructure ({', '.join(INFRASTRUCTURE_DENSITY_MUSD)}) [default {DEFAULT_INFRASTRUCTURE}]: ",
        INFRASTRUCTURE_DENSITY_MUSD.keys(),
        DEFAULT_INFRASTRUCTURE,
    )

    return ImpactContext(
        terrain_type=terrain,
        impact_angle=angle,
        water_depth=water_depth,
        location=ImpactLocation(
            population_density=density,
            distance_to_shore=shore,
            infrastructure=infrastructure,
        ),
    )


def run_cli():
    print("======================================")
    print("   ASTEROID THREAT ASSESSMENT (CLI)   ")
    print("======================================")

    records_path = ask_records_path()
    context = ask_impact_context()

    print("\nDefense Planning")
    budget = get_float(f"Budget in $M [default {DEFAULT_BUDGET_MUSD:.0f}]: ", default=DEFAULT_BUDGET_MUSD)
    horizon = get_float(
        f"Years until impact [default {DEFAULT_HORIZON_YEARS:.0f}]: ",
        default=DEFAULT_HORIZON_YEARS, min_val=0.0,
    )

    print("\nCLI input complete.")
    print(f"-> Site: {context.terrain_type}, {context.impact_angle:.0f} deg")
    print(f"-> Budget ${budget:.0f}M over {horizon:g} years")

    return records_path, context, float(budget), float(horizon)
