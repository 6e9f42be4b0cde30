from __future__ import annotations

from dataclasses import dataclass, field

from dustsweeper.achievement import (
    AchievementDef,
    DustReward,
    MultiplierReward,
    PrestigeReward,
)
from dustsweeper.prestige import PrestigeUpgradeDef, UpgradeFamily
from dustsweeper.requirement import Req
from dustsweeper.tool import ToolDef, ToolKind
from dustsweeper.zone import ZoneDef


@dataclass
class GameConfig:
    """Top-level game configuration and balance constants."""

    name: str = "Galactic Dust Sweeper"
    tick_interval: float = 0.25
    save_key: str = "gds_save"
    max_offline_seconds: float = 12 * 60 * 60
    tool_cost_growth: float = 1.18
    upgrade_bonus_per_level: float = 0.12
    upgrade_cost_factor: float = 0.6
    prestige_runway: float = 50_000
    prestige_divisor: float = 150_000
    prestige_exponent: float = 0.7
    prestige_points_per_title: int = 10


@dataclass
class Catalog:
    """Complete static definition of the game."""

    config: GameConfig = field(default_factory=GameConfig)
    zones: list[ZoneDef] = field(default_factory=list)
    tools: list[ToolDef] = field(default_factory=list)
    prestige_upgrades: list[PrestigeUpgradeDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)
    prestige_titles: list[str] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _tools_by_id: dict[str, ToolDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _prestige_by_id: dict[str, PrestigeUpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._tools_by_id = {t.id: t for t in self.tools}
        self._prestige_by_id = {p.id: p for p in self.prestige_upgrades}
        self._achievements_by_id = {a.id: a for a in self.achievements}

    def get_tool(self, id: str) -> ToolDef | None:
        return self._tools_by_id.get(id)

    def get_prestige_upgrade(self, id: str) -> PrestigeUpgradeDef | None:
        return self._prestige_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def get_zone(self, index: int) -> ZoneDef | None:
        if 0 <= index < len(self.zones):
            return self.zones[index]
        return None

    def family(self, family: UpgradeFamily) -> list[PrestigeUpgradeDef]:
        return [p for p in self.prestige_upgrades if p.family is family]

    def validate(self) -> list[str]:
        """Check for common catalog errors. Returns list of error messages."""
        errors: list[str] = []

        if not self.zones:
            errors.append("Catalog needs at least one zone")

        for label, ids in (
            ("tool", [t.id for t in self.tools]),
            ("prestige upgrade", [p.id for p in self.prestige_upgrades]),
            ("achievement", [a.id for a in self.achievements]),
        ):
            seen: set[str] = set()
            for id in ids:
                if id in seen:
                    errors.append(f"Duplicate {label} ID: {id!r}")
                seen.add(id)

        for t in self.tools:
            if not 0 <= t.currency_zone < len(self.zones):
                errors.append(f"Tool {t.id!r} references unknown zone {t.currency_zone}")
            if t.base_cost <= 0:
                errors.append(f"Tool {t.id!r} has non-positive base cost")

        for p in self.prestige_upgrades:
            if p.cost <= 0:
                errors.append(f"Prestige upgrade {p.id!r} has non-positive cost")
            if not isinstance(p.family, UpgradeFamily):
                errors.append(f"Prestige upgrade {p.id!r} has unknown family {p.family!r}")

        for a in self.achievements:
            if a.trigger is None:
                errors.append(f"Achievement {a.id!r} has no trigger")

        return errors


# ── Galactic Dust Sweeper data ───────────────────────────────────────

_ZONES = [
    ZoneDef("Planet A", 0, 0.0, "Dust"),
    ZoneDef("Asteroid Belt", 1000, 0.05, "Astro Dust"),
    ZoneDef("Moon Outpost", 5000, 0.1, "Lunar Dust"),
    ZoneDef("Red Dunes", 20000, 0.18, "Dune Dust"),
    ZoneDef("Crystal Nebula", 80000, 0.3, "Nebula Dust"),
    ZoneDef("Starlit Reef", 160000, 0.36, "Starlight Dust"),
    ZoneDef("Void Rift", 320000, 0.44, "Void Dust"),
    ZoneDef("Aurora Spire", 640000, 0.52, "Aurora Dust"),
]

_C, _P, _A = ToolKind.CLICK, ToolKind.PASSIVE, ToolKind.AUTO_CLICK

# (id, label, cost, increment, kind, zone)
_TOOLS = [
    ("basic", "Basic Sweeper", 20, 1, _C, 0),
    ("laser", "Laser Sweeper", 200, 5, _C, 0),
    ("autoClicker", "Auto Clicker", 100, 1, _A, 0),
    ("superVac", "Super Vac", 500, 10, _C, 0),
    ("magnet", "Magnetic Net", 1200, 25, _C, 0),
    ("autoDrone", "Auto Drone", 3500, 50, _A, 0),
    ("solarArray", "Solar Array", 9000, 150, _P, 1),
    ("quantumNet", "Quantum Net", 25000, 500, _C, 1),
    ("ionScoop", "Ion Scoop", 40000, 800, _C, 1),
    ("nebulaHarvester", "Nebula Harvester", 60000, 400, _P, 2),
    ("warpCollector", "Warp Collector", 85000, 120, _A, 2),
    ("darkMatter", "Dark Matter Siphon", 120000, 1200, _P, 2),
    ("stellarBroom", "Stellar Broom", 180000, 2000, _C, 3),
    ("plasmaRake", "Plasma Rake", 240000, 2800, _C, 3),
    ("gravityWell", "Gravity Well", 320000, 3600, _P, 3),
    ("chronoClicker", "Chrono Clicker", 450000, 500, _A, 3),
    ("photonArray", "Photon Array", 600000, 5200, _P, 4),
    ("antimatterMesh", "Antimatter Mesh", 800000, 7200, _C, 4),
    ("singularityNet", "Singularity Net", 1050000, 9500, _C, 4),
    ("quantumVacuum", "Quantum Vacuum", 1400000, 900, _A, 4),
    ("starForge", "Star Forge", 1800000, 12000, _P, 4),
    ("riftEngine", "Rift Engine", 2300000, 15000, _C, 4),
    ("alienConsortium", "Alien Consortium", 3000000, 18000, _P, 4),
    ("cosmicOverseer", "Cosmic Overseer", 3800000, 1400, _A, 4),
    ("starlitSail", "Starlit Sail", 5200000, 21000, _P, 5),
    ("nebulaCycler", "Nebula Cycler", 7600000, 26000, _A, 5),
    ("voidHarvester", "Void Harvester", 10500000, 32000, _C, 6),
    ("riftExcavator", "Rift Excavator", 14500000, 42000, _P, 6),
    ("auroraWeaver", "Aurora Weaver", 19000000, 52000, _P, 7),
    ("stellarEmpress", "Stellar Empress", 25000000, 68000, _A, 7),
]

_F = UpgradeFamily

_PRESTIGE_UPGRADES = [
    PrestigeUpgradeDef("clickBoost", "Galactic Focus", 3, 0.15, _F.CLICK, "+15% dust per click per level"),
    PrestigeUpgradeDef("passiveBoost", "Fleet Logistics", 4, 0.12, _F.PASSIVE, "+12% passive/sec per level"),
    PrestigeUpgradeDef("autoBoost", "Automation Mesh", 4, 0.12, _F.AUTO, "+12% auto clicks/sec per level"),
    PrestigeUpgradeDef("zoneBonus", "Zonal Synergy", 5, 0.08, _F.ZONE, "+8% zone bonus per level"),
    PrestigeUpgradeDef("globalBoost", "Continuum Surge", 6, 0.1, _F.GLOBAL, "+10% all gains per level"),
    PrestigeUpgradeDef("prestigeYield", "Ascendant Yield", 7, 0.12, _F.YIELD, "+12% prestige gain per level"),
    PrestigeUpgradeDef("tapSurge", "Tap Surge", 5, 0.18, _F.CLICK, "+18% dust per click per level"),
    PrestigeUpgradeDef("tempoFlux", "Tempo Flux", 5, 0.15, _F.PASSIVE, "+15% passive/sec per level"),
    PrestigeUpgradeDef("swarmOverclock", "Swarm Overclock", 5, 0.14, _F.AUTO, "+14% auto clicks/sec per level"),
    PrestigeUpgradeDef("macroEconomy", "Macro Economy", 6, 0.08, _F.GLOBAL, "+8% all gains per level"),
    PrestigeUpgradeDef("windfall", "Windfall", 7, 0.14, _F.YIELD, "+14% prestige gain per level"),
    PrestigeUpgradeDef("cartography", "Zonal Cartography", 4, 0.12, _F.ZONE, "+12% zone bonus per level"),
]

_PRESTIGE_TITLES = [
    "Initiate Sweeper",
    "Stellar Custodian",
    "Asteroid Keeper",
    "Nebula Warden",
    "Void Navigator",
    "Aurora Marshal",
    "Galactic Overwatch",
    "Cosmic Regent",
    "Eclipse Archon",
    "Starlight Sovereign",
    "Celestial Empress",
]


def _achievements(zone_count: int) -> list[AchievementDef]:
    return [
        AchievementDef("first_dust", "First Sweep", "Collect your first dust.",
                       Req.total_earned(">=", 1), DustReward(50)),
        AchievementDef("hundred_dust", "Collector", "Gather 100 dust.",
                       Req.total_earned(">=", 100), MultiplierReward(0.02)),
        AchievementDef("thousand_dust", "Hoarder", "Gather 1,000 dust.",
                       Req.total_earned(">=", 1000), MultiplierReward(0.05)),
        AchievementDef("ten_k", "Dust Tyro", "Gather 10,000 dust.",
                       Req.total_earned(">=", 10_000), MultiplierReward(0.08)),
        AchievementDef("fifty_k", "Dust Adept", "Gather 50,000 dust.",
                       Req.total_earned(">=", 50_000), MultiplierReward(0.12)),
        AchievementDef("quarter_mil", "Dust Artisan", "Gather 250,000 dust.",
                       Req.total_earned(">=", 250_000), DustReward(5000)),
        AchievementDef("click_novice", "Click Novice", "Click 50 times.",
                       Req.clicks(">=", 50), DustReward(250)),
        AchievementDef("click_pro", "Click Pro", "Click 1,000 times.",
                       Req.clicks(">=", 1000), MultiplierReward(0.06)),
        AchievementDef("click_legend", "Click Legend", "Click 10,000 times.",
                       Req.clicks(">=", 10_000), PrestigeReward(2)),
        AchievementDef("first_tool", "Investor", "Buy any tool.",
                       Req.owns_any_tool(), DustReward(500)),
        AchievementDef("toolmaster", "Fleet Builder", "Reach 20 total tool levels.",
                       Req.tool_levels(">=", 20), MultiplierReward(0.1)),
        AchievementDef("tool_captain", "Fleet Commander", "Reach 75 total tool levels.",
                       Req.tool_levels(">=", 75), MultiplierReward(0.12)),
        AchievementDef("tool_legend", "Armada Architect", "Reach 150 total tool levels.",
                       Req.tool_levels(">=", 150), PrestigeReward(4)),
        AchievementDef("passive_flow", "Passive Flow", "Reach 1,000 dust/sec.",
                       Req.per_second(">=", 1000), PrestigeReward(1)),
        AchievementDef("passive_torrent", "Nebula Torrent", "Reach 10,000 dust/sec.",
                       Req.per_second(">=", 10_000), MultiplierReward(0.18)),
        AchievementDef("auto_ace", "Auto Ace", "Reach 250 auto clicks/sec.",
                       Req.auto_clicks(">=", 250), MultiplierReward(0.1)),
        AchievementDef("auto_overdrive", "Auto Overdrive", "Reach 1,000 auto clicks/sec.",
                       Req.auto_clicks(">=", 1000), MultiplierReward(0.14)),
        AchievementDef("prestige_once", "Begin Again", "Prestige once.",
                       Req.prestige(">", 0), MultiplierReward(0.15)),
        AchievementDef("prestige_five", "Reborn x5", "Prestige five times.",
                       Req.prestige(">=", 5), PrestigeReward(2)),
        AchievementDef("prestige_ten", "Reborn x10", "Prestige ten times.",
                       Req.prestige(">=", 10), PrestigeReward(3)),
        AchievementDef("prestige_twentyfive", "Reborn x25", "Prestige twenty-five times.",
                       Req.prestige(">=", 25), MultiplierReward(0.2)),
        AchievementDef("zone_explorer", "Dune Ranger", "Unlock the Red Dunes (Zone 3).",
                       Req.zone(">=", 3), MultiplierReward(0.1)),
        AchievementDef("zone_voyager", "Aurora Voyager", "Reach the Aurora Spire (final zone).",
                       Req.zone(">=", zone_count - 1), PrestigeReward(3)),
        AchievementDef("lifetime_million", "Stellar Earner", "Reach 1,000,000 lifetime dust.",
                       Req.lifetime(">=", 1_000_000), MultiplierReward(0.18)),
        AchievementDef("lifetime_ten_million", "Stellar Tycoon", "Reach 10,000,000 lifetime dust.",
                       Req.lifetime(">=", 10_000_000), MultiplierReward(0.22)),
        AchievementDef("lifetime_billion", "Cosmic Magnate", "Reach 1,000,000,000 lifetime dust.",
                       Req.lifetime(">=", 1_000_000_000), PrestigeReward(5)),
        AchievementDef("lifetime_ten_billion", "Cosmic Baron", "Reach 10,000,000,000 lifetime dust.",
                       Req.lifetime(">=", 10_000_000_000), PrestigeReward(8)),
    ]


def default_catalog(config: GameConfig | None = None) -> Catalog:
    """The shipped Galactic Dust Sweeper catalog."""
    return Catalog(
        config=config or GameConfig(),
        zones=list(_ZONES),
        tools=[
            ToolDef(id, label, float(cost), float(inc), kind, zone)
            for id, label, cost, inc, kind, zone in _TOOLS
        ],
        prestige_upgrades=list(_PRESTIGE_UPGRADES),
        achievements=_achievements(len(_ZONES)),
        prestige_titles=list(_PRESTIGE_TITLES),
    )
