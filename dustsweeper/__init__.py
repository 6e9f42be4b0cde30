# dustsweeper: Galactic Dust Sweeper economy engine & balance simulation

from dustsweeper._types import compare
from dustsweeper.errors import DustSweeperError, InsufficientFunds, PersistenceFailure
from dustsweeper.requirement import Requirement, Req
from dustsweeper.cost_scaling import CostScaling
from dustsweeper.zone import ZoneDef
from dustsweeper.tool import ToolDef, ToolKind, ToolState, PurchaseOption, UPGRADE_TRACKS
from dustsweeper.prestige import PrestigeUpgradeDef, PrestigeResult, UpgradeFamily
from dustsweeper.achievement import (
    AchievementDef,
    DustReward,
    PrestigeReward,
    MultiplierReward,
)
from dustsweeper.catalog import Catalog, GameConfig, default_catalog
from dustsweeper.state import ProgressionState
from dustsweeper.pipeline import ProductionPipeline, ProductionSnapshot
from dustsweeper.engine import EconomyEngine
from dustsweeper.evaluator import AchievementEvaluator
from dustsweeper.persistence import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    Persistence,
    LoadResult,
)
from dustsweeper.session import GameSession, Notice
from dustsweeper.scheduler import TickScheduler
from dustsweeper.terminal import TerminalCondition, Terminal, SimulationContext
from dustsweeper.strategy import (
    Strategy,
    ClickProfile,
    GreedyCheapest,
    ToolsOnly,
    CustomStrategy,
)
from dustsweeper.metrics import MetricsCollector
from dustsweeper.simulation import Simulation
from dustsweeper.report import SimulationReport, build_report
from dustsweeper.formatting import format_number, format_state, format_text_report

__all__ = [
    # Types
    "compare",
    # Errors
    "DustSweeperError",
    "InsufficientFunds",
    "PersistenceFailure",
    # Requirements
    "Requirement",
    "Req",
    # Cost
    "CostScaling",
    # Data model
    "ZoneDef",
    "ToolDef",
    "ToolKind",
    "ToolState",
    "PurchaseOption",
    "UPGRADE_TRACKS",
    "PrestigeUpgradeDef",
    "PrestigeResult",
    "UpgradeFamily",
    "AchievementDef",
    "DustReward",
    "PrestigeReward",
    "MultiplierReward",
    # Catalog
    "Catalog",
    "GameConfig",
    "default_catalog",
    # State
    "ProgressionState",
    # Pipeline
    "ProductionPipeline",
    "ProductionSnapshot",
    # Engine
    "EconomyEngine",
    "AchievementEvaluator",
    # Persistence
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "Persistence",
    "LoadResult",
    # Session
    "GameSession",
    "Notice",
    "TickScheduler",
    # Terminal
    "TerminalCondition",
    "Terminal",
    "SimulationContext",
    # Strategy
    "Strategy",
    "ClickProfile",
    "GreedyCheapest",
    "ToolsOnly",
    "CustomStrategy",
    # Simulation
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_number",
    "format_state",
    "format_text_report",
]
