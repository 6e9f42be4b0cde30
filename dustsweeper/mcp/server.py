"""MCP server wrapping a GameSession for interactive AI playtesting."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from mcp.server.fastmcp import FastMCP

from dustsweeper.achievement import describe_reward
from dustsweeper.session import GameSession
from dustsweeper.tool import UPGRADE_TRACKS

logger = logging.getLogger(__name__)

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active session."""

    session: GameSession
    _achievements_seen: set[str] = field(default_factory=set)


def _notices(holder: _GameHolder) -> list[str]:
    return [n.message for n in holder.session.drain_notices()]


def _new_achievements(holder: _GameHolder) -> list[str]:
    unlocked = holder.session.state.unlocked_achievements()
    new = sorted(unlocked - holder._achievements_seen)
    holder._achievements_seen.update(new)
    return new


def _balances(holder: _GameHolder) -> dict[str, Any]:
    state = holder.session.state
    result = {}
    for idx, zdef in enumerate(holder.session.catalog.zones):
        result[str(idx)] = {
            "currency": zdef.currency,
            "balance": round(state.currency(idx), 2),
            "rate": round(state.currency_per_second.get(idx, 0.0), 4),
        }
    return result


def _title(session: GameSession) -> str | None:
    titles = session.catalog.prestige_titles
    if not titles:
        return None
    return titles[min(session.state.prestige_title_index, len(titles) - 1)]


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    catalog = holder.session.catalog
    return {
        "name": catalog.config.name,
        "zones": [
            {"index": i, "name": z.name, "cost": z.cost, "bonus": z.bonus, "currency": z.currency}
            for i, z in enumerate(catalog.zones)
        ],
        "tools": [
            {
                "id": t.id,
                "display_name": t.display_name,
                "kind": t.kind.value,
                "base_cost": t.base_cost,
                "increment": t.increment,
                "currency_zone": t.currency_zone,
            }
            for t in catalog.tools
        ],
        "upgrade_tracks": list(UPGRADE_TRACKS),
        "prestige_upgrades": [
            {
                "id": p.id,
                "display_name": p.display_name,
                "family": p.family.value,
                "cost": p.cost,
                "effect": p.effect,
            }
            for p in catalog.prestige_upgrades
        ],
        "achievements": [
            {
                "id": a.id,
                "display_name": a.display_name,
                "description": a.description,
                "reward": describe_reward(a.reward) if a.reward is not None else None,
            }
            for a in catalog.achievements
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    session = holder.session
    state = session.state
    engine = session.engine
    tools = {
        tid: {"level": ts.level, "cost": round(ts.cost, 2), "upgrades": dict(ts.upgrades)}
        for tid, ts in state.tools.items()
        if ts.level > 0
    }
    return {
        "current_zone": state.current_zone_index,
        "zone_name": session.catalog.zones[state.current_zone_index].name,
        "balances": _balances(holder),
        "total_dust_earned": round(state.total_dust_earned, 2),
        "lifetime_dust": round(state.lifetime_dust, 2),
        "total_clicks": state.total_clicks,
        "dust_per_click": round(state.dust_per_click, 4),
        "total_per_second": round(state.total_per_second, 4),
        "prestige": state.prestige,
        "prestige_available": engine.prestige_available(),
        "prestige_progress": round(engine.prestige_progress(), 4),
        "prestige_multiplier": round(engine.prestige_multiplier(), 4),
        "achievement_multiplier": round(engine.achievement_multiplier(), 4),
        "title": _title(session),
        "prestige_upgrades": dict(state.prestige_upgrades),
        "achievements": sorted(state.unlocked_achievements()),
        "tools": tools,
    }


def _tool_get_purchase_options(holder: _GameHolder) -> dict[str, Any]:
    engine = holder.session.engine
    result = []
    for option in engine.get_purchase_options():
        time_to_afford = engine.compute_time_to_afford(option)
        entry: dict[str, Any] = {
            "kind": option.kind,
            "id": option.id,
            "display_name": option.display_name,
            "level": option.level,
            "cost": round(option.cost, 2),
            "currency_zone": option.currency_zone,
            "affordable": option.affordable,
            "time_to_afford": round(time_to_afford, 2) if time_to_afford is not None else None,
        }
        if option.track is not None:
            entry["track"] = option.track
        result.append(entry)
    shop = [
        {
            "id": p.id,
            "display_name": p.display_name,
            "level": holder.session.state.prestige_upgrade_level(p.id),
            "cost": engine.prestige_upgrade_cost(p.id),
        }
        for p in holder.session.catalog.prestige_upgrades
    ]
    return {"purchases": result, "prestige_shop": shop}


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.session.click()
    result: dict[str, Any] = {
        "clicks": count,
        "total_earned": round(total, 2),
        "balances": _balances(holder),
    }
    new = _new_achievements(holder)
    if new:
        result["new_achievements"] = new
    result["notices"] = _notices(holder)
    return result


def _tool_buy_tool(holder: _GameHolder, tool_id: str) -> dict[str, Any]:
    if holder.session.catalog.get_tool(tool_id) is None:
        return {"error": f"Unknown tool: {tool_id!r}"}
    success = holder.session.buy_tool(tool_id)
    ts = holder.session.state.tools[tool_id]
    result: dict[str, Any] = {"success": success, "level": ts.level, "next_cost": round(ts.cost, 2)}
    if not success:
        result["reason"] = "Cannot afford"
    result["notices"] = _notices(holder)
    return result


def _tool_buy_upgrade(holder: _GameHolder, tool_id: str, track: str) -> dict[str, Any]:
    if holder.session.catalog.get_tool(tool_id) is None:
        return {"error": f"Unknown tool: {tool_id!r}"}
    if track not in UPGRADE_TRACKS:
        return {"error": f"Unknown upgrade track: {track!r}"}
    success = holder.session.buy_upgrade(tool_id, track)
    result: dict[str, Any] = {
        "success": success,
        "level": holder.session.state.tools[tool_id].upgrades[track],
    }
    if not success:
        result["reason"] = "Cannot afford"
    result["notices"] = _notices(holder)
    return result


def _tool_unlock_zone(holder: _GameHolder) -> dict[str, Any]:
    success = holder.session.unlock_zone()
    state = holder.session.state
    return {
        "success": success,
        "current_zone": state.current_zone_index,
        "zone_name": holder.session.catalog.zones[state.current_zone_index].name,
        "notices": _notices(holder),
    }


def _tool_prestige(holder: _GameHolder) -> dict[str, Any]:
    result = holder.session.do_prestige()
    if result.success:
        return {
            "success": True,
            "reward_amount": result.reward_amount,
            "prestige": holder.session.state.prestige,
            "notices": _notices(holder),
        }
    _notices(holder)
    return {"success": False, "reason": result.reason}


def _tool_buy_prestige_upgrade(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    if holder.session.catalog.get_prestige_upgrade(upgrade_id) is None:
        return {"error": f"Unknown prestige upgrade: {upgrade_id!r}"}
    success = holder.session.buy_prestige_upgrade(upgrade_id)
    state = holder.session.state
    result: dict[str, Any] = {
        "success": success,
        "level": state.prestige_upgrade_level(upgrade_id),
        "prestige": state.prestige,
    }
    if not success:
        result["reason"] = "Not enough prestige"
    result["notices"] = _notices(holder)
    return result


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    # Subdivide into 1-second ticks
    gained = 0.0
    remaining = seconds
    while remaining > 0:
        dt = min(1.0, remaining)
        gained += holder.session.tick(dt)
        remaining -= dt

    return {
        "waited": seconds,
        "gained": round(gained, 2),
        "balances": _balances(holder),
    }


def _tool_save(holder: _GameHolder) -> dict[str, Any]:
    success = holder.session.save()
    return {"success": success, "notices": _notices(holder)}


def _tool_load(holder: _GameHolder) -> dict[str, Any]:
    result = holder.session.load()
    if result is None:
        return {"success": False, "reason": "Corrupt or unreadable save", "notices": _notices(holder)}
    if not result.found:
        return {"success": False, "reason": "No save found"}
    holder._achievements_seen = set(holder.session.state.unlocked_achievements())
    return {
        "success": True,
        "offline_seconds": round(result.offline_seconds, 2),
        "offline_gain": round(result.offline_gain, 2),
        "notices": _notices(holder),
    }


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    logger.info("New game requested")
    save_deleted = holder.session.reset()
    holder.session.drain_notices()
    holder._achievements_seen = set()
    return {
        "success": True,
        "save_deleted": save_deleted,
        "message": "Game reset to initial state",
    }


# ── Server factory ──────────────────────────────────────────────────


def create_server(session: GameSession) -> FastMCP:
    """Create an MCP server wrapping the given session."""
    holder = _GameHolder(
        session=session,
        _achievements_seen=set(session.state.unlocked_achievements()),
    )

    mcp = FastMCP(name=f"Dust Sweeper: {session.catalog.config.name}")
    logger.info("MCP server created for %s", session.catalog.config.name)

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: zones, tools, prestige upgrades, achievements."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: balances, rates, prestige, achievements, owned tools."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_purchase_options() -> dict[str, Any]:
        """List tool levels, upgrade tracks, the next zone and the prestige shop with costs."""
        return _tool_get_purchase_options(holder)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Sweep N times (max 1000). Returns total earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def buy_tool(tool_id: str) -> dict[str, Any]:
        """Buy one level of a tool."""
        return _tool_buy_tool(holder, tool_id)

    @mcp.tool()
    def buy_upgrade(tool_id: str, track: str) -> dict[str, Any]:
        """Buy one level of a tool's efficiency, speed or capacity track."""
        return _tool_buy_upgrade(holder, tool_id, track)

    @mcp.tool()
    def unlock_zone() -> dict[str, Any]:
        """Unlock the next zone using the current zone's balance."""
        return _tool_unlock_zone(holder)

    @mcp.tool()
    def prestige() -> dict[str, Any]:
        """Reset the run for prestige points."""
        return _tool_prestige(holder)

    @mcp.tool()
    def buy_prestige_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Spend prestige points on a permanent upgrade."""
        return _tool_buy_prestige_upgrade(holder, upgrade_id)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400). Time is subdivided into 1s ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def save() -> dict[str, Any]:
        """Write the save blob."""
        return _tool_save(holder)

    @mcp.tool()
    def load() -> dict[str, Any]:
        """Load the save blob and apply offline catch-up."""
        return _tool_load(holder)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
