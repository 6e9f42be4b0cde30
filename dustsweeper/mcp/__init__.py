# dustsweeper.mcp: MCP playtesting server
