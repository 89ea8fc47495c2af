"""MCP protocol servers for MCP Database Server."""
