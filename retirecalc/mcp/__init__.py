"""MCP server exposing the calculation engine as tools."""
