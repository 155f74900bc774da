"""Tool handlers. One module per MCP tool, each exposing ``handle()``."""
