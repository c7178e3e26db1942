# Obsidian Notes MCP Server
#
# Modular package structure:
# - config.py: Settings (pydantic-settings) and vault root resolution
# - utils.py: Error types and the VaultGuard path sandbox
# - models.py: Tool argument models and argument validation
# - notes.py: NoteStore for writing, deleting and batch-reading notes
# - search.py: Query classification and recursive note-name search
# - tools.py: Tool registry and dispatcher
# - server.py: MCP server wiring
# - main.py: Entry point and server initialization

__version__ = "0.2.0"
