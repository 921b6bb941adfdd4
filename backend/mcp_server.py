"""FastMCP server exposing story play and the prefs store as MCP tools.

Tools:
  - show_passage(slug, passage)   — show a passage and run its script
  - choose(slug, current, choice) — follow a numbered choice
  - run_script(script)            — execute script lines against the prefs store
  - get_pref(kind, key)           — read one pref (int, float or string)
  - set_pref(kind, key, value)    — write one pref

Storage must be initialised before tools are called (done in __main__, or by
the test fixtures).

Usage:
    uv run python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from backend import play, storage

mcp = FastMCP("twee-story")


@mcp.tool()
def show_passage(slug: str, passage: str = "") -> dict:
    """Show a passage of a stored story (start passage when empty) and run its script."""
    return play.show_passage(slug, passage or None).model_dump()


@mcp.tool()
def choose(slug: str, current: str, choice: int) -> dict:
    """Follow choice number `choice` from passage `current`."""
    return play.choose_passage(slug, current, choice).model_dump()


@mcp.tool()
def run_script(script: str) -> dict:
    """Execute script lines against the prefs store."""
    return play.run_script(script)


@mcp.tool()
def get_pref(kind: str, key: str) -> int | float | str:
    """Read a pref. Missing keys return 0, 0.0 or an empty string."""
    store = storage.prefs_store()
    if kind == "int":
        return store.get_int(key)
    if kind == "float":
        return store.get_float(key)
    if kind == "string":
        return store.get_string(key)
    raise ValueError(f"Unknown pref kind: {kind}")


@mcp.tool()
def set_pref(kind: str, key: str, value: str) -> dict:
    """Write a pref, coercing `value` to the given kind. Returns all prefs."""
    return storage.set_pref(kind, key, value)


if __name__ == "__main__":
    import os
    from pathlib import Path

    from dotenv import load_dotenv

    load_dotenv(Path(__file__).parent.parent / ".env")
    data_path = Path(os.getenv("DATA_DIR", str(Path(__file__).parent.parent / "data")))
    storage.init_storage(data_path)
    mcp.run()
