"""File-based storage for stories, prefs and player settings.

Data layout:
  data/
    stories/             Uploaded Twee stories
      <slug>.twee        Raw Twee source, parsed on read
    prefs.json           Key-value store used by script commands (int/float/string)
    config.json          Player settings (back choice, reset, prompt prefix, ...)
  presets/
    stories/             Built-in read-only stories (merged at read time)

Slug rules: title → Unicode normalize → strip non-ASCII → lowercase →
replace non-alnum runs with hyphen → strip leading/trailing hyphens.

Preset merging: list_stories() and get_story() merge preset + user data;
user data wins on slug collision. Deleting a user story reveals the preset.

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates and validates the result.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    preset_stories_dir,
    presets_dir,
    slugify,
    stories_dir,
)

from .stories import (  # noqa: F401
    delete_story,
    get_story,
    get_story_source,
    get_story_summary,
    import_story,
    list_stories,
    save_story,
)

from .prefs import (  # noqa: F401
    PREF_KINDS,
    PrefsStore,
    clear_prefs,
    get_prefs,
    prefs_store,
    set_pref,
)

from .config import (  # noqa: F401
    get_config,
    get_player_settings,
    update_config,
)
