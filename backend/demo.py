"""Create a demo story for development/testing."""

import shutil

from backend import storage

DEMO_STORY = """\
:: StoryTitle
The Cellar Door

:: StoryData
{"ifid": "5B1B8C2E-43F5-4C1A-9E0A-4A5D7F3B2C11", "format": "SugarCube", "start": "Hallway"}

:: Hallway
A narrow hallway ends at a heavy [[Cellar Door]]. A [[Kitchen]] lies to the left.
<script>
Store.SetInt "hallway_visits" 1
greeting = "Welcome, " + "traveller"
</script>

:: Kitchen
Copper pots hang over a cold stove. A key rests on the table.
<script>
Store.SetString "item" "brass key"
</script>

:: Cellar Door
The door is locked. You will need a key from the [[Kitchen]].
<script>
Store.GetString "item"
</script>
"""


def create_demo_data() -> None:
    """Wipe uploaded stories and prefs, then store the demo story."""
    if storage.stories_dir().exists():
        shutil.rmtree(storage.stories_dir())
    storage.stories_dir().mkdir(parents=True, exist_ok=True)
    storage.clear_prefs()

    summary = storage.save_story(DEMO_STORY)
    print(f"  Created story: {summary['title']} ({summary['slug']})")
    print(f"  Passages: {', '.join(summary['passages'])}")
