"""Twee Story — dev launcher. Starts the API server, or plays a story in the terminal."""

import argparse
import logging
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "13013")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def play_in_terminal(slug: str) -> None:
    from twee_story.errors import MissingPassage
    from backend.play import StoryNotFound, open_player

    try:
        player = open_player(slug)
    except StoryNotFound:
        print(f"No story with slug '{slug}'.")
        sys.exit(1)

    print(f"== {player.document.title or slug} ==\n")
    try:
        view = player.show()
    except MissingPassage as e:
        print(f"Cannot start story: {e}")
        sys.exit(1)
    while True:
        print(view.display)
        try:
            answer = input("\n> ").strip()
        except EOFError:
            break
        if answer in ("q", "quit", ""):
            break
        try:
            view = player.choose(int(answer))
        except ValueError:
            print("Enter a choice number, or q to quit.")
        except IndexError as e:
            print(e)
        except MissingPassage as e:
            print(e)
        print()


def main():
    parser = argparse.ArgumentParser(description="Twee Story dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Clean and create demo story data")
    parser.add_argument("--play", metavar="SLUG", default=None,
                        help="Play a stored story in the terminal instead of serving")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.demo or args.data_dir or args.play:
        from backend import storage
        data_dir = args.data_dir or Path("data")
        storage.init_storage(data_dir)
        if args.demo:
            from backend.demo import create_demo_data
            create_demo_data()

    if args.play:
        play_in_terminal(args.play)
        return

    # Build env for the server process so it picks up the same data dir
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    proc = subprocess.Popen(
        ["uv", "run", "uvicorn", "backend.app:app", "--reload", "--host", HOST, "--port", PORT],
        cwd=ROOT, env=env,
    )

    def shutdown(*_):
        print("\nShutting down...")
        proc.terminate()
        proc.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    print(f"Starting API on http://localhost:{PORT} ...")
    proc.wait()


if __name__ == "__main__":
    main()
