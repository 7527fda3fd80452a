from __future__ import annotations

import logging

from pygoblin.app.game_app import GameApp


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    GameApp().run()


if __name__ == "__main__":
    main()
