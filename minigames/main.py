from __future__ import annotations

import logging
import os
import sys

import pygame

from .app import App
from .config import CFG
from .constants import FPS

# ============================== MAIN LOOP ============================== #
def main():
    logging.basicConfig(
        level=CFG["logging"]["level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    os.environ.setdefault('SDL_VIDEO_CENTERED', "1")
    pygame.init()
    flags = pygame.FULLSCREEN if CFG["display"]["fullscreen"] else pygame.RESIZABLE
    screen = pygame.display.set_mode(tuple(CFG["display"]["windowed_size"]), flags)
    pygame.display.set_caption("Arcade Mini-Games")
    run(App(screen))

def run(app, get_events=pygame.event.get):
    """Frame loop; QUIT and Ctrl+C both shut the app down before exiting."""
    try:
        while True:
            for event in get_events():
                if event.type == pygame.QUIT:
                    app.shutdown()
                    pygame.quit(); sys.exit(0)
                app.handle_event(event)
            app.update()
            app.draw()
            app.clock.tick(FPS)
    except KeyboardInterrupt:
        app.shutdown()
        pygame.quit(); sys.exit(0)

if __name__ == "__main__":
    main()
