from __future__ import annotations

import logging
from typing import Optional, Tuple

import pygame

from .catalog import DEFAULT_CATALOG, InMemoryCatalog, most_played
from .clock import TickClock
from .config import CFG
from .constants import (
    ACCENT,
    BG,
    DIM,
    FONT_SIZE_BODY,
    FONT_SIZE_SMALL,
    FONT_SIZE_TITLE,
    INK,
    REACTION_COLORS,
    SNAKE_BODY,
    SNAKE_FOOD,
    SNAKE_HEAD,
    TARGET_COLOR,
)
from .enums import Direction, GameId
from .idle import format_amount
from .input_queue import InputQueue
from .models import ReactionState, RoundState, Scene, SequenceState
from .music import MusicController
from .pads import PAD_BY_KEY, PADS
from .reaction import TOO_EARLY
from .registry import Arcade, GameRegistry, DEFAULT_PROFILES
from .score_store import ScoreStore
from .settings import make_runtime_settings

logger = logging.getLogger(__name__)

STEER_KEYS = {
    pygame.K_UP: Direction.UP, pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP, pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT, pygame.K_d: Direction.RIGHT,
}
CHOICE_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3)


class App:

    # ---- Core lifecycle wiring ----

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self.w, self.h = self.screen.get_size()
        self.clock = pygame.time.Clock()
        self.scene = Scene.MENU
        self.iq = InputQueue()

        self.title_font = pygame.font.Font(None, FONT_SIZE_TITLE)
        self.body_font = pygame.font.Font(None, FONT_SIZE_BODY)
        self.small_font = pygame.font.Font(None, FONT_SIZE_SMALL)

        self.settings = make_runtime_settings(CFG)

        audio = CFG["audio"]
        self.music = MusicController(volume=audio["music_volume"], sfx_volume=audio["sfx_volume"])
        self.music.load_sfx(audio.get("sfx", {}))

        self.catalog = InMemoryCatalog(DEFAULT_CATALOG)
        self.registry = GameRegistry(DEFAULT_PROFILES)
        self.arcade = Arcade(
            TickClock(pygame.time.get_ticks),
            ScoreStore(CFG["scores_path"]),
            registry=self.registry,
            catalog=self.catalog,
            settings=self.settings,
            sfx=self.music.play_sfx,
        )

    def shutdown(self) -> None:
        self.arcade.close()

    # ---- Layout helpers ----

    def _square(self) -> pygame.Rect:
        side = int(min(self.w, self.h) * 0.7)
        rect = pygame.Rect(0, 0, side, side)
        rect.center = (self.w // 2, int(self.h * 0.55))
        return rect

    def _arena_rect(self, arena: Tuple[int, int]) -> pygame.Rect:
        aw, ah = arena
        scale = min(self.w * 0.9 / aw, self.h * 0.75 / ah)
        rect = pygame.Rect(0, 0, int(aw * scale), int(ah * scale))
        rect.center = (self.w // 2, int(self.h * 0.56))
        return rect

    def _pad_rects(self) -> dict[str, pygame.Rect]:
        sq = self._square()
        half = sq.width // 2
        rects = {}
        for i, name in enumerate(PADS):
            col, row = i % 2, i // 2
            rects[name] = pygame.Rect(sq.x + col * half, sq.y + row * half, half, half).inflate(-12, -12)
        return rects

    # ---- Input ----

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            self.w, self.h = event.w, event.h
            return
        if self.scene is Scene.MENU:
            self._handle_menu(event)
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.arcade.close()
            self.scene = Scene.MENU
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_m:
            self.music.toggle(CFG["audio"]["music"])
            return
        profile = self.arcade.profile
        if profile is None:
            return
        if event.type == pygame.KEYDOWN:
            self._map_key(profile.key, event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._map_click(profile.key, event.pos)

    def _handle_menu(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_UP, pygame.K_w, pygame.K_DOWN, pygame.K_s):
            delta = -1 if event.key in (pygame.K_UP, pygame.K_w) else 1
            idx = self.registry.next_index(delta)
            if idx is not None:
                self.registry.set_index(idx)
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            self.arcade.launch(self.registry.current().key)
            self.scene = Scene.GAME
        elif event.key == pygame.K_m:
            self.music.toggle(CFG["audio"]["music"])
        elif event.key == pygame.K_r:
            self.arcade.reset_best(self.registry.current().key)

    def _map_key(self, game: GameId, key: int) -> None:
        push = self.iq.push
        if key == pygame.K_RETURN:
            push("start")
        elif game is GameId.REACTION and key == pygame.K_SPACE:
            push("press")
        elif game is GameId.MEMORY and key in PAD_BY_KEY:
            push("press", PAD_BY_KEY[key])
        elif game is GameId.CLICKER and key == pygame.K_SPACE:
            push("tap")
        elif game is GameId.CLICKER and key in CHOICE_KEYS:
            durations = self.settings[GameId.CLICKER]["durations"]
            i = CHOICE_KEYS.index(key)
            if i < len(durations):
                push("select", durations[i])
        elif game is GameId.SNAKE and key in STEER_KEYS:
            push("steer", STEER_KEYS[key])
        elif game is GameId.COOKIE and key == pygame.K_SPACE:
            push("click")
        elif game is GameId.COOKIE and key in CHOICE_KEYS:
            kinds = list(self.arcade.snapshot().upgrades)
            i = CHOICE_KEYS.index(key)
            if i < len(kinds):
                push("buy", kinds[i])

    def _map_click(self, game: GameId, pos: Tuple[int, int]) -> None:
        if game is GameId.REACTION:
            self.iq.push("press")
        elif game is GameId.MEMORY:
            for name, rect in self._pad_rects().items():
                if rect.collidepoint(pos):
                    self.iq.push("press", name)
        elif game is GameId.CLICKER:
            self.iq.push("tap")
        elif game is GameId.COOKIE:
            self.iq.push("click")
        elif game is GameId.FPS:
            arena = self._arena_rect(self.settings[GameId.FPS]["arena_size"])
            if arena.collidepoint(pos):
                x = (pos[0] - arena.x) / arena.width
                y = (pos[1] - arena.y) / arena.height
                self.iq.push("shoot", (x, y))

    # ---- Update ----

    def update(self) -> None:
        self.arcade.pump()
        for event in self.iq.pop_all():
            self.arcade.dispatch(event)

    # ---- Rendering ----

    def draw_text(self, text: str, *, font: Optional[pygame.font.Font] = None,
                  color=INK, center: Optional[Tuple[int, int]] = None,
                  topleft: Optional[Tuple[int, int]] = None) -> pygame.Rect:
        surf = (font or self.body_font).render(text, True, color)
        rect = surf.get_rect()
        if center is not None:
            rect.center = center
        elif topleft is not None:
            rect.topleft = topleft
        self.screen.blit(surf, rect)
        return rect

    def draw(self) -> None:
        self.screen.fill(BG)
        if self.scene is Scene.MENU:
            self._draw_menu()
        else:
            self._draw_game()
        pygame.display.flip()

    def _draw_menu(self) -> None:
        self.draw_text("Choose Your Game", font=self.title_font, center=(self.w // 2, int(self.h * 0.12)))
        self.draw_text("ENTER play   R reset best   M music", font=self.small_font, color=DIM,
                       center=(self.w // 2, int(self.h * 0.18)))
        for i, profile in enumerate(self.registry.games):
            selected = i == self.registry.idx
            color = ACCENT if selected else INK
            label = f"> {profile.label} <" if selected else profile.label
            self.draw_text(label, color=color, center=(self.w // 2, int(self.h * 0.25) + i * 40))
        top = most_played(self.catalog, 3)
        y = int(self.h * 0.25) + len(self.registry.games) * 40 + 30
        self.draw_text("Most played", font=self.small_font, color=DIM, center=(self.w // 2, y))
        for rank, record in enumerate(top, start=1):
            line = f"{rank}. {record.title}  {record.play_count} plays"
            self.draw_text(line, font=self.small_font, color=DIM, center=(self.w // 2, y + rank * 24))

    def _draw_game(self) -> None:
        profile = self.arcade.profile
        snap = self.arcade.snapshot()
        if profile is None or snap is None:
            return
        self.draw_text(profile.label, font=self.title_font, center=(self.w // 2, 40))
        self.draw_text("ESC menu  M music", font=self.small_font, color=DIM, topleft=(10, 10))
        drawer = getattr(self, f"_draw_{profile.key.value}")
        drawer(snap)

    def _status(self, text: str, row: int = 0, color=INK) -> None:
        self.draw_text(text, color=color, center=(self.w // 2, 90 + row * 32))

    def _draw_reaction(self, snap) -> None:
        area = self._square()
        pygame.draw.rect(self.screen, REACTION_COLORS[snap.state.name], area, border_radius=16)
        if snap.state is ReactionState.WAITING:
            msg = "Too early!" if snap.result == TOO_EARLY else "Click to start"
        elif snap.state is ReactionState.READY:
            msg = "Wait for green..."
        elif snap.state is ReactionState.GO:
            msg = "CLICK NOW!"
        else:
            msg = f"{snap.result} ms ({snap.rating})"
        self.draw_text(msg, font=self.title_font, center=area.center)
        if snap.best is not None:
            self._status(f"Best: {snap.best} ms", color=ACCENT if snap.is_new_best else INK)

    def _draw_memory(self, snap) -> None:
        for name, rect in self._pad_rects().items():
            pad = PADS[name]
            color = pad.lit_color() if snap.lit == name else pad.color
            pygame.draw.rect(self.screen, color, rect, border_radius=12)
        labels = {
            SequenceState.IDLE: "Press ENTER to start",
            SequenceState.SHOWING: "Watch...",
            SequenceState.PLAYING: f"Your turn  {snap.progress}/{snap.length}",
            SequenceState.LOST: "Wrong! ENTER to retry",
        }
        self._status(f"{labels[snap.state]}   Score {snap.score}   Best {snap.best or 0}")

    def _draw_clicker(self, snap) -> None:
        area = self._square()
        if snap.state is RoundState.IDLE:
            self._status(f"Duration {snap.duration}s (1/2/3)   ENTER to start")
        elif snap.state is RoundState.PLAYING:
            self._status(f"{snap.seconds_left:.1f}s left")
        else:
            self._status("New high score!" if snap.is_new_best else "Time's up! ENTER to retry",
                         color=ACCENT if snap.is_new_best else INK)
        self.draw_text(str(snap.count), font=self.title_font, center=area.center)
        self._status(f"Best for {snap.duration}s: {snap.best or 0}", row=1, color=DIM)

    def _draw_snake(self, snap) -> None:
        area = self._square()
        n = self.settings[GameId.SNAKE]["grid_size"]
        cell = area.width // n
        pygame.draw.rect(self.screen, (30, 41, 59), (area.x, area.y, cell * n, cell * n))
        for i, (x, y) in enumerate(snap.body):
            color = SNAKE_HEAD if i == 0 else SNAKE_BODY
            pygame.draw.rect(self.screen, color, (area.x + x * cell + 1, area.y + y * cell + 1, cell - 2, cell - 2))
        if snap.food is not None:
            fx, fy = snap.food
            center = (area.x + fx * cell + cell // 2, area.y + fy * cell + cell // 2)
            pygame.draw.circle(self.screen, SNAKE_FOOD, center, max(2, cell // 2 - 2))
        if snap.state is RoundState.IDLE:
            self._status("ENTER to start, arrows to steer")
        elif snap.state is RoundState.FINISHED:
            self._status("Board cleared!" if snap.won else "Game over! ENTER to retry")
        self._status(f"Score {snap.score}   Best {snap.best or 0}", row=1)

    def _draw_cookie(self, snap) -> None:
        self._status(f"{format_amount(snap.resource)} cookies")
        self._status(f"{snap.per_action_yield}/click   {snap.per_second_yield:.1f}/sec", row=1, color=DIM)
        self.draw_text("SPACE or click to bake", center=self._square().center)
        y = int(self.h * 0.75)
        for i, (kind, cost) in enumerate(snap.costs.items(), start=1):
            affordable = snap.resource >= cost
            line = f"{i}. {kind}  x{snap.upgrades[kind]}  cost {cost}"
            self.draw_text(line, font=self.small_font, color=INK if affordable else DIM,
                           center=(self.w // 2, y + i * 24))

    def _draw_fps(self, snap) -> None:
        arena = self._arena_rect(self.settings[GameId.FPS]["arena_size"])
        pygame.draw.rect(self.screen, (41, 37, 36), arena)
        scale = arena.width / self.settings[GameId.FPS]["arena_size"][0]
        for target in snap.targets:
            center = (arena.x + int(target.x * arena.width), arena.y + int(target.y * arena.height))
            pygame.draw.circle(self.screen, TARGET_COLOR, center, max(2, int(target.size.pixels * scale / 2)))
        if snap.state is RoundState.IDLE:
            self._status("ENTER to start, click the targets")
        elif snap.state is RoundState.FINISHED:
            self._status("New high score!" if snap.is_new_best else "Round over! ENTER to retry",
                         color=ACCENT if snap.is_new_best else INK)
        else:
            self._status(f"{snap.time_left}s   combo x{snap.multiplier}")
        self._status(f"Score {snap.score}   Best {snap.best or 0}", row=1)


__all__ = ["App"]
