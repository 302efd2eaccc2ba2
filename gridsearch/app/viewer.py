# gridsearch/app/viewer.py
#!/usr/bin/env python3
"""
Grid Search Viewer — agent chases food, one search expansion per tick

- Keyboard:
    [1]..[5]     -> strategy (BFS / DFS / UCS / Greedy / A*)
    [SPACE]      -> run/pause
    [N]          -> single search step
    [R]          -> new food, restart search
    [G]          -> new map
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Loop: search until the food is found, walk the agent along the path (slower on
expensive terrain), drop new food, search again. A search that exhausts its
frontier shows "No path" and pauses until R or G.
"""

import logging
import random
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridsearch.app.walker import AgentWalk
from gridsearch.app.world import World, new_world, respawn_food
from gridsearch.config import Settings
from gridsearch.core.search import FrontierSearch, Strategy
from gridsearch.core.terrain import TerrainClass
from gridsearch.core.types import Cell, GridSearchError, SearchStatus

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 280            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FPS = 30                 # agent walk advances once per frame
FONT_NAME = None         # default pygame font

# Colors
GRID_LINE    = (200, 200, 200)
FOOD_RED     = (255,   0,   0)
AGENT_GREEN  = (  0, 255,   0)
PATH_RED     = (255,  51,  51)
FRONTIER_A   = (  0, 255, 255, 100)
VISITED_A    = (200, 200, 200, 100)
START_GHOST  = (  0, 255,   0, 100)

TERRAIN_COLORS: Dict[TerrainClass, Tuple[int, int, int]] = {
    TerrainClass.IMPASSABLE: (  0,   0,   0),
    TerrainClass.LOW:        (247, 247, 247),
    TerrainClass.MEDIUM:     (244, 165, 130),
    TerrainClass.HIGH:       (  5, 113, 176),
}

CARD_BG     = (24, 28, 36, 220)
CARD_HI     = (255, 255, 255, 18)
TEXT_LIGHT  = (230, 235, 240)
ACCENT_GOLD = (255, 210, 0)

STRATEGY_KEYS = {
    pygame.K_1: Strategy.BFS,
    pygame.K_2: Strategy.DFS,
    pygame.K_3: Strategy.UCS,
    pygame.K_4: Strategy.GREEDY,
    pygame.K_5: Strategy.ASTAR,
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()

        self.settings = settings
        self.rng = random.Random(settings.seed)
        self.world: World = new_world(settings, self.rng)
        self.strategy = settings.strategy
        self.steps_per_sec = settings.steps_per_sec
        self.running = True

        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid = self.world.grid
        self.cell_size = self._auto_cell_size()
        win_w = GRID_MARGIN * 2 + grid.width * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN * 2 + grid.height * self.cell_size, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Search — food chase")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self.search = FrontierSearch()
        self.walk: Optional[AgentWalk] = None
        self.path: List[Cell] = []
        self.path_origin: Cell = self.world.agent
        self.state = "Idle"
        self._quit = False
        self._last_step_t = 0.0
        self._begin_search()

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN * 2
        return max(8, min(CELL_SIZE_DEFAULT, target_h // self.world.grid.height))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window, grid on the left, panel on the right."""
        grid = self.world.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(8, min(avail_w // grid.width, avail_h // grid.height)))

        plate_w = grid.width * self.cell_size + 2 * GRID_MARGIN
        plate_h = grid.height * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - plate_h) // 2)
        self.canvas_rect = pygame.Rect(0, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0, max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    # ---------- driver ----------
    def run(self):
        while not self._quit:
            self._handle_events()
            if self.running:
                self._tick()
            self._draw()
            self.clock.tick(FPS)
        pygame.quit()

    def _begin_search(self):
        w = self.world
        self.search.initialize(w.grid, w.agent, w.food, self.strategy)
        self.walk = None
        self.path = []
        self.path_origin = w.agent
        self.state = "Searching" if self.running else "Paused"
        self._refresh_active_states()

    def _tick(self):
        if self.state == "Moving":
            self._advance_walk()
            return
        now = time.time()
        if now - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = now
            self._do_step()

    def _do_step(self):
        if self.search.status is not SearchStatus.SEARCHING:
            return
        res = self.search.step()
        while res.stale and res.status is SearchStatus.SEARCHING:
            res = self.search.step()
        if res.status is SearchStatus.FOUND:
            self.path = self.search.reconstruct()
            self.walk = AgentWalk(self.world.grid, self.world.agent, self.path)
            self.state = "Moving"
        elif res.status is SearchStatus.EXHAUSTED:
            self.state = "No path"
            self.running = False
            self._refresh_active_states()

    def _advance_walk(self):
        moved = self.walk.tick()
        if moved is not None:
            self.world.agent = moved
        if self.walk.finished:
            # food collected: it becomes the next start
            self.world.agent = self.world.food
            respawn_food(self.world, self.rng)
            self._begin_search()

    # ---------- controls ----------
    def _toggle_run(self):
        if self.state == "No path":
            return
        self.running = not self.running
        if self.state != "Moving":
            self.state = "Searching" if self.running else "Paused"
        self._refresh_active_states()

    def _step_once(self):
        if self.state in ("Searching", "Paused", "Idle"):
            self._do_step()

    def _new_food(self):
        respawn_food(self.world, self.rng)
        self.running = True
        self._begin_search()

    def _new_map(self):
        try:
            self.world = new_world(self.settings, self.rng)
        except GridSearchError as ex:
            logger.error("failed to build a new map: %s", ex)
            return
        self.running = True
        self._layout(*self.screen.get_size())
        self._begin_search()

    def _switch_strategy(self, strategy: Strategy):
        self.strategy = strategy
        self.running = True
        self._begin_search()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit = True
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit = True
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_n:
                    self._step_once()
                elif e.key == pygame.K_r:
                    self._new_food()
                elif e.key == pygame.K_g:
                    self._new_map()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key in STRATEGY_KEYS:
                    self._switch_strategy(STRATEGY_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in list(self._buttons):
                    b.handle_mouse(e)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h - 1)
            c = tuple(int(top[i] + (bot[i] - top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = cell
        return pygame.Rect(ox + col * cs, oy + row * cs, cs, cs)

    def _cell_center(self, cell: Cell) -> Tuple[int, int]:
        return self._cell_rect(cell).center

    def _draw_grid(self):
        grid = self.world.grid
        cs = self.cell_size
        for row in range(grid.height):
            for col in range(grid.width):
                rect = self._cell_rect((col, row))
                pygame.draw.rect(self.screen, TERRAIN_COLORS[grid.terrain_at((col, row))], rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        # overlays read straight from the search state
        tint = pygame.Surface((cs, cs), pygame.SRCALPHA)
        tint.fill(FRONTIER_A)
        for cell in self.search.frontier_cells():
            self.screen.blit(tint, self._cell_rect(cell).topleft)
        tint.fill(VISITED_A)
        for cell in self.search.visited:
            self.screen.blit(tint, self._cell_rect(cell).topleft)

        # path
        if self.path:
            pts = [self._cell_center(c) for c in [self.path_origin] + self.path]
            pygame.draw.lines(self.screen, PATH_RED, False, pts, max(2, int(cs * 0.2)))
            ghost = pygame.Surface((cs, cs), pygame.SRCALPHA)
            pygame.draw.circle(ghost, START_GHOST, (cs // 2, cs // 2), int(cs * 0.25))
            self.screen.blit(ghost, self._cell_rect(self.path_origin).topleft)

        food = self._cell_rect(self.world.food)
        pygame.draw.rect(self.screen, FOOD_RED, food.inflate(-int(cs * 0.4), -int(cs * 0.4)))
        pygame.draw.circle(self.screen, AGENT_GREEN, self._cell_center(self.world.agent), int(cs * 0.3))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 300  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 30
        gap = 6

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            return btn

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._step_once); y += h + gap
        add("New Food", self._new_food); y += h + gap
        add("New Map", self._new_map); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        self._strategy_buttons: Dict[Strategy, UIButton] = {}
        for i, s in enumerate(Strategy, start=1):
            self._strategy_buttons[s] = add(f"[{i}] {s.label}", lambda s=s: self._switch_strategy(s), togglable=True)
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        for s, btn in getattr(self, "_strategy_buttons", {}).items():
            btn.set_active(s is self.strategy)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 280), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0, 0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self.search.metrics()
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Expanded: {m['popped']}  (stale {m['stale']})")
        line(f"Frontier: {m['open_size']}")
        line(f"Visited: {m['closed_count']}")
        line(f"Path Len: {m['path_len']}")
        if m["total_cost"] is not None:
            line(f"Total Cost: {m['total_cost']}")
        line("-" * 26)
        line(f"State: {self.state}")
        line(f"Algo: {self.strategy.label}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


def main():
    from gridsearch.__main__ import main as entry
    return entry()


if __name__ == "__main__":
    raise SystemExit(main())
