import math

import pygame

from .config import GameConfig
from .game import FrameSnapshot, GamePhase

SKY_TOP = (135, 206, 235)
SKY_BOTTOM = (184, 230, 232)
SUN = (255, 244, 179)
MOUNTAIN_COLORS = {1: (76, 150, 76, 77), 2: (102, 178, 102, 128)}
PIPE_BODY = (92, 184, 92)
PIPE_EDGE = (45, 90, 45)
PIPE_CAP = (107, 200, 107)
PIPE_CAP_HEIGHT = 30
GRASS = (139, 195, 74)
GRASS_BLADE = (111, 160, 47)
GROUND_BASE = (222, 184, 135)
GROUND_STRIPE = (205, 133, 63)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
PANEL = (0, 0, 0, 160)
HITBOX_BIRD = (255, 0, 0)
HITBOX_PIPE = (0, 255, 0)

# 0 empty, 1 body, 2 pupil, 3 beak, 4 eye white, 5 wing
BIRD_PIXELS = [
    "00001111111000000",
    "00011111111110000",
    "00111111111444000",
    "01111111114424000",
    "11155511114444300",
    "11555551111113330",
    "11155511111113300",
    "01111111111111000",
    "00111111111110000",
    "00011111111100000",
    "00001111111000000",
    "00000111110000000",
]
BIRD_PALETTE = {
    "1": (255, 215, 0),
    "2": (0, 0, 0),
    "3": (255, 107, 53),
    "4": (255, 255, 255),
    "5": (240, 190, 0),
}


class Renderer:
    """
    Draws a FrameSnapshot onto a pygame surface. It never touches game state.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self._bird_frames = {}
        self._sky = None
        self._font = None
        self._small_font = None

    # --- helpers ---

    def _bird_surface(self, wing_frame: float) -> pygame.Surface:
        flap = 0 if wing_frame < 1.5 else 1
        if flap not in self._bird_frames:
            rows, cols = len(BIRD_PIXELS), len(BIRD_PIXELS[0])
            art = pygame.Surface((cols, rows + 1), pygame.SRCALPHA)
            wing = []
            for i, row in enumerate(BIRD_PIXELS):
                for j, px in enumerate(row):
                    if px == "0":
                        continue
                    if px == "5":
                        wing.append((j, i))
                        px = "1"
                    art.set_at((j, i), BIRD_PALETTE[px])
            # wing drops a row on the down-stroke
            for j, i in wing:
                art.set_at((j, i + flap), BIRD_PALETTE["5"])
            size = (self.config.bird.width, self.config.bird.height)
            self._bird_frames[flap] = pygame.transform.scale(art, size)
        return self._bird_frames[flap]

    def _fonts(self):
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.SysFont(None, 55)
            self._small_font = pygame.font.SysFont(None, 30)
        return self._font, self._small_font

    # --- world ---

    def draw(self, surface: pygame.Surface, snap: FrameSnapshot):
        cfg = self.config
        width, height = cfg.canvas.width, cfg.canvas.height
        ground_y = cfg.ground_line

        self._draw_sky(surface, width, ground_y)
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        self._draw_mountains(overlay, snap, width, ground_y)
        for cloud in snap.clouds:
            color = (255, 255, 255, int(255 * min(cloud.opacity, 1.0)))
            for dx, dy, scale in ((0, 0, 1.0), (0.7, -0.3, 0.8), (1.3, 0, 0.9)):
                center = (int(cloud.x + cloud.size * dx), int(cloud.y + cloud.size * dy))
                pygame.draw.circle(overlay, color, center, max(1, int(cloud.size * scale)))
        surface.blit(overlay, (0, 0))

        for pipe in snap.pipes:
            self._draw_pipe(surface, pipe.x, 0, pipe.width, pipe.top_height, top=True)
            bottom_y = pipe.top_height + pipe.gap
            self._draw_pipe(surface, pipe.x, bottom_y, pipe.width, ground_y - bottom_y, top=False)

        if snap.particles:
            sparks = pygame.Surface((width, height), pygame.SRCALPHA)
            for p in snap.particles:
                color = pygame.Color(p.color)
                color.a = max(0, min(255, int(255 * p.life)))
                pygame.draw.rect(sparks, color, pygame.Rect(int(p.x), int(p.y), int(p.size), int(p.size)))
            surface.blit(sparks, (0, 0))

        bird = snap.bird
        # canvas rotation is clockwise, pygame's is counter-clockwise
        sprite = pygame.transform.rotate(self._bird_surface(bird.wing_frame), -bird.rotation)
        surface.blit(sprite, sprite.get_rect(center=(bird.x + bird.width / 2, bird.y + bird.height / 2)))

        self._draw_ground(surface, snap, width, height, ground_y)

        if snap.show_hitboxes:
            left, top, right, bottom = bird.hitbox
            pygame.draw.rect(surface, HITBOX_BIRD, pygame.Rect(left, top, right - left, bottom - top), 2)
            for pipe in snap.pipes:
                bottom_y = pipe.top_height + pipe.gap
                pygame.draw.rect(surface, HITBOX_PIPE, pygame.Rect(pipe.x, 0, pipe.width, pipe.top_height), 2)
                pygame.draw.rect(surface, HITBOX_PIPE,
                                 pygame.Rect(pipe.x, bottom_y, pipe.width, ground_y - bottom_y), 2)

    def _draw_sky(self, surface, width, ground_y):
        if self._sky is None:
            self._sky = pygame.Surface((width, int(ground_y)))
            for y in range(int(ground_y)):
                t = y / max(1, ground_y - 1)
                color = [int(a + (b - a) * t) for a, b in zip(SKY_TOP, SKY_BOTTOM)]
                pygame.draw.line(self._sky, color, (0, y), (width, y))
            pygame.draw.circle(self._sky, SUN, (width - 50, 80), 25)
        surface.blit(self._sky, (0, 0))

    def _draw_mountains(self, overlay, snap, width, ground_y):
        for mountain in snap.mountains:
            points = []
            x = -mountain.offset
            while x < width + 100:
                peak = 100 + math.sin(x * 0.01) * 30
                points.append((x, ground_y - peak / mountain.layer))
                x += 80
            points += [(width, ground_y), (-mountain.offset, ground_y)]
            pygame.draw.polygon(overlay, MOUNTAIN_COLORS.get(mountain.layer, MOUNTAIN_COLORS[2]), points)

    def _draw_pipe(self, surface, x, y, width, height, top):
        if height <= 0:
            return
        body = pygame.Rect(int(x), int(y), int(width), int(math.ceil(height)))
        pygame.draw.rect(surface, PIPE_BODY, body)
        pygame.draw.rect(surface, PIPE_EDGE, body, 3)
        cap_y = y + height - PIPE_CAP_HEIGHT if top else y
        cap = pygame.Rect(int(x) - 5, int(cap_y), int(width) + 10, PIPE_CAP_HEIGHT)
        pygame.draw.rect(surface, PIPE_CAP, cap)
        pygame.draw.rect(surface, PIPE_EDGE, cap, 3)

    def _draw_ground(self, surface, snap, width, height, ground_y):
        pygame.draw.rect(surface, GROUND_BASE, pygame.Rect(0, ground_y, width, height - ground_y))
        pygame.draw.rect(surface, GRASS, pygame.Rect(0, ground_y, width, 20))
        scrolling = snap.phase == GamePhase.PLAYING
        blade_shift = snap.ground_offset % 8 if scrolling else 0
        for i in range(0, width + 8, 8):
            pygame.draw.rect(surface, GRASS_BLADE, pygame.Rect(i - blade_shift, ground_y, 2, 8))
        stripe_shift = snap.ground_offset % 40 if scrolling else 0
        for i in range(0, width + 40, 40):
            pygame.draw.rect(surface, GROUND_STRIPE, pygame.Rect(i - stripe_shift, ground_y + 20, 20, 8))
            pygame.draw.rect(surface, GROUND_STRIPE, pygame.Rect(i + 20 - stripe_shift, ground_y + 40, 20, 8))

    # --- HUD ---

    def _blit_centered(self, surface, font, text, y, color=WHITE):
        text_surf = font.render(text, True, color)
        shadow = font.render(text, True, BLACK)
        x = self.config.canvas.width // 2 - text_surf.get_width() // 2
        surface.blit(shadow, (x + 2, y + 2))
        surface.blit(text_surf, (x, y))

    def _panel(self, surface, height):
        cfg = self.config
        panel = pygame.Surface((cfg.canvas.width - 60, height), pygame.SRCALPHA)
        panel.fill(PANEL)
        surface.blit(panel, (30, cfg.canvas.height // 2 - height // 2 - 40))

    def draw_hud(self, surface: pygame.Surface, snap: FrameSnapshot):
        font, small = self._fonts()
        mid = self.config.canvas.height // 2
        if snap.phase == GamePhase.START:
            self._panel(surface, 180)
            self._blit_centered(surface, font, "Flappy Bird", mid - 110)
            self._blit_centered(surface, small, "SPACE / click to flap", mid - 50)
            self._blit_centered(surface, small, "P / ESC to pause", mid - 20)
            self._blit_centered(surface, small, f"Best: {snap.best_score}", mid + 10)
        elif snap.phase == GamePhase.PAUSED:
            self._blit_centered(surface, font, str(snap.score), 20)
            self._panel(surface, 100)
            self._blit_centered(surface, font, "Paused", mid - 80)
            self._blit_centered(surface, small, "Press P to resume", mid - 30)
        elif snap.phase == GamePhase.GAME_OVER:
            self._panel(surface, 200)
            self._blit_centered(surface, font, "Game Over", mid - 120)
            self._blit_centered(surface, small, f"Score: {snap.score}", mid - 60)
            self._blit_centered(surface, small, f"Best: {snap.best_score}", mid - 30)
            self._blit_centered(surface, small, "SPACE / click to restart", mid + 10)
        else:
            self._blit_centered(surface, font, str(snap.score), 20)
