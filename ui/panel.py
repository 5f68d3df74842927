"""Right panel: live stats, tick rate and injection sliders, clamp toggle, run controls, config dropdown."""

import pygame
from typing import Callable

import config
from ui import tooltips

FONT_SIZE = 16
TOOLTIP_FONT_SIZE = 19
TOOLTIP_SMALL_FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)
PANEL_BG = (24, 24, 24)

TICK_RATE_RANGE = (1, 60)
INJECT_EVERY_RANGE = (1, 30)


class ParamPanel:
    """State: params dict; draw and handle events. Step, Restart and config-load callbacks."""

    def __init__(
        self,
        rect: pygame.Rect,
        initial: dict,
        on_step: Callable[[], None],
        on_restart: Callable[[], None],
        on_load_config: Callable[[str], None] | None = None,
    ) -> None:
        self.rect = rect
        self.params = {
            "tick_rate": initial.get("tick_rate", 20),
            "inject_every": initial.get("inject_every", 5),
            "clamp_transfer": initial.get("clamp_transfer", False),
            "paused": initial.get("paused", False),
        }
        self.on_step = on_step
        self.on_restart = on_restart
        self.on_load_config = on_load_config
        self._selected_config: str | None = initial.get("selected_config")
        self._font = None
        self._slider_rects: dict = {}
        self._button_rects: dict = {}
        self._tooltip_rects: dict[str, pygame.Rect] = {}
        self._dragging: str | None = None
        self._config_dropdown_expanded = False
        self._config_dropdown_option_rects: list[tuple[str, pygame.Rect]] = []
        self._hover_tooltip_text = None
        self._tooltip_font = None
        self._tooltip_small_font = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def _ensure_tooltip_fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._tooltip_font is None:
            self._tooltip_font = pygame.font.Font(None, TOOLTIP_FONT_SIZE)
            self._tooltip_small_font = pygame.font.Font(None, TOOLTIP_SMALL_FONT_SIZE)
        return self._tooltip_font, self._tooltip_small_font

    def get_params(self) -> dict:
        return self.params.copy()

    def draw(self, surface: pygame.Surface, stats: dict, mouse_pos: tuple[int, int] = (-1, -1)) -> None:
        font = self._ensure_font()
        surface.fill(PANEL_BG, self.rect)
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18
        gap = 4
        self._slider_rects.clear()
        self._button_rects.clear()
        self._tooltip_rects.clear()

        slider_w = self.rect.width - 16 - 44  # leave 44px for value text
        slider_h = 12

        for text in (
            f"Tick: {stats.get('tick', 0)}",
            f"Volume: {stats.get('total_volume', 0.0):.2f}",
            f"Wet cells: {stats.get('wet_cells', 0)}",
        ):
            surface.blit(font.render(text, True, LABEL_COLOR), (x, y))
            y += line_h
        y += gap

        lo, hi = TICK_RATE_RANGE
        row_y = y
        surface.blit(font.render(f"Tick rate ({lo}–{hi})", True, LABEL_COLOR), (x, y))
        y += line_h
        sr = _draw_slider(surface, x, y, slider_w, slider_h, self.params["tick_rate"], lo, hi)
        _draw_slider_value(surface, font, x + slider_w + 4, y, str(self.params["tick_rate"]))
        self._slider_rects["tick_rate"] = (sr, lo, hi)
        self._tooltip_rects["tick_rate"] = pygame.Rect(x, row_y, self.rect.width - 16, line_h + slider_h + gap)
        y += slider_h + gap

        lo, hi = INJECT_EVERY_RANGE
        row_y = y
        surface.blit(font.render("Refill every N ticks", True, LABEL_COLOR), (x, y))
        y += line_h
        sr = _draw_slider(surface, x, y, slider_w, slider_h, self.params["inject_every"], lo, hi)
        _draw_slider_value(surface, font, x + slider_w + 4, y, str(self.params["inject_every"]))
        self._slider_rects["inject_every"] = (sr, lo, hi)
        self._tooltip_rects["inject_every"] = pygame.Rect(x, row_y, self.rect.width - 16, line_h + slider_h + gap)
        y += slider_h + gap

        box = pygame.Rect(x, y + 2, 14, 14)
        pygame.draw.rect(surface, KNOB_COLOR if self.params["clamp_transfer"] else SLIDER_COLOR, box)
        pygame.draw.rect(surface, LABEL_COLOR, box, 1)
        surface.blit(font.render("Clamp transfer", True, LABEL_COLOR), (x + 18, y + 2))
        self._button_rects["clamp_transfer"] = box.union(pygame.Rect(x, y, 18 + font.size("Clamp transfer")[0], 18))
        self._tooltip_rects["clamp_transfer"] = self._button_rects["clamp_transfer"]
        y += 18 + gap * 2

        # Start / Pause, Step and Restart side by side
        btn_h = 26
        for key, text, w in (
            ("pause", "Resume" if self.params["paused"] else "Pause", 70),
            ("step", "Step", 50),
            ("restart", "Restart", 70),
        ):
            btn = pygame.Rect(x, y, w, btn_h)
            pygame.draw.rect(surface, BUTTON_HOVER if btn.collidepoint(mouse_pos) else BUTTON_COLOR, btn)
            surface.blit(font.render(text, True, LABEL_COLOR), (btn.x + 6, btn.y + 6))
            self._button_rects[key] = btn
            x += w + 4
        x = self.rect.x + 8
        y += btn_h + gap * 2

        # Config dropdown (files in configs/)
        surface.blit(font.render("Config", True, LABEL_COLOR), (x, y))
        y += line_h
        drop_w, drop_h = min(200, self.rect.width - 16), 18
        self._config_dropdown_rect = pygame.Rect(x, y, drop_w, drop_h)
        pygame.draw.rect(surface, SLIDER_COLOR, self._config_dropdown_rect)
        pygame.draw.polygon(surface, LABEL_COLOR, [(x + drop_w - 12, y + 4), (x + drop_w - 6, y + 4), (x + drop_w - 9, y + 11)])
        current = self._selected_config or "defaults"
        surface.blit(font.render(current[:28], True, LABEL_COLOR), (x + 4, y + 2))
        y += drop_h + gap
        self._config_dropdown_option_rects.clear()
        if self._config_dropdown_expanded:
            for name in config.list_configs():
                opt_rect = pygame.Rect(x, y, drop_w, drop_h)
                pygame.draw.rect(surface, BUTTON_HOVER if opt_rect.collidepoint(mouse_pos) else BUTTON_COLOR, opt_rect)
                surface.blit(font.render(name[:28], True, LABEL_COLOR), (opt_rect.x + 4, opt_rect.y + 2))
                self._config_dropdown_option_rects.append((name, opt_rect))
                y += drop_h + 1

    def update_hover_tooltip(self, pos: tuple[int, int]) -> None:
        self._hover_tooltip_text = None
        for key, r in self._tooltip_rects.items():
            if r.collidepoint(pos):
                self._hover_tooltip_text = tooltips.PARAM_TOOLTIPS.get(key)
                return

    def draw_tooltip(self, surface: pygame.Surface, mouse_pos: tuple[int, int]) -> None:
        tf, sf = self._ensure_tooltip_fonts()
        tooltips.draw_tooltip(surface, tf, sf, self._hover_tooltip_text, mouse_pos)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(self, "_config_dropdown_rect", None) and self._config_dropdown_rect.collidepoint(event.pos):
                self._config_dropdown_expanded = not self._config_dropdown_expanded
                return True
            for name, opt_rect in self._config_dropdown_option_rects:
                if opt_rect.collidepoint(event.pos):
                    self._selected_config = name
                    self._config_dropdown_expanded = False
                    if self.on_load_config:
                        self.on_load_config(name)
                    return True
            self._config_dropdown_expanded = False
            for key, (slider_rect, lo, hi) in self._slider_rects.items():
                if slider_rect.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, slider_rect, lo, hi)
                    return True
            for key, btn_rect in self._button_rects.items():
                if btn_rect.collidepoint(event.pos):
                    if key == "pause":
                        self.params["paused"] = not self.params["paused"]
                    elif key == "step" and self.params["paused"]:
                        self.on_step()
                    elif key == "restart":
                        self.on_restart()
                    elif key == "clamp_transfer":
                        self.params["clamp_transfer"] = not self.params["clamp_transfer"]
                    return True
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.params["paused"] = not self.params["paused"]
                return True
            if event.key == pygame.K_RIGHT and self.params["paused"]:
                self.on_step()
                return True
            if event.key == pygame.K_r:
                self.on_restart()
                return True
        elif event.type == pygame.MOUSEBUTTONUP:
            self._dragging = None
        elif event.type == pygame.MOUSEMOTION:
            self.update_hover_tooltip(event.pos)
            if self._dragging is not None and self._dragging in self._slider_rects:
                sr, lo, hi = self._slider_rects[self._dragging]
                self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
                return True
        return False

    def apply_config(self, cfg: dict) -> None:
        """Load a config dict into panel params (e.g. after picking a config from the dropdown)."""
        self.params["tick_rate"] = cfg.get("tick_rate", self.params["tick_rate"])
        self.params["inject_every"] = cfg.get("sources", {}).get("every", self.params["inject_every"])
        self.params["clamp_transfer"] = cfg.get("clamp_transfer", self.params["clamp_transfer"])

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x) / max(1, slider_rect.width - 8)
        t = max(0, min(1, t))
        self.params[key] = int(lo + t * (hi - lo))


def _draw_slider(
    surface: pygame.Surface, x: int, y: int, w: int, h: int, value: int, vmin: int, vmax: int
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    t = (value - vmin) / max(1, vmax - vmin)
    knob_x = x + 4 + int(t * (w - 8))
    pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, 8, h))
    return rect


def _draw_slider_value(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, value_str: str
) -> None:
    text = font.render(value_str, True, LABEL_COLOR)
    surface.blit(text, (x, y))
