import json
import logging
import math
import os
import random
import time

import numpy as np
import pygame

from stoogesort import NAME, stooge_steps

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH   = 1100
WINDOW_HEIGHT  = 680
FPS            = 120
MIN_ARRAY_SIZE = 4
MAX_ARRAY_SIZE = 128

BACKGROUND_COLOR = (5, 5, 10)
ACTIVE_COLOR     = (255, 60, 60)
LABEL_COLOR      = (140, 140, 160)
BAR_SPACING      = 1
FINISH_PAUSE_MS  = 1800

FREQ_LOW      = 24.0
FREQ_HIGH     = 480.0
SAMPLE_RATE   = 44100
CHUNK_SIZE    = 512
TRIGGER_MIN_INTERVAL = 0.035

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================
#
# Each swap plays one short tone, pitched by the value that moved.
#   wave = sin(2pi*f*t) + HARMONIC_BLEND * sin(4pi*f*t)
# shaped by a raised-cosine attack and release so notes start and
# stop without clicks. Tones are rendered once per value and cached.
TONE_SUSTAIN   = 0.18
TONE_ATTACK    = 0.012
TONE_RELEASE   = 0.060
HARMONIC_BLEND = 0.08
TONE_HEADROOM  = 0.85
MAX_VOICES     = 24

# JSON file next to the script; any key in DEFAULTS may be overridden
_SCRIPT_DIR   = os.path.dirname(os.path.abspath(__file__))
SETTINGS_JSON = os.path.join(_SCRIPT_DIR, "stoogesort_settings.json")

DEFAULTS = dict(
    size=32,
    speed=1.0,
    sound=True,
    freq_low=FREQ_LOW,
    freq_high=FREQ_HIGH,
    fps=FPS,
)

_COERCE = dict(size=int, speed=float, sound=bool, freq_low=float, freq_high=float, fps=int)

TWO_PI = 2.0 * math.pi

# ============================================================
# ========================= SETTINGS =========================
# ============================================================

def _clamp_settings(cfg):
    cfg["size"]  = max(MIN_ARRAY_SIZE, min(MAX_ARRAY_SIZE, cfg["size"]))
    cfg["speed"] = max(0.25, min(8.0, cfg["speed"]))
    cfg["fps"]   = max(1, cfg["fps"])
    if cfg["freq_low"] >= cfg["freq_high"]:
        logger.warning("freq_low %.1f >= freq_high %.1f, using defaults",
                       cfg["freq_low"], cfg["freq_high"])
        cfg["freq_low"], cfg["freq_high"] = FREQ_LOW, FREQ_HIGH
    return cfg


def merge_settings(base, overrides):
    """Return a copy of *base* with the known keys of *overrides* applied."""
    cfg = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in _COERCE:
            logger.warning("Ignoring unknown setting %r", key)
            continue
        try:
            cfg[key] = _COERCE[key](value)
        except (TypeError, ValueError):
            logger.warning("Ignoring bad value for %r: %r", key, value)
    return _clamp_settings(cfg)


def load_settings(path=None):
    """
    Read visualizer settings from JSON, falling back to DEFAULTS.

    A missing file is silent; an unreadable or malformed one is logged and
    ignored so the visualizer still starts.
    """
    path = path or SETTINGS_JSON
    if not os.path.exists(path):
        return merge_settings(DEFAULTS, {})
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read settings %s: %s", path, e)
        return merge_settings(DEFAULTS, {})
    if not isinstance(data, dict):
        logger.warning("Settings %s must hold a JSON object, got %s", path, type(data).__name__)
        return merge_settings(DEFAULTS, {})
    logger.debug("Loaded settings from %s", path)
    return merge_settings(DEFAULTS, data)

# ============================================================
# ====================== SOUND ENGINE ========================
# ============================================================

def value_to_freq(value, max_value, freq_low=FREQ_LOW, freq_high=FREQ_HIGH):
    """Map value linearly onto [freq_low, freq_high]."""
    return freq_low + (value / max_value) * (freq_high - freq_low)


def render_tone(freq, sample_rate=SAMPLE_RATE):
    """
    Synthesise one tone as an int16 stereo array of shape (samples, 2).

    Envelope:
      attack   env = 0.5 * (1 - cos(pi * t / A))
      sustain  env = 1
      release  env = 0.5 * (1 + cos(pi * (t - start) / R))
    """
    n       = int(TONE_SUSTAIN * sample_rate)
    attack  = max(1, int(TONE_ATTACK * sample_rate))
    release = max(1, int(TONE_RELEASE * sample_rate))
    t       = np.arange(n, dtype=np.float64)

    phases = t * (freq / sample_rate)
    wave   = np.sin(TWO_PI * phases) + HARMONIC_BLEND * np.sin(TWO_PI * 2.0 * phases)
    wave  /= 1.0 + HARMONIC_BLEND

    env = np.ones(n, dtype=np.float64)
    a = t < attack
    env[a] = 0.5 * (1.0 - np.cos(math.pi * t[a] / attack))
    start = n - release
    r = t >= start
    env[r] = 0.5 * (1.0 + np.cos(math.pi * (t[r] - start) / release))

    pcm = (np.clip(wave * env, -1.0, 1.0) * 32767 * TONE_HEADROOM).astype(np.int16)
    return np.column_stack((pcm, pcm))


class ToneBank:
    """Cached per-value tones played on pygame mixer channels."""

    def __init__(self, max_value, freq_low, freq_high):
        self.max_value = max_value
        self.freq_low  = freq_low
        self.freq_high = freq_high
        self._sounds   = {}
        self._last     = 0.0
        pygame.mixer.set_num_channels(MAX_VOICES)

    def _sound(self, value):
        snd = self._sounds.get(value)
        if snd is None:
            freq = value_to_freq(value, self.max_value, self.freq_low, self.freq_high)
            snd = pygame.mixer.Sound(buffer=render_tone(freq).tobytes())
            self._sounds[value] = snd
        return snd

    def trigger(self, value):
        now = time.monotonic()
        if now - self._last < TRIGGER_MIN_INTERVAL:
            return
        self._last = now
        # force=True steals the longest-playing channel once all are busy
        channel = pygame.mixer.find_channel(True)
        channel.play(self._sound(value))


def init_sound():
    pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, CHUNK_SIZE)
    try:
        pygame.mixer.init()
    except pygame.error as e:
        logger.warning("Audio unavailable, running silent: %s", e)
        return False
    return True

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

def value_to_color(value, max_value):
    r = value / max_value
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * (1 - (r - 0.75) * 4)), 0)


def draw_bars(screen, font, array, active_indices, label=""):
    screen.fill(BACKGROUND_COLOR)
    n  = len(array)
    bw = WINDOW_WIDTH / n
    for i, v in enumerate(array):
        h = (v / n) * (WINDOW_HEIGHT - 60)
        c = ACTIVE_COLOR if i in active_indices else value_to_color(v, n)
        pygame.draw.rect(screen, c, (i * bw, WINDOW_HEIGHT - h, bw - BAR_SPACING, h))
    if label:
        screen.blit(font.render(label, True, LABEL_COLOR), (12, 10))
    pygame.display.flip()

# ============================================================
# ========================= MAIN =============================
# ============================================================

def run(cfg):
    """
    Open a window and animate a stooge sort of a shuffled 1..size.

    Returns True when the sort ran to completion, False when the user
    closed the window or pressed ESC first.
    """
    size = cfg["size"]
    arr  = list(range(1, size + 1))
    random.shuffle(arr)

    pygame.init()
    tones = None
    if cfg["sound"] and init_sound():
        tones = ToneBank(size, cfg["freq_low"], cfg["freq_high"])

    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption(f"stoogesort - {NAME}")
    font  = pygame.font.SysFont("consolas", 18)
    clock = pygame.time.Clock()
    gen   = stooge_steps(arr, trace_compares=True)
    swaps = 0
    prev  = list(arr)

    logger.info("Visualizing %s on %d elements at %.2fx", NAME, size, cfg["speed"])
    try:
        while True:
            clock.tick(cfg["fps"] * cfg["speed"])
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    return False
                if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                    return False
            try:
                state, active = next(gen)
            except StopIteration:
                draw_bars(screen, font, arr, [], f"{NAME}  swaps: {swaps}  [SORTED]")
                logger.info("Sorted %d elements with %d swaps", size, swaps)
                pygame.time.wait(FINISH_PAUSE_MS)
                return True
            if state[active[0]] != prev[active[0]]:
                swaps += 1
                prev[active[0]], prev[active[1]] = state[active[0]], state[active[1]]
                if tones:
                    tones.trigger(state[active[0]])
            draw_bars(screen, font, state, active, f"{NAME}  swaps: {swaps}")
    finally:
        pygame.quit()
