"""Shared constants for the browser session and the editor commands."""

DEFAULT_URL = "https://strudel.cc"
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720
DEFAULT_BPM = 120

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# The editor produces audio from script, without any user gesture.
CHROMIUM_LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--autoplay-policy=no-user-gesture-required",
    "--enable-features=WebAudioBypassOutputBuffering",
    "--disable-features=AudioServiceOutOfProcess",
)

NAVIGATION_WAIT_UNTIL = "networkidle"
EDITOR_READY_SELECTOR = ".cm-editor"
EDITOR_VIEW_SELECTORS = (".cm-editor", ".cm-content")
TEXTAREA_SELECTOR = "textarea"
PLAYING_MARKER_SELECTOR = '[data-playing="true"]'

# Keyboard macros: (modifier, key).
PLAY_KEYS = ("Control", "Enter")
STOP_KEYS = ("Control", "Period")

BEATS_PER_CYCLE = 4
