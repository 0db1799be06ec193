"""Centralized browser launch configuration.

Shared by the automation runner and the inspector/recorder tools so every
session starts from the same launch arguments and context options.
"""

from playwright.async_api import ViewportSize

# Chromium launch arguments
# --disable-blink-features=AutomationControlled: Hide automation indicators
# --no-sandbox: Allow running as root inside containers
CHROMIUM_LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
]

# Removes the --enable-automation flag that signals automated browsing
CHROMIUM_IGNORE_DEFAULT_ARGS = ["--enable-automation"]

DEFAULT_VIEWPORT: ViewportSize = {"width": 1280, "height": 900}
