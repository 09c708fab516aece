"""
Browser Launching.

`servers manage` opens a dashboard URL through a BrowserLauncher so the
side effect can be replaced in tests.
"""

import webbrowser
from typing import Protocol

from provisioner.core.exceptions import BrowserLaunchError


class BrowserLauncher(Protocol):
    def open(self, url: str) -> None: ...


class WebBrowserLauncher:
    """Open URLs in the user's default browser."""

    def open(self, url: str) -> None:
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            raise BrowserLaunchError(f"Could not launch browser for {url}: {e}") from e
        if not opened:
            raise BrowserLaunchError(f"No browser available to open {url}")
