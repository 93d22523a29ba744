from .driver import Driver
from .session import BrowserSession

__all__ = ["Driver", "BrowserSession"]
