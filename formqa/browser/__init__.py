from .config import DEFAULT_CONFIG, RunConfig, Timeouts, load_run_config
from .driver import Driver
from .session import BrowserSession

__all__ = ["DEFAULT_CONFIG", "RunConfig", "Timeouts", "load_run_config", "Driver", "BrowserSession"]
